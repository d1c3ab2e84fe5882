from flask_wtf import FlaskForm
from wtforms import StringField, SubmitField
from wtforms.validators import DataRequired, Optional, Email, Length

class ClientForm(FlaskForm):
    name = StringField('Nombre', validators=[DataRequired(), Length(max=128)])
    email = StringField('Email', validators=[Optional(), Email()])
    phone = StringField('Teléfono', validators=[Optional(), Length(max=32)])
    address = StringField('Dirección', validators=[Optional(), Length(max=255)])
    submit = SubmitField('Guardar')

    def to_document(self):
        return {
            'name': self.name.data.strip(),
            'email': self.email.data or '',
            'phone': self.phone.data or '',
            'address': self.address.data or '',
        }
