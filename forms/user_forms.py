from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, SelectField, SubmitField
from wtforms.validators import DataRequired, Email, Optional, Length

class UserForm(FlaskForm):
    name = StringField('Nombre', validators=[DataRequired()])
    email = StringField('Email', validators=[DataRequired(), Email()])
    role = SelectField('Rol', choices=[('user', 'Usuario'), ('admin', 'Administrador')], validators=[DataRequired()])
    # Obligatoria al crear; al editar, vacía conserva la actual
    password = PasswordField('Contraseña', validators=[Optional(), Length(min=6)])
    submit = SubmitField('Guardar')

    def to_document(self):
        doc = {
            'name': self.name.data,
            'email': self.email.data.lower(),
            'role': self.role.data,
        }
        if self.password.data:
            doc['password'] = self.password.data
        return doc
