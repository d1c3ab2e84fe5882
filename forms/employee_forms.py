from flask_wtf import FlaskForm
from wtforms import StringField, SelectMultipleField, SubmitField, widgets
from wtforms.validators import DataRequired, Email
from models.employee import PERMISSIONS

class MultiCheckboxField(SelectMultipleField):
    widget = widgets.ListWidget(prefix_label=False)
    option_widget = widgets.CheckboxInput()

class EmployeeForm(FlaskForm):
    name = StringField('Nombre', validators=[DataRequired()])
    email = StringField('Email', validators=[DataRequired(), Email()])
    position = StringField('Puesto', validators=[DataRequired()])
    permissions = MultiCheckboxField('Permisos', choices=[(p, p.replace('_', ' ')) for p in PERMISSIONS])
    submit = SubmitField('Guardar')

    def to_document(self):
        return {
            'name': self.name.data,
            'email': self.email.data,
            'position': self.position.data,
            'permissions': self.permissions.data or [],
        }
