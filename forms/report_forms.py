from flask_wtf import FlaskForm
from wtforms import DateField, SubmitField
from wtforms.validators import Optional

class ReportForm(FlaskForm):
    class Meta:
        csrf = False

    date_from = DateField('Desde', validators=[Optional()])
    date_to = DateField('Hasta', validators=[Optional()])
    submit = SubmitField('Generar Reporte')

    def has_range(self):
        return bool(self.date_from.data and self.date_to.data)
