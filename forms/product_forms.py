from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed
from wtforms import StringField, TextAreaField, IntegerField, FloatField, SubmitField
from wtforms.validators import DataRequired, NumberRange, Optional, Length

class ProductForm(FlaskForm):
    name = StringField('Nombre', validators=[DataRequired(), Length(max=128)])
    description = TextAreaField('Descripción', validators=[Optional()])
    price = FloatField('Precio', default=0, validators=[Optional(), NumberRange(min=0)])
    stock = IntegerField('Stock', default=0, validators=[Optional(), NumberRange(min=0)])
    reorder_point = IntegerField('Punto de reorden', default=0, validators=[Optional(), NumberRange(min=0)])
    barcode = StringField('Código de barras', validators=[Optional(), Length(max=64)])
    image = FileField('Imagen', validators=[FileAllowed(['png', 'jpg', 'jpeg', 'gif', 'webp'], 'Sólo imágenes')])
    submit = SubmitField('Guardar')

    def to_document(self):
        return {
            'name': self.name.data.strip(),
            'description': self.description.data or '',
            'price': self.price.data or 0,
            'stock': self.stock.data or 0,
            'reorder_point': self.reorder_point.data or 0,
            'barcode': (self.barcode.data or '').strip(),
        }

class FilterForm(FlaskForm):
    name = StringField('Nombre del filtro', validators=[DataRequired(), Length(max=64)])
    submit = SubmitField('Guardar')
