from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

from .user import User
from .client import Client
from .product import Product
from .invoice import Invoice, InvoiceItem
from .employee import Employee
from .product_filter import ProductFilter

# Nombre de colección -> modelo
COLLECTIONS = {
    'clients': Client,
    'products': Product,
    'invoices': Invoice,
    'employees': Employee,
    'users': User,
    'product_filters': ProductFilter,
}
