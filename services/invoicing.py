import time
from datetime import datetime

from utils.errors import AppError

MISSING_CLIENT = 'Por favor, seleccione un cliente'
MISSING_ITEMS = 'Por favor, añada al menos un producto'


def generate_invoice_number():
    return f'INV-{int(time.time() * 1000)}'


class InvoiceDraft:
    """Factura en preparación: cliente seleccionado y líneas de productos."""

    def __init__(self, client_id=None):
        self.client_id = client_id
        self.items = []

    def _find(self, product_id):
        for item in self.items:
            if item['product_id'] == product_id:
                return item
        return None

    def add_product(self, product):
        item = self._find(product['id'])
        if item:
            item['quantity'] += 1
        else:
            self.items.append({
                'product_id': product['id'],
                'product_name': product['name'],
                'quantity': 1,
                'price': product.get('price') or 0,
            })

    def update_quantity(self, product_id, quantity):
        if quantity < 1:
            self.items = [item for item in self.items if item['product_id'] != product_id]
            return
        item = self._find(product_id)
        if item:
            item['quantity'] = quantity

    def total(self):
        return sum(item['quantity'] * item['price'] for item in self.items)

    def missing_details(self):
        if not self.client_id:
            return MISSING_CLIENT
        if not self.items:
            return MISSING_ITEMS
        return None

    def build(self, client):
        missing = self.missing_details()
        if missing:
            raise AppError(missing, 'MISSING_DETAILS', 400)
        return {
            'invoice_number': generate_invoice_number(),
            'client_id': self.client_id,
            'client': dict(client),
            'date': datetime.utcnow().isoformat(),
            'items': [dict(item) for item in self.items],
            'total': self.total(),
        }


def find_by_barcode(products, code):
    for product in products:
        if product.get('barcode') and product['barcode'] == code:
            return product
    return None


def search_products(products, term):
    term = (term or '').lower()
    return [
        p for p in products
        if term in p['name'].lower()
        or term in (p.get('barcode') or '').lower()
        or term in (p.get('description') or '').lower()
    ]
