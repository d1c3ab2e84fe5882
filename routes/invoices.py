from flask import Blueprint, render_template, request, jsonify, abort
from flask_login import login_required, current_user
from services.collection import Collection
from services.invoicing import InvoiceDraft
from services.listing import sort_docs
from services.reports import parse_date
from utils.errors import AppError
from utils.logger import get_logger

invoices_bp = Blueprint('invoices', __name__, url_prefix='/invoices')
logger = get_logger('invoices')

SORT_KEYS = {
    'invoice_number': lambda inv: inv['invoice_number'],
    'date': lambda inv: parse_date(inv['date']),
    'total': lambda inv: inv['total'],
    'client_name': lambda inv: (inv.get('client') or {}).get('name', '').lower(),
}

@invoices_bp.route('/')
@login_required
def list_invoices():
    sort = request.args.get('sort', 'date')
    if sort not in SORT_KEYS:
        sort = 'date'
    default_order = 'desc' if sort == 'date' else 'asc'
    order = request.args.get('order', default_order)
    invoices = sort_docs(Collection('invoices').fetch_all(), sort, order, key=SORT_KEYS[sort])
    return render_template('invoices/list.html', title='Facturas', invoices=invoices, sort=sort, order=order)

@invoices_bp.route('/new')
@login_required
def new_invoice():
    clients = sort_docs(Collection('clients').fetch_all(), 'name')
    products = Collection('products').fetch_all()
    return render_template('invoices/new.html', title='Nueva factura', clients=clients, products=products)

@invoices_bp.route('/api/checkout', methods=['POST'])
@login_required
def api_checkout():
    data = request.get_json(silent=True) or {}
    products = {p['id']: p for p in Collection('products').fetch_all()}

    try:
        if not isinstance(data, dict) or not isinstance(data.get('items', []), list):
            raise TypeError('checkout body must be an object with an item list')
        client_id = int(data['client_id']) if data.get('client_id') else None

        # Las líneas repetidas de un mismo producto se suman
        quantities = {}
        for entry in data.get('items', []):
            if not isinstance(entry, dict):
                raise TypeError('invoice item must be an object')
            product_id = int(entry.get('product_id'))
            quantities[product_id] = quantities.get(product_id, 0) + int(entry.get('quantity', 1))

        draft = InvoiceDraft(client_id=client_id)
        for product_id, quantity in quantities.items():
            product = products.get(product_id)
            if product is None:
                raise AppError(f'Producto no encontrado (ID: {product_id})', 'NOT_FOUND', 400)
            draft.add_product(product)
            draft.update_quantity(product_id, quantity)

        client = Collection('clients').fetch_one(draft.client_id) if draft.client_id else None
        if draft.client_id and client is None:
            raise AppError('Cliente seleccionado no encontrado', 'NOT_FOUND', 400)

        invoice = Collection('invoices').add(draft.build(client))
    except AppError as e:
        return jsonify(e.to_dict()), e.status
    except (TypeError, ValueError):
        return jsonify({'success': False, 'code': 'INVALID_DATA', 'message': 'Datos de la factura no válidos'}), 400

    logger.info('User %s created invoice %s', current_user.id, invoice['invoice_number'])
    return jsonify({
        'success': True,
        'message': 'Factura guardada correctamente',
        'id': invoice['id'],
        'invoice_number': invoice['invoice_number'],
        'total': invoice['total'],
    }), 201

@invoices_bp.route('/<int:invoice_id>')
@login_required
def invoice_detail(invoice_id):
    invoice = Collection('invoices').fetch_one(invoice_id)
    if invoice is None:
        abort(404)
    return render_template('invoices/detail.html', title=invoice['invoice_number'], invoice=invoice)
