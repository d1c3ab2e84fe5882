from flask import Blueprint, render_template, redirect, url_for, request, jsonify, abort
from flask_login import login_required, current_user
from forms.product_forms import ProductForm, FilterForm
from models.product_filter import DEFAULT_FILTERS
from services.collection import Collection, Where
from services import notifications
from services.invoicing import search_products
from services.listing import paginate
from services.reports import filter_counts
from services.storage import save_product_image
from utils.errors import AppError

products_bp = Blueprint('products', __name__, url_prefix='/products')

SEARCH_PAGE_SIZE = 12

def user_filters():
    """Filtros del usuario actual; la primera vez se crean los predeterminados."""
    filters = Collection('product_filters')
    docs = filters.query([Where('user_id', '==', current_user.id)], order_by='id')
    if not docs:
        docs = [filters.add({'user_id': current_user.id, 'name': name, 'term': term})
                for name, term in DEFAULT_FILTERS]
    return docs

def barcode_owner(barcode, exclude_id=None):
    if not barcode:
        return None
    matches = Collection('products').query([Where('barcode', '==', barcode)])
    for product in matches:
        if product['id'] != exclude_id:
            return product
    return None

@products_bp.route('/')
@login_required
def list_products():
    products = Collection('products').fetch_all()
    filters = user_filters()
    selected = request.args.get('filter', '').strip().lower()
    q = request.args.get('q', '').strip()

    shown = products
    if selected:
        shown = [p for p in shown if selected in p['name'].lower()]
    if q:
        shown = search_products(shown, q)

    return render_template('products/list.html', title='Productos', products=shown,
                           total=len(products), filters=filters,
                           counts=filter_counts(products, filters),
                           selected=selected, q=q, filter_form=FilterForm())

@products_bp.route('/add', methods=['GET', 'POST'])
@login_required
def add_product():
    form = ProductForm(barcode=request.args.get('barcode', ''))
    if form.validate_on_submit():
        data = form.to_document()
        existing = barcode_owner(data['barcode'])
        if existing:
            notifications.warning(f'Ya existe un producto con el código {data["barcode"]}: {existing["name"]}')
            return redirect(url_for('products.edit_product', product_id=existing['id']))
        try:
            if form.image.data:
                data['image_url'] = save_product_image(form.image.data)
            Collection('products').add(data)
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el producto')
        else:
            notifications.success('Producto añadido correctamente')
            return redirect(url_for('products.list_products'))
    return render_template('products/form.html', title='Agregar producto', form=form)

@products_bp.route('/edit/<int:product_id>', methods=['GET', 'POST'])
@login_required
def edit_product(product_id):
    products = Collection('products')
    product = products.fetch_one(product_id)
    if product is None:
        abort(404)
    form = ProductForm(data=product)
    if form.validate_on_submit():
        data = form.to_document()
        existing = barcode_owner(data['barcode'], exclude_id=product_id)
        if existing:
            notifications.error(f'El código {data["barcode"]} ya pertenece a {existing["name"]}')
            return render_template('products/form.html', title='Editar producto', form=form, product=product)
        try:
            if form.image.data:
                data['image_url'] = save_product_image(form.image.data)
            products.update(product_id, data)
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el producto')
        else:
            notifications.success('Producto actualizado correctamente')
            return redirect(url_for('products.list_products'))
    return render_template('products/form.html', title='Editar producto', form=form, product=product)

@products_bp.route('/<int:product_id>')
@login_required
def product_detail(product_id):
    product = Collection('products').fetch_one(product_id)
    if product is None:
        abort(404)
    return render_template('products/detail.html', title=product['name'], product=product)

@products_bp.route('/delete/<int:product_id>', methods=['POST'])
@login_required
def delete_product(product_id):
    try:
        Collection('products').remove(product_id)
    except AppError as e:
        notifications.error(e.message or 'Error al eliminar el producto')
    else:
        notifications.success('Producto eliminado correctamente')
    return redirect(url_for('products.list_products'))

@products_bp.route('/filters/<int:filter_id>/rename', methods=['POST'])
@login_required
def rename_filter(filter_id):
    filters = Collection('product_filters')
    product_filter = filters.fetch_one(filter_id)
    if product_filter is None or product_filter['user_id'] != current_user.id:
        abort(404)
    form = FilterForm()
    if form.validate_on_submit():
        name = form.name.data.strip()
        filters.update(filter_id, {'name': name, 'term': name.lower()})
        notifications.success('Filtro actualizado')
    else:
        notifications.error('El nombre del filtro es obligatorio')
    return redirect(url_for('products.list_products'))

@products_bp.route('/api/barcode/<code>')
@login_required
def api_barcode(code):
    product = barcode_owner(code)
    if product is None:
        return jsonify({'success': False, 'message': 'Producto no encontrado'}), 404
    return jsonify({'success': True, 'product': product})

@products_bp.route('/api/search')
@login_required
def api_search():
    products = Collection('products').fetch_all()
    page = request.args.get('page', 1, type=int)
    result = paginate(search_products(products, request.args.get('q', '')), page, SEARCH_PAGE_SIZE)
    return jsonify(result)
