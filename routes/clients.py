from flask import Blueprint, render_template, redirect, url_for, request, abort, send_file
from flask_login import login_required
from datetime import datetime
from forms.client_forms import ClientForm
from services.collection import Collection, Where
from services import notifications
from services.export import clients_to_excel, XLSX_MIMETYPE
from services.listing import search, sort_docs, paginate
from services.reports import filter_by_date
from utils.errors import AppError

clients_bp = Blueprint('clients', __name__, url_prefix='/clients')

PAGE_SIZE = 10
SORT_FIELDS = ('name', 'email', 'phone', 'address')

def _parse_day(value):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        return None

@clients_bp.route('/')
@login_required
def list_clients():
    q = request.args.get('q', '').strip()
    sort = request.args.get('sort', 'name')
    if sort not in SORT_FIELDS:
        sort = 'name'
    order = 'desc' if request.args.get('order') == 'desc' else 'asc'
    page = request.args.get('page', 1, type=int)

    clients = search(Collection('clients').fetch_all(), q, ('name', 'email', 'phone'))
    pagination = paginate(sort_docs(clients, sort, order), page, PAGE_SIZE)
    return render_template('clients/list.html', title='Clientes', pagination=pagination,
                           q=q, sort=sort, order=order)

@clients_bp.route('/add', methods=['GET', 'POST'])
@login_required
def add_client():
    form = ClientForm()
    if form.validate_on_submit():
        try:
            Collection('clients').add(form.to_document())
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el cliente')
        else:
            notifications.success('Cliente añadido correctamente')
            return redirect(url_for('clients.list_clients'))
    return render_template('clients/form.html', title='Agregar cliente', form=form)

@clients_bp.route('/edit/<int:client_id>', methods=['GET', 'POST'])
@login_required
def edit_client(client_id):
    clients = Collection('clients')
    client = clients.fetch_one(client_id)
    if client is None:
        abort(404)
    form = ClientForm(data=client)
    if form.validate_on_submit():
        try:
            clients.update(client_id, form.to_document())
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el cliente')
        else:
            notifications.success('Cliente actualizado correctamente')
            return redirect(url_for('clients.list_clients'))
    return render_template('clients/form.html', title='Editar cliente', form=form, client=client)

@clients_bp.route('/delete/<int:client_id>', methods=['POST'])
@login_required
def delete_client(client_id):
    try:
        Collection('clients').remove(client_id)
    except AppError as e:
        notifications.error(e.message or 'Error al eliminar el cliente')
    else:
        notifications.success('Cliente eliminado correctamente')
    return redirect(url_for('clients.list_clients'))

@clients_bp.route('/<int:client_id>')
@login_required
def client_detail(client_id):
    client = Collection('clients').fetch_one(client_id)
    if client is None:
        abort(404)

    invoices = Collection('invoices').query([Where('client_id', '==', client_id)], order_by='-date')
    # El total gastado no depende de los filtros de la tabla
    total_spent = sum(inv['total'] for inv in invoices)

    q = request.args.get('q', '').strip()
    date_from = _parse_day(request.args.get('from'))
    date_to = _parse_day(request.args.get('to'))
    shown = search(invoices, q, ('invoice_number',))
    if date_from and date_to:
        shown = filter_by_date(shown, date_from, date_to)

    return render_template('clients/detail.html', title=client['name'], client=client,
                           invoices=shown, total_spent=total_spent, q=q,
                           date_from=date_from, date_to=date_to)

@clients_bp.route('/export')
@login_required
def export_clients():
    clients = sort_docs(Collection('clients').fetch_all(), 'name')
    output = clients_to_excel(clients)
    filename = f'clientes_{datetime.now().strftime("%Y%m%d_%H%M%S")}.xlsx'
    return send_file(output, as_attachment=True, download_name=filename, mimetype=XLSX_MIMETYPE)
