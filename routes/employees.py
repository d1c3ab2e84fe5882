from flask import Blueprint, render_template, redirect, url_for, abort
from flask_login import login_required
from forms.employee_forms import EmployeeForm
from models.employee import PERMISSIONS
from routes.auth import admin_required
from services.collection import Collection
from services import notifications
from services.listing import sort_docs
from utils.errors import AppError

employees_bp = Blueprint('employees', __name__, url_prefix='/employees')

@employees_bp.route('/')
@login_required
@admin_required
def list_employees():
    employees = sort_docs(Collection('employees').fetch_all(), 'name')
    return render_template('employees/list.html', title='Empleados', employees=employees)

@employees_bp.route('/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_employee():
    form = EmployeeForm()
    if form.validate_on_submit():
        try:
            Collection('employees').add(form.to_document())
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el empleado')
        else:
            notifications.success('Empleado añadido correctamente')
            return redirect(url_for('employees.list_employees'))
    return render_template('employees/form.html', title='Agregar empleado', form=form, permissions=PERMISSIONS)

@employees_bp.route('/edit/<int:employee_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_employee(employee_id):
    employees = Collection('employees')
    employee = employees.fetch_one(employee_id)
    if employee is None:
        abort(404)
    form = EmployeeForm(data=employee)
    if form.validate_on_submit():
        try:
            employees.update(employee_id, form.to_document())
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el empleado')
        else:
            notifications.success('Empleado actualizado correctamente')
            return redirect(url_for('employees.list_employees'))
    return render_template('employees/form.html', title='Editar empleado', form=form,
                           employee=employee, permissions=PERMISSIONS)

@employees_bp.route('/delete/<int:employee_id>', methods=['POST'])
@login_required
@admin_required
def delete_employee(employee_id):
    try:
        Collection('employees').remove(employee_id)
    except AppError as e:
        notifications.error(e.message or 'Error al eliminar el empleado')
    else:
        notifications.success('Empleado eliminado correctamente')
    return redirect(url_for('employees.list_employees'))
