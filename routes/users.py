from flask import Blueprint, render_template, redirect, url_for, abort
from flask_login import login_required, current_user
from forms.user_forms import UserForm
from routes.auth import admin_required
from services.collection import Collection
from services import notifications
from services.listing import sort_docs
from utils.errors import AppError
from utils.logger import get_logger

users_bp = Blueprint('users', __name__, url_prefix='/users')
logger = get_logger('users')

@users_bp.route('/')
@login_required
@admin_required
def list_users():
    users = sort_docs(Collection('users').fetch_all(), 'name')
    return render_template('users/list.html', title='Usuarios', users=users)

@users_bp.route('/add', methods=['GET', 'POST'])
@login_required
@admin_required
def add_user():
    form = UserForm()
    if form.validate_on_submit():
        if not form.password.data:
            form.password.errors.append('La contraseña es obligatoria')
        else:
            try:
                user = Collection('users').add(form.to_document())
            except AppError as e:
                notifications.error(e.message or 'Error al guardar el usuario')
            else:
                logger.info('User %s created user %s', current_user.id, user['id'])
                notifications.success('Usuario creado correctamente')
                return redirect(url_for('users.list_users'))
    return render_template('users/form.html', title='Agregar usuario', form=form)

@users_bp.route('/edit/<int:user_id>', methods=['GET', 'POST'])
@login_required
@admin_required
def edit_user(user_id):
    users = Collection('users')
    user = users.fetch_one(user_id)
    if user is None:
        abort(404)
    form = UserForm(data=user)
    if form.validate_on_submit():
        try:
            users.update(user_id, form.to_document())
        except AppError as e:
            notifications.error(e.message or 'Error al guardar el usuario')
        else:
            notifications.success('Usuario actualizado correctamente')
            return redirect(url_for('users.list_users'))
    return render_template('users/form.html', title='Editar usuario', form=form, user=user)

@users_bp.route('/delete/<int:user_id>', methods=['POST'])
@login_required
@admin_required
def delete_user(user_id):
    if user_id == current_user.id:
        notifications.error('No puedes eliminar tu propio usuario')
        return redirect(url_for('users.list_users'))
    try:
        Collection('users').remove(user_id)
    except AppError as e:
        notifications.error(e.message or 'Error al eliminar el usuario')
    else:
        logger.info('User %s deleted user %s', current_user.id, user_id)
        notifications.success('Usuario eliminado correctamente')
    return redirect(url_for('users.list_users'))
