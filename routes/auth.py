from flask import Blueprint, render_template, redirect, url_for, flash, request
from flask_login import login_user, logout_user, login_required, current_user
from functools import wraps
from forms.auth_forms import LoginForm
from models.user import User
from services import notifications
from utils.logger import get_logger

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')
logger = get_logger('auth')

# Decorador para restringir una vista a ciertos roles
def roles_required(*roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_role(*roles):
                flash('No tienes permisos para acceder a esta página', 'danger')
                return redirect(url_for('unauthorized'))
            return f(*args, **kwargs)
        return decorated_function
    return decorator

admin_required = roles_required('admin')

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('dashboard'))
    form = LoginForm()
    if form.validate_on_submit():
        user = User.query.filter_by(email=form.email.data.lower()).first()
        if user and user.check_password(form.password.data):
            login_user(user)
            logger.info('User %s logged in', user.id)
            next_url = request.args.get('next')
            if not next_url or not next_url.startswith('/') or next_url.startswith('//'):
                next_url = url_for('dashboard')
            return redirect(next_url)
        logger.warning('Failed login for %s', form.email.data)
        flash('Correo o contraseña incorrectos', 'danger')
    return render_template('auth/login.html', title='Iniciar sesión', form=form)

@auth_bp.route('/logout')
@login_required
def logout():
    logout_user()
    notifications.info('Sesión cerrada correctamente')
    return redirect(url_for('auth.login'))
