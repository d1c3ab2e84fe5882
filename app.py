from flask import Flask, render_template, request, redirect, url_for, flash, jsonify, send_from_directory
from flask_login import LoginManager, login_required, current_user
from flask_babel import Babel, format_decimal, format_date
from flask_wtf.csrf import CSRFProtect
from config import Config
from models import db
from models.user import User
from services.collection import Collection
from services.reports import dashboard_stats, low_stock, sales_trend, parse_date
from utils.errors import AppError
from utils.logger import configure_logging

# Initialize extensions
login_manager = LoginManager()
babel = Babel()
csrf = CSRFProtect()

# (endpoint, etiqueta, roles); None significa cualquier usuario autenticado
NAV_ITEMS = [
    ('dashboard', 'Panel', None),
    ('products.list_products', 'Productos', None),
    ('clients.list_clients', 'Clientes', None),
    ('invoices.list_invoices', 'Facturas', None),
    ('employees.list_employees', 'Empleados', ('admin',)),
    ('users.list_users', 'Usuarios', ('admin',)),
    ('reports.index', 'Reportes', ('admin',)),
]

def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logger = configure_logging(app.config['LOG_LEVEL'], app.config['LOG_FILE'])

    db.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Por favor, inicie sesión para acceder a esta página'
    login_manager.login_message_category = 'warning'

    def get_locale():
        return app.config['BABEL_DEFAULT_LOCALE']
    babel.init_app(app, locale_selector=get_locale)

    # Flask-Login user loader
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Register Blueprints
    from routes.auth import auth_bp
    app.register_blueprint(auth_bp)
    from routes.products import products_bp
    app.register_blueprint(products_bp)
    from routes.clients import clients_bp
    app.register_blueprint(clients_bp)
    from routes.invoices import invoices_bp
    app.register_blueprint(invoices_bp)
    from routes.employees import employees_bp
    app.register_blueprint(employees_bp)
    from routes.users import users_bp
    app.register_blueprint(users_bp)
    from routes.reports import reports_bp
    app.register_blueprint(reports_bp)

    @app.route("/")
    @login_required
    def dashboard():
        products = Collection('products').fetch_all()
        clients = Collection('clients').fetch_all()
        invoices = Collection('invoices').query(order_by='date')

        time_range = request.args.get('range', '30days')
        try:
            trend = sales_trend(invoices, time_range)
        except ValueError:
            time_range = '30days'
            trend = sales_trend(invoices, time_range)

        return render_template('dashboard.html',
                               title='Panel',
                               stats=dashboard_stats(products, clients, invoices),
                               low_stock=low_stock(products, app.config['LOW_STOCK_THRESHOLD']),
                               trend=trend,
                               time_range=time_range)

    @app.route("/api/sales_trend")
    @login_required
    def api_sales_trend():
        invoices = Collection('invoices').fetch_all()
        try:
            trend = sales_trend(invoices, request.args.get('range', '30days'))
        except ValueError:
            return jsonify({'success': False, 'code': 'INVALID_RANGE', 'message': 'Rango no válido'}), 400
        return jsonify(trend._asdict())

    @app.route("/unauthorized")
    def unauthorized():
        return render_template('unauthorized.html', title='Acceso denegado'), 403

    @app.route("/uploads/<path:filename>")
    def uploaded_image(filename):
        return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    @app.errorhandler(AppError)
    def handle_app_error(error):
        if '/api/' in request.path:
            return jsonify(error.to_dict()), error.status
        flash(error.message, 'danger')
        return redirect(request.referrer or url_for('dashboard'))

    @app.context_processor
    def inject_navigation():
        items = []
        if current_user.is_authenticated:
            items = [(endpoint, label) for endpoint, label, roles in NAV_ITEMS
                     if roles is None or current_user.has_role(*roles)]
        return {'nav_items': items}

    @app.template_filter('money')
    def money(value):
        return format_decimal(value or 0, format='#,##0.00')

    @app.template_filter('fecha')
    def fecha(value):
        if not value:
            return ''
        return format_date(parse_date(value), format='medium')

    logger.info('Application created with %s', config_class.__name__)
    return app

if __name__ == "__main__":
    app = create_app()
    app.run(debug=True)
