from flask import Blueprint, render_template, redirect, url_for, request, send_file
from flask_login import login_required
from forms.report_forms import ReportForm
from routes.auth import admin_required
from services.collection import Collection
from services import notifications
from services.export import report_to_excel, XLSX_MIMETYPE
from services.reports import generate_report

reports_bp = Blueprint('reports', __name__, url_prefix='/reports')

RANGE_REQUIRED = 'Por favor, seleccione un rango de fechas'

def _build_report(form):
    return generate_report(
        Collection('invoices').fetch_all(),
        Collection('products').fetch_all(),
        Collection('clients').fetch_all(),
        form.date_from.data,
        form.date_to.data,
    )

@reports_bp.route('/')
@login_required
@admin_required
def index():
    form = ReportForm(request.args)
    report = None
    if request.args:
        if form.validate() and form.has_range():
            report = _build_report(form)
        else:
            notifications.warning(RANGE_REQUIRED)
    return render_template('reports/index.html', title='Reportes', form=form, report=report)

@reports_bp.route('/export')
@login_required
@admin_required
def export():
    form = ReportForm(request.args)
    if not (form.validate() and form.has_range()):
        notifications.warning(RANGE_REQUIRED)
        return redirect(url_for('reports.index'))
    output = report_to_excel(_build_report(form))
    filename = f'reporte_{form.date_from.data:%Y-%m-%d}_{form.date_to.data:%Y-%m-%d}.xlsx'
    return send_file(output, as_attachment=True, download_name=filename, mimetype=XLSX_MIMETYPE)
