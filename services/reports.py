"""
Estadísticas del panel de control y de la página de reportes.

Todo se calcula en memoria sobre los documentos ya cargados de las
colecciones (facturas, productos y clientes).
"""
from collections import namedtuple
from datetime import date, datetime, time, timedelta

LOW_STOCK_THRESHOLD = 5
UNKNOWN_PRODUCT = 'Producto Desconocido'
UNKNOWN_CLIENT = 'Cliente Desconocido'

TIME_RANGES = {
    '7days': 7,
    '30days': 30,
    '90days': 90,
    'all': 0,
}

ReportData = namedtuple('ReportData', ['sales_data', 'top_products', 'customer_data', 'inventory_data'])
SalesTrend = namedtuple('SalesTrend', ['labels', 'values', 'total_sales', 'average_sale',
                                       'previous_period_sales', 'sales_growth'])


def parse_date(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    return datetime.fromisoformat(value)


def _end_of_day(value):
    # Un límite sin hora incluye el día completo
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.max)
    return parse_date(value)


def filter_by_date(invoices, date_from, date_to):
    start, end = parse_date(date_from), _end_of_day(date_to)
    return [inv for inv in invoices if start <= parse_date(inv['date']) <= end]


def sales_by_day(invoices):
    totals = {}
    for inv in invoices:
        day = parse_date(inv['date']).date().isoformat()
        totals[day] = totals.get(day, 0) + inv['total']
    return [{'date': day, 'total': totals[day]} for day in sorted(totals)]


def top_products(invoices, products, limit=10):
    names = {p['id']: p['name'] for p in products}
    sales = {}
    for inv in invoices:
        for item in inv['items']:
            entry = sales.setdefault(item['product_id'], {'quantity': 0, 'revenue': 0})
            entry['quantity'] += item['quantity']
            entry['revenue'] += item['quantity'] * item['price']

    result = [
        {'name': names.get(product_id, UNKNOWN_PRODUCT), **entry}
        for product_id, entry in sales.items()
    ]
    result.sort(key=lambda entry: entry['revenue'], reverse=True)
    return result[:limit]


def customer_totals(invoices, clients, limit=5):
    names = {c['id']: c['name'] for c in clients}
    totals = {}
    for inv in invoices:
        totals[inv['client_id']] = totals.get(inv['client_id'], 0) + inv['total']

    result = [
        {'name': names.get(client_id, UNKNOWN_CLIENT), 'value': value}
        for client_id, value in totals.items()
    ]
    result.sort(key=lambda entry: entry['value'], reverse=True)
    return result[:limit]


def inventory_status(products, limit=20):
    result = [
        {
            'name': p['name'],
            'stock': p.get('stock') or 0,
            'reorder_point': p.get('reorder_point') or 0,
        }
        for p in products
    ]
    result.sort(key=lambda entry: entry['stock'])
    return result[:limit]


def generate_report(invoices, products, clients, date_from, date_to):
    """
    Arma los cuatro bloques del reporte para un rango de fechas.

    El rango es inclusivo en ambos extremos; sólo las ventas se filtran por
    fecha, el estado de inventario refleja todos los productos.
    """
    filtered = filter_by_date(invoices, date_from, date_to)
    return ReportData(
        sales_data=sales_by_day(filtered),
        top_products=top_products(filtered, products),
        customer_data=customer_totals(filtered, clients),
        inventory_data=inventory_status(products),
    )


def dashboard_stats(products, clients, invoices, recent=5):
    return {
        'total_products': len(products),
        'total_clients': len(clients),
        'total_invoices': len(invoices),
        'total_sales': sum(inv['total'] for inv in invoices),
        'recent_products': products[-recent:],
        'recent_clients': clients[-recent:],
        'recent_invoices': invoices[-recent:],
    }


def low_stock(products, threshold=LOW_STOCK_THRESHOLD):
    return [p for p in products if (p.get('stock') or 0) <= threshold]


def sales_trend(invoices, time_range='30days', now=None):
    if time_range not in TIME_RANGES:
        raise ValueError(f'Unknown time range: {time_range}')
    now = now or datetime.utcnow()
    days = TIME_RANGES[time_range]

    if days:
        cutoff = now - timedelta(days=days)
        current = [inv for inv in invoices if parse_date(inv['date']) >= cutoff]
        previous_start = now - timedelta(days=days * 2)
        previous_sales = sum(
            inv['total'] for inv in invoices
            if previous_start <= parse_date(inv['date']) <= cutoff
        )
    else:
        current = list(invoices)
        previous_sales = 0

    daily = sales_by_day(current)
    total = sum(inv['total'] for inv in current)
    average = total / len(current) if current else 0
    growth = (total - previous_sales) / previous_sales * 100 if previous_sales else 0

    return SalesTrend(
        labels=[entry['date'] for entry in daily],
        values=[entry['total'] for entry in daily],
        total_sales=total,
        average_sale=average,
        previous_period_sales=previous_sales,
        sales_growth=growth,
    )


def filter_counts(products, filters):
    counts = {}
    for f in filters:
        term = f['term'].lower()
        counts[f['id']] = sum(1 for p in products if term in p['name'].lower())
    return counts
