import io

import pandas as pd

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _write_sheet(writer, df, sheet_name, widths, header_format, money_columns=()):
    df.to_excel(writer, sheet_name=sheet_name, index=False)
    worksheet = writer.sheets[sheet_name]
    for col_num, value in enumerate(df.columns.values):
        worksheet.write(0, col_num, value, header_format)
    money_format = writer.book.add_format({'num_format': '$#,##0.00', 'border': 1})
    for col_num, width in enumerate(widths):
        worksheet.set_column(col_num, col_num, width, money_format if col_num in money_columns else None)


def _header_format(workbook):
    return workbook.add_format({
        'bold': True,
        'text_wrap': True,
        'valign': 'top',
        'fg_color': '#D7E4BC',
        'border': 1,
        'align': 'center',
    })


def report_to_excel(report):
    """Exporta las cuatro secciones del reporte, una hoja por sección."""
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        header_format = _header_format(writer.book)

        df_sales = pd.DataFrame(
            [[entry['date'], entry['total']] for entry in report.sales_data],
            columns=['Fecha', 'Total'],
        )
        _write_sheet(writer, df_sales, 'Resumen de Ventas', [15, 15], header_format, money_columns=(1,))

        df_products = pd.DataFrame(
            [[entry['name'], entry['quantity'], entry['revenue']] for entry in report.top_products],
            columns=['Producto', 'Cantidad', 'Ingresos'],
        )
        _write_sheet(writer, df_products, 'Productos Más Vendidos', [30, 12, 15], header_format, money_columns=(2,))

        df_customers = pd.DataFrame(
            [[entry['name'], entry['value']] for entry in report.customer_data],
            columns=['Cliente', 'Ventas Totales'],
        )
        _write_sheet(writer, df_customers, 'Análisis de Clientes', [30, 15], header_format, money_columns=(1,))

        df_inventory = pd.DataFrame(
            [[entry['name'], entry['stock'], entry['reorder_point']] for entry in report.inventory_data],
            columns=['Producto', 'Stock Actual', 'Punto de Reorden'],
        )
        _write_sheet(writer, df_inventory, 'Estado del Inventario', [30, 15, 18], header_format)

    output.seek(0)
    return output


def clients_to_excel(clients):
    output = io.BytesIO()
    df = pd.DataFrame(
        [[c['name'], c.get('email') or '', c.get('phone') or '', c.get('address') or ''] for c in clients],
        columns=['Nombre', 'Email', 'Teléfono', 'Dirección'],
    )
    with pd.ExcelWriter(output, engine='xlsxwriter') as writer:
        _write_sheet(writer, df, 'Clientes', [30, 30, 18, 40], _header_format(writer.book))
    output.seek(0)
    return output
