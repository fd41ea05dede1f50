"""
XLSX price list with the caller's tier prices.
"""
from __future__ import annotations

import io
import logging
from typing import Iterable

from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

logger = logging.getLogger('storefront.price_list')

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

HEADERS = [
    'Categoría',
    'Producto',
    'SKU',
    'Marca',
    'Tallas',
    'Colores',
    'Precio lista',
    'Descuento (%)',
    'Tu precio',
]

MAX_COLUMN_WIDTH = 50


def price_list_filename():
    stamp = timezone.localdate().strftime('%Y%m%d')
    return f'lista_precios_{stamp}.xlsx'


def build_price_list(products: Iterable, pricing) -> bytes:
    """
    Render ``products`` into a one-sheet workbook and return its bytes.

    ``pricing`` is a `PricingContext`; each row shows the list price and
    the price after the caller's tier discount.
    """
    wb = Workbook()
    ws = wb.active
    ws.title = 'Lista de precios'

    header_font = Font(bold=True, size=14)
    table_header_font = Font(bold=True)
    header_fill = PatternFill(start_color='D3D3D3', end_color='D3D3D3', fill_type='solid')
    center_alignment = Alignment(horizontal='center', vertical='center')

    widths = [len(header) for header in HEADERS]

    def put(row, col, value, align=False):
        cell = ws.cell(row=row, column=col, value=value)
        if align:
            cell.alignment = center_alignment
        widths[col - 1] = max(widths[col - 1], len(str(value)) if value is not None else 0)
        return cell

    rows_written = 0
    tier_name = None
    row = 3
    for product in products:
        resolution = pricing.resolve(product.price)
        tier_name = tier_name or resolution.tier_name
        put(row, 1, product.category.name if product.category_id else '')
        put(row, 2, product.name)
        put(row, 3, product.sku or '')
        put(row, 4, product.brand or '')
        put(row, 5, ', '.join(product.sizes or []))
        put(row, 6, ', '.join(product.colors or []))
        put(row, 7, float(resolution.original_price), align=True).number_format = '#,##0.00'
        put(row, 8, float(resolution.discount_percent), align=True)
        put(row, 9, float(resolution.discounted_price), align=True).number_format = '#,##0.00'
        row += 1
        rows_written += 1

    # Заголовок (строка 1)
    last_column = get_column_letter(len(HEADERS))
    ws.merge_cells(f'A1:{last_column}1')
    title = f'Lista de precios {timezone.localdate():%d/%m/%Y}'
    if tier_name:
        title = f'{title} · Nivel {tier_name}'
    ws['A1'] = title
    ws['A1'].font = header_font
    ws['A1'].alignment = center_alignment

    for col, header in enumerate(HEADERS, 1):
        cell = ws.cell(row=2, column=col, value=header)
        cell.font = table_header_font
        cell.fill = header_fill
        cell.alignment = center_alignment

    for index, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(index)].width = min(width + 2, MAX_COLUMN_WIDTH)

    output = io.BytesIO()
    wb.save(output)
    logger.info('Price list generated: %s rows, tier=%s', rows_written, tier_name)
    return output.getvalue()
