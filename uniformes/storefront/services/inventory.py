"""
Остатки товара по размеру и цвету.
"""
import logging

from django.db import IntegrityError, transaction

from storefront.models import Inventory

logger = logging.getLogger(__name__)


def product_inventory(product):
    return list(product.inventory.all().order_by('size', 'color', 'id'))


def update_inventory(product, size, color, quantity):
    """
    Устанавливает остаток для пары размер/цвет, создавая строку при первом вызове.

    ``reserved_quantity`` существующей строки не трогаем.
    """
    size = size.strip()
    color = color.strip()
    try:
        with transaction.atomic():
            row, created = Inventory.objects.update_or_create(
                product=product,
                size=size,
                color=color,
                defaults={'quantity': quantity},
            )
    except IntegrityError:
        # Параллельный запрос успел создать ту же пару
        row = Inventory.objects.get(product=product, size=size, color=color)
        row.quantity = quantity
        row.save(update_fields=['quantity', 'updated_at'])
        created = False

    logger.info(
        'Inventory %s for product %s (%s/%s): %s',
        'created' if created else 'updated', product.pk, size, color, quantity,
    )
    return row
