from django.db import models

from storefront.models import Product


class Color(models.Model):
    """
    Справочник цветов: отображаемое имя (уникально) и необязательный HEX.
    """
    name = models.CharField(max_length=100, unique=True, verbose_name='Nombre')
    hex_code = models.CharField(
        max_length=7,
        blank=True,
        null=True,
        help_text='#RRGGBB',
        verbose_name='Código HEX',
    )

    class Meta:
        ordering = ['name']
        verbose_name = 'Color'
        verbose_name_plural = 'Colores'

    def __str__(self):
        if self.hex_code:
            return f'{self.name} ({self.hex_code})'
        return self.name


class ProductColorImage(models.Model):
    """
    Фотографии товара для конкретного цвета.

    Одна запись на пару (товар, цвет); список ``images`` упорядочен.
    Пустой список означает «своих фото нет» и витрина показывает
    изображения самого товара.
    """
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='color_images')
    color = models.ForeignKey(Color, on_delete=models.CASCADE, related_name='product_images')
    images = models.JSONField(default=list, blank=True, verbose_name='Imágenes')
    is_primary = models.BooleanField(default=False, verbose_name='Principal')
    sort_order = models.PositiveIntegerField(default=0, verbose_name='Orden')

    class Meta:
        ordering = ['sort_order', 'id']
        unique_together = (('product', 'color'),)
        indexes = [
            models.Index(fields=['product', 'sort_order'], name='idx_colorimg_product_order'),
            models.Index(fields=['product', 'is_primary'], name='idx_colorimg_primary'),
        ]
        verbose_name = 'Imagen por color'
        verbose_name_plural = 'Imágenes por color'

    def __str__(self):
        return f'{self.product.name} [{self.color.name}]'
