from django.db import models
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.utils.text import slugify

SKU_PREFIX = 'PRD'
_BASE36 = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'


def _to_base36(value):
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return ''.join(reversed(digits)) or '0'


def generate_sku():
    """
    Генерирует SKU вида PRD-<время base36>-<3 случайных символа>.
    """
    stamp = _to_base36(int(timezone.now().timestamp() * 1000))
    suffix = get_random_string(3, allowed_chars=_BASE36)
    return f'{SKU_PREFIX}-{stamp}-{suffix}'


def _unique_slug(model, value, instance_pk=None, max_length=220):
    base = (slugify(value) or 'item')[:max_length - 8]
    candidate = base
    index = 2
    queryset = model.objects.all()
    if instance_pk:
        queryset = queryset.exclude(pk=instance_pk)
    while queryset.filter(slug=candidate).exists():
        candidate = f'{base}-{index}'
        index += 1
    return candidate


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True, verbose_name='Nombre')
    slug = models.SlugField(max_length=120, unique=True, blank=True)
    description = models.TextField(blank=True, verbose_name='Descripción')
    order = models.PositiveIntegerField(default=0, verbose_name='Orden')
    is_active = models.BooleanField(default=True, verbose_name='Activa')

    class Meta:
        ordering = ['order', 'name']
        verbose_name = 'Categoría'
        verbose_name_plural = 'Categorías'
        indexes = [
            models.Index(fields=['is_active'], name='idx_category_active'),
            models.Index(fields=['order'], name='idx_category_order'),
        ]

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = _unique_slug(Category, self.name, self.pk, max_length=120)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Product(models.Model):
    """
    Товар каталога.

    ``images`` хранит упорядоченный список URL (основные фото товара),
    ``sizes`` и ``colors``: подписи размеров и цветов. Фото по цветам
    живут в ``productcolors.ProductColorImage``.
    """
    name = models.CharField(max_length=200, verbose_name='Nombre')
    slug = models.SlugField(max_length=220, unique=True, blank=True)
    sku = models.CharField(max_length=50, unique=True, blank=True, null=True, verbose_name='SKU')
    description = models.TextField(blank=True, verbose_name='Descripción')
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        related_name='products',
        null=True,
        blank=True,
        verbose_name='Categoría',
    )
    brand = models.CharField(max_length=100, blank=True, verbose_name='Marca')
    price = models.DecimalField(max_digits=10, decimal_places=2, verbose_name='Precio (MXN)')
    images = models.JSONField(default=list, blank=True, verbose_name='Imágenes')
    sizes = models.JSONField(default=list, blank=True, verbose_name='Tallas')
    colors = models.JSONField(default=list, blank=True, verbose_name='Colores')
    is_active = models.BooleanField(default=True, verbose_name='Activo')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Creado')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Actualizado')

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Producto'
        verbose_name_plural = 'Productos'
        indexes = [
            models.Index(fields=['is_active', '-created_at'], name='idx_product_active_created'),
            models.Index(fields=['category', 'is_active'], name='idx_product_category_active'),
            models.Index(fields=['brand'], name='idx_product_brand'),
        ]

    def save(self, *args, **kwargs):
        # Пустой SKU генерируем автоматически
        if not (self.sku or '').strip():
            self.sku = generate_sku()
        else:
            self.sku = self.sku.strip()
        if not self.slug:
            self.slug = _unique_slug(Product, self.name, self.pk)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.name


class Brand(models.Model):
    name = models.CharField(max_length=100, unique=True, verbose_name='Nombre')
    description = models.TextField(blank=True, verbose_name='Descripción')
    logo = models.CharField(max_length=500, blank=True, verbose_name='Logo (URL)')
    is_active = models.BooleanField(default=True, verbose_name='Activa')
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Creada')

    class Meta:
        ordering = ['name']
        verbose_name = 'Marca'
        verbose_name_plural = 'Marcas'

    def __str__(self):
        return self.name


class Inventory(models.Model):
    """
    Остаток товара по паре размер/цвет.

    Пара (product, size, color) уникальна; ``reserved_quantity`` хранит
    единицы, уже обещанные заказам.
    """
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='inventory',
        verbose_name='Producto',
    )
    size = models.CharField(max_length=20, verbose_name='Talla')
    color = models.CharField(max_length=50, verbose_name='Color')
    quantity = models.PositiveIntegerField(default=0, verbose_name='Existencia')
    reserved_quantity = models.PositiveIntegerField(default=0, verbose_name='Apartado')
    updated_at = models.DateTimeField(auto_now=True, verbose_name='Actualizado')

    class Meta:
        ordering = ['product', 'size', 'color']
        verbose_name = 'Inventario'
        verbose_name_plural = 'Inventario'
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'size', 'color'],
                name='uniq_inventory_product_size_color',
            ),
        ]

    @property
    def available_quantity(self):
        return max(self.quantity - self.reserved_quantity, 0)

    def __str__(self):
        return f'{self.product} {self.size}/{self.color}: {self.quantity}'
