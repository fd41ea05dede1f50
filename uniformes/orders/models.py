from decimal import Decimal

from django.conf import settings
from django.db import IntegrityError, models, transaction
from django.utils import timezone

from storefront.models import Product

NUMBER_SUFFIX_SPACE = 1_000_000


def generate_document_number(model, field, prefix):
    """
    Номер вида {prefix}-{год}-{6 цифр}: последние 6 цифр текущего времени
    в миллисекундах, при коллизии - следующий свободный.
    """
    now = timezone.now()
    suffix = int(now.timestamp() * 1000) % NUMBER_SUFFIX_SPACE
    for _ in range(NUMBER_SUFFIX_SPACE):
        number = f'{prefix}-{now.year}-{suffix:06d}'
        if not model.objects.filter(**{field: number}).exists():
            return number
        suffix = (suffix + 1) % NUMBER_SUFFIX_SPACE
    raise RuntimeError(f'No free {prefix} numbers left for {now.year}')


class NumberedDocument(models.Model):
    """
    База для заказов и коммерческих предложений: номер генерируется при
    первом сохранении, гонка за номер решается повтором.
    """
    NUMBER_FIELD = None
    NUMBER_PREFIX = None

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        attempts = 0
        while True:
            if not getattr(self, self.NUMBER_FIELD):
                setattr(self, self.NUMBER_FIELD, generate_document_number(
                    type(self), self.NUMBER_FIELD, self.NUMBER_PREFIX,
                ))
            try:
                with transaction.atomic():
                    super().save(*args, **kwargs)
                break
            except IntegrityError:
                attempts += 1
                if attempts >= 5:
                    raise
                # сбросим номер и попробуем ещё раз
                setattr(self, self.NUMBER_FIELD, '')


class Quote(NumberedDocument):
    NUMBER_FIELD = 'quote_number'
    NUMBER_PREFIX = 'COT'

    URGENCY_CHOICES = [
        ('normal', 'Normal'),
        ('urgent', 'Urgente'),
        ('very_urgent', 'Muy urgente'),
    ]
    STATUS_CHOICES = [
        ('pending', 'Pendiente'),
        ('sent', 'Enviada'),
        ('accepted', 'Aceptada'),
        ('expired', 'Vencida'),
    ]

    quote_number = models.CharField(max_length=50, unique=True, blank=True)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='quotes',
        null=True,
        blank=True,
    )
    customer_name = models.CharField(max_length=200, blank=True, verbose_name='Cliente')
    customer_email = models.EmailField(blank=True, verbose_name='Email')
    customer_phone = models.CharField(max_length=32, blank=True, verbose_name='Teléfono')
    customer_company = models.CharField(max_length=200, blank=True, verbose_name='Empresa')
    company_type_name = models.CharField(max_length=100, blank=True, verbose_name='Nivel de precios')
    urgency = models.CharField(max_length=20, choices=URGENCY_CHOICES, default='normal', verbose_name='Urgencia')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', verbose_name='Estado')
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    notes = models.TextField(blank=True, verbose_name='Notas')
    preferred_delivery_date = models.DateField(null=True, blank=True, verbose_name='Entrega deseada')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Cotización'
        verbose_name_plural = 'Cotizaciones'
        indexes = [
            models.Index(fields=['customer', '-created_at'], name='idx_quote_customer_created'),
            models.Index(fields=['status', '-created_at'], name='idx_quote_status_created'),
        ]

    def __str__(self):
        return f'Quote {self.quote_number} - {self.get_status_display()}'


class QuoteItem(models.Model):
    quote = models.ForeignKey(Quote, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        related_name='quote_items',
        null=True,
        blank=True,
    )
    product_name = models.CharField(max_length=200)
    size = models.CharField(max_length=20, blank=True)
    color = models.CharField(max_length=50, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    original_unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount_percent = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'))
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f'{self.product_name} × {self.quantity}'


class Order(NumberedDocument):
    NUMBER_FIELD = 'order_number'
    NUMBER_PREFIX = 'UL'

    STATUS_CHOICES = [
        ('pending', 'Pendiente'),
        ('processing', 'En proceso'),
        ('shipped', 'Enviado'),
        ('delivered', 'Entregado'),
        ('cancelled', 'Cancelado'),
    ]

    order_number = models.CharField(max_length=50, unique=True, blank=True)
    customer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='orders',
        null=True,
        blank=True,
    )
    customer_name = models.CharField(max_length=200, blank=True, verbose_name='Cliente')
    customer_email = models.EmailField(blank=True, verbose_name='Email')
    customer_phone = models.CharField(max_length=32, blank=True, verbose_name='Teléfono')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', verbose_name='Estado')
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    tax = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2)
    shipping_address = models.JSONField(null=True, blank=True, verbose_name='Dirección de envío')
    notes = models.TextField(blank=True, verbose_name='Notas')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        indexes = [
            models.Index(fields=['-created_at'], name='idx_order_created_desc'),
            models.Index(fields=['status', '-created_at'], name='idx_order_status_created'),
            models.Index(fields=['customer', '-created_at'], name='idx_order_customer_created'),
        ]

    def __str__(self):
        return f'Order {self.order_number} - {self.get_status_display()}'


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        related_name='order_items',
        null=True,
        blank=True,
    )
    product_name = models.CharField(max_length=200)
    size = models.CharField(max_length=20, blank=True)
    color = models.CharField(max_length=50, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f'{self.product_name} × {self.quantity}'
