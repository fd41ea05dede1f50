from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models.signals import post_save
from django.dispatch import receiver


class CompanyType(models.Model):
    """
    Ценовой уровень (тип компании) со скидкой в процентах.

    Пустая или нулевая скидка означает «без скидки».
    """
    name = models.CharField(max_length=100, unique=True, verbose_name='Nombre')
    description = models.TextField(blank=True, verbose_name='Descripción')
    discount_percentage = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        verbose_name='Descuento (%)',
    )
    is_active = models.BooleanField(default=True, verbose_name='Activo')
    sort_order = models.PositiveIntegerField(default=0, verbose_name='Orden')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['sort_order', 'name']
        verbose_name = 'Tipo de empresa'
        verbose_name_plural = 'Tipos de empresa'

    def __str__(self):
        if self.discount_percentage:
            return f'{self.name} (-{self.discount_percentage}%)'
        return self.name


class Company(models.Model):
    name = models.CharField(max_length=200, verbose_name='Nombre')
    contact_name = models.CharField(max_length=200, blank=True, verbose_name='Contacto')
    email = models.EmailField(blank=True, verbose_name='Email')
    phone = models.CharField(max_length=32, blank=True, verbose_name='Teléfono')
    tax_id = models.CharField(max_length=20, blank=True, verbose_name='RFC')
    address = models.TextField(blank=True, verbose_name='Dirección')
    company_type = models.ForeignKey(
        CompanyType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='companies',
        verbose_name='Tipo de empresa',
    )
    is_active = models.BooleanField(default=True, verbose_name='Activa')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Empresa'
        verbose_name_plural = 'Empresas'
        indexes = [
            models.Index(fields=['is_active'], name='idx_company_active'),
        ]

    def __str__(self):
        return self.name


class CustomerProfile(models.Model):
    ROLE_CUSTOMER = 'customer'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_CUSTOMER, 'Cliente'),
        (ROLE_ADMIN, 'Administrador'),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='customer_profile')
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER, verbose_name='Rol')
    company = models.ForeignKey(
        Company,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='customers',
        verbose_name='Empresa',
    )
    company_name = models.CharField(max_length=200, blank=True, verbose_name='Empresa (declarada)')
    phone = models.CharField(max_length=32, blank=True, verbose_name='Teléfono')
    address = models.TextField(blank=True, verbose_name='Dirección')
    city = models.CharField(max_length=100, blank=True, verbose_name='Ciudad')
    state = models.CharField(max_length=100, blank=True, verbose_name='Estado')
    zip_code = models.CharField(max_length=10, blank=True, verbose_name='Código postal')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Perfil de cliente'
        verbose_name_plural = 'Perfiles de cliente'
        indexes = [
            models.Index(fields=['role'], name='idx_profile_role'),
        ]

    @property
    def is_admin(self):
        return self.role == self.ROLE_ADMIN

    def __str__(self):
        return f'Profile for {self.user.username}'


@receiver(post_save, sender=User)
def create_customer_profile(sender, instance, created, **kwargs):
    """
    Создает CustomerProfile для нового пользователя.

    Персонал Django (is_staff / is_superuser) получает роль администратора.
    """
    if created:
        role = CustomerProfile.ROLE_ADMIN if (instance.is_staff or instance.is_superuser) else CustomerProfile.ROLE_CUSTOMER
        CustomerProfile.objects.get_or_create(user=instance, defaults={'role': role})
