"""
Django admin configuration for accounts app.

Регистрация CompanyType, Company и профиля клиента в админ-панели.
"""
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User

from .models import Company, CompanyType, CustomerProfile


class CustomerProfileInline(admin.StackedInline):
    """Inline для отображения профиля клиента."""
    model = CustomerProfile
    can_delete = False
    verbose_name = 'Perfil de cliente'
    verbose_name_plural = 'Perfil'
    fields = (
        'role', 'company', 'company_name', 'phone',
        'address', 'city', 'state', 'zip_code',
    )
    autocomplete_fields = ('company',)


class UserAdmin(BaseUserAdmin):
    """Расширенная админка для пользователей."""
    inlines = (CustomerProfileInline,)
    list_display = ('username', 'email', 'first_name', 'last_name',
                    'is_staff', 'user_role', 'user_company', 'date_joined')
    list_filter = ('is_staff', 'is_superuser', 'is_active', 'customer_profile__role')

    def user_role(self, obj):
        profile = getattr(obj, 'customer_profile', None)
        return profile.get_role_display() if profile else '-'
    user_role.short_description = 'Rol'

    def user_company(self, obj):
        profile = getattr(obj, 'customer_profile', None)
        if profile and profile.company_id:
            return profile.company.name
        return '-'
    user_company.short_description = 'Empresa'


admin.site.unregister(User)
admin.site.register(User, UserAdmin)


@admin.register(CompanyType)
class CompanyTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'discount_percentage', 'is_active', 'sort_order')
    list_filter = ('is_active',)
    list_editable = ('sort_order',)
    search_fields = ('name',)


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ('name', 'company_type', 'contact_name', 'email', 'phone', 'is_active')
    list_filter = ('is_active', 'company_type')
    search_fields = ('name', 'contact_name', 'email', 'tax_id')
    list_select_related = ('company_type',)
