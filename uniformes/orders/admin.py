"""
Административная панель для заказов и коммерческих предложений
"""
from django.contrib import admin
from django.utils.html import format_html

from .models import Order, OrderItem, Quote, QuoteItem

STATUS_COLORS = {
    'pending': '#8b5cf6',
    'processing': '#f59e0b',
    'shipped': '#06b6d4',
    'delivered': '#10b981',
    'cancelled': '#ef4444',
    'sent': '#3b82f6',
    'accepted': '#10b981',
    'expired': '#6b7280',
}


def _status_badge(obj):
    return format_html(
        '<span style="background: {}; color: white; padding: 4px 12px; border-radius: 6px; font-size: 11px;">{}</span>',
        STATUS_COLORS.get(obj.status, '#6b7280'),
        obj.get_status_display(),
    )


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ('product', 'product_name', 'size', 'color', 'quantity', 'unit_price', 'total_price')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class QuoteItemInline(admin.TabularInline):
    model = QuoteItem
    extra = 0
    readonly_fields = (
        'product', 'product_name', 'size', 'color', 'quantity',
        'original_unit_price', 'discount_percent', 'unit_price', 'total',
    )
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ('order_number', 'customer_name', 'status_badge', 'total', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('order_number', 'customer_name', 'customer_email', 'customer__username')
    readonly_fields = ('order_number', 'subtotal', 'total', 'created_at', 'updated_at')
    inlines = [OrderItemInline]

    fieldsets = (
        ('Pedido', {
            'fields': ('order_number', 'customer', 'status', 'created_at', 'updated_at')
        }),
        ('Contacto', {
            'fields': ('customer_name', 'customer_email', 'customer_phone', 'shipping_address')
        }),
        ('Importes', {
            'fields': ('subtotal', 'shipping', 'tax', 'total')
        }),
        ('Notas', {
            'fields': ('notes',),
            'classes': ('collapse',)
        }),
    )

    def status_badge(self, obj):
        """Статус заказа цветным бейджем"""
        return _status_badge(obj)
    status_badge.short_description = 'Estado'


@admin.register(Quote)
class QuoteAdmin(admin.ModelAdmin):
    list_display = ('quote_number', 'customer_name', 'customer_company', 'urgency', 'status_badge', 'total', 'created_at')
    list_filter = ('status', 'urgency', 'created_at')
    search_fields = ('quote_number', 'customer_name', 'customer_email', 'customer_company')
    readonly_fields = ('quote_number', 'company_type_name', 'subtotal', 'total', 'created_at', 'updated_at')
    inlines = [QuoteItemInline]

    def status_badge(self, obj):
        return _status_badge(obj)
    status_badge.short_description = 'Estado'
