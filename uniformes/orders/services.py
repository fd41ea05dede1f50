"""
Quote and order workflows.

Line prices are always computed on the server: each line goes through the
tier resolver with the caller's principal, so a customer never sets their
own price. Totals are summed in `Decimal`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from django.contrib.auth.models import User
from django.db import transaction
from django.db.models import Count, DecimalField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from accounts.services import is_admin_user
from storefront.models import Product
from storefront.services.catalog_helpers import PricingContext
from storefront.services.pricing import to_money

from .models import Order, OrderItem, Quote, QuoteItem

logger = logging.getLogger(__name__)

ZERO = Decimal('0.00')


@dataclass(frozen=True)
class LineRequest:
    product_id: int
    quantity: int
    size: str = ''
    color: str = ''
    notes: str = ''


@dataclass(frozen=True)
class ContactInfo:
    name: str = ''
    email: str = ''
    phone: str = ''
    company: str = ''

    @classmethod
    def from_user(cls, user) -> "ContactInfo":
        profile = getattr(user, 'customer_profile', None)
        company = ''
        if profile is not None:
            company = profile.company.name if profile.company_id else profile.company_name
        return cls(
            name=user.get_full_name() or user.username,
            email=user.email,
            phone=profile.phone if profile else '',
            company=company or '',
        )


def load_products(lines: Iterable[LineRequest]) -> Dict[int, Product]:
    """Products referenced by ``lines``; unknown ids raise a 400."""
    ids = {line.product_id for line in lines}
    products = Product.objects.in_bulk(ids)
    missing = sorted(ids - set(products))
    if missing:
        raise ValidationError({
            'items': [f'Producto no encontrado: {pk}' for pk in missing],
        })
    return products


@transaction.atomic
def create_quote(
    lines: List[LineRequest],
    pricing: PricingContext,
    *,
    customer: Optional[User] = None,
    contact: ContactInfo,
    urgency: str = 'normal',
    notes: str = '',
    preferred_delivery_date=None,
) -> Quote:
    """
    Create a quote with every line priced at the caller's tier.

    Guests (``customer=None``) are stored as a contact snapshot only.
    """
    products = load_products(lines)
    quote = Quote(
        customer=customer,
        customer_name=contact.name,
        customer_email=contact.email,
        customer_phone=contact.phone,
        customer_company=contact.company,
        urgency=urgency,
        notes=notes,
        preferred_delivery_date=preferred_delivery_date,
    )
    quote.save()

    subtotal = ZERO
    tier_name = None
    items = []
    for line in lines:
        product = products[line.product_id]
        resolution = pricing.resolve(product.price)
        tier_name = tier_name or resolution.tier_name
        line_total = to_money(resolution.discounted_price * line.quantity)
        subtotal += line_total
        items.append(QuoteItem(
            quote=quote,
            product=product,
            product_name=product.name,
            size=line.size,
            color=line.color,
            quantity=line.quantity,
            original_unit_price=to_money(resolution.original_price),
            discount_percent=resolution.discount_percent,
            unit_price=resolution.discounted_price,
            total=line_total,
            notes=line.notes,
        ))
    QuoteItem.objects.bulk_create(items)

    quote.subtotal = subtotal
    quote.total = subtotal
    quote.company_type_name = tier_name or ''
    quote.save(update_fields=['subtotal', 'total', 'company_type_name', 'updated_at'])
    logger.info(
        "Quote %s created: customer=%s lines=%s total=%s",
        quote.quote_number, getattr(customer, 'pk', None), len(items), quote.total,
    )
    return quote


@transaction.atomic
def create_order(
    lines: List[LineRequest],
    pricing: PricingContext,
    *,
    customer: Optional[User] = None,
    contact: ContactInfo,
    shipping=ZERO,
    tax=ZERO,
    shipping_address=None,
    notes: str = '',
) -> Order:
    """Create an order; ``total = subtotal + shipping + tax``."""
    products = load_products(lines)
    priced = []
    subtotal = ZERO
    for line in lines:
        product = products[line.product_id]
        unit_price = pricing.resolve(product.price).discounted_price
        line_total = to_money(unit_price * line.quantity)
        subtotal += line_total
        priced.append((line, product, unit_price, line_total))

    shipping = to_money(shipping)
    tax = to_money(tax)
    order = Order(
        customer=customer,
        customer_name=contact.name,
        customer_email=contact.email,
        customer_phone=contact.phone,
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
        shipping_address=shipping_address,
        notes=notes,
    )
    order.save()
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            product=product,
            product_name=product.name,
            size=line.size,
            color=line.color,
            quantity=line.quantity,
            unit_price=unit_price,
            total_price=line_total,
        )
        for line, product, unit_price, line_total in priced
    ])
    logger.info(
        "Order %s created: customer=%s lines=%s total=%s",
        order.order_number, getattr(customer, 'pk', None), len(priced), order.total,
    )
    return order


def set_status(document, status: str):
    """Update ``document.status``; the status-change log comes from signals."""
    document.status = status
    document.save(update_fields=['status', 'updated_at'])
    return document


def visible_orders(user):
    """Admins see every order, customers only their own."""
    queryset = Order.objects.select_related('customer').prefetch_related('items')
    if is_admin_user(user):
        return queryset
    return queryset.filter(customer=user)


def visible_quotes(user):
    queryset = Quote.objects.select_related('customer').prefetch_related('items')
    if is_admin_user(user):
        return queryset
    return queryset.filter(customer=user)


def dashboard_stats(now=None) -> dict:
    """
    Back-office counters: sales delivered since local midnight, pending
    orders, active products and customer accounts.
    """
    now = timezone.localtime(now)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    total_sales = Order.objects.filter(
        status='delivered',
        created_at__gte=start_of_day,
    ).aggregate(
        total=Coalesce(Sum('total'), Value(ZERO), output_field=DecimalField(max_digits=12, decimal_places=2)),
    )['total']

    return {
        'totalSales': str(to_money(total_sales)),
        'newOrders': Order.objects.filter(status='pending').count(),
        'activeProducts': Product.objects.filter(is_active=True).count(),
        'totalCustomers': User.objects.filter(
            customer_profile__role='customer',
        ).count(),
    }


def top_products(limit: int = 5) -> List[dict]:
    """Products ordered by units sold, with revenue from order lines."""
    money = DecimalField(max_digits=14, decimal_places=2)
    rows = (
        Product.objects.annotate(
            sales_count=Coalesce(Sum('order_items__quantity'), Value(0)),
            revenue=Coalesce(Sum('order_items__total_price'), Value(ZERO), output_field=money),
            order_count=Count('order_items__order', distinct=True),
        )
        .filter(sales_count__gt=0)
        .order_by('-sales_count', '-revenue', 'id')[:limit]
    )
    return [
        {
            'id': product.pk,
            'name': product.name,
            'sku': product.sku,
            'price': str(product.price),
            'salesCount': product.sales_count,
            'orderCount': product.order_count,
            'revenue': str(to_money(product.revenue)),
        }
        for product in rows
    ]


def recent_orders(limit: int = 10):
    return (
        Order.objects.select_related('customer')
        .annotate(item_count=Coalesce(Sum('items__quantity'), Value(0)))
        .order_by('-created_at', '-id')[:limit]
    )
