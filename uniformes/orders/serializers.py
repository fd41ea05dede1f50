"""
Сериализаторы заказов и коммерческих предложений.

Входящие запросы (`quotes/request`, создание заказа) принимаются в camelCase,
как их отправляет фронтенд; ответы отдают поля моделей.
"""
from decimal import Decimal

from rest_framework import serializers

from .models import Order, OrderItem, Quote, QuoteItem
from .services import ContactInfo, LineRequest


class LineRequestSerializer(serializers.Serializer):
    productId = serializers.IntegerField(min_value=1)
    quantity = serializers.IntegerField(min_value=1)
    size = serializers.CharField(required=False, allow_blank=True, max_length=20, default='')
    color = serializers.CharField(required=False, allow_blank=True, max_length=50, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def to_line(self, data):
        return LineRequest(
            product_id=data['productId'],
            quantity=data['quantity'],
            size=data['size'],
            color=data['color'],
            notes=data['notes'],
        )


class ContactInfoSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=200)
    email = serializers.EmailField()
    phone = serializers.CharField(required=False, allow_blank=True, max_length=32, default='')
    company = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')


class _DocumentRequestSerializer(serializers.Serializer):
    items = LineRequestSerializer(many=True, allow_empty=False)
    customerInfo = ContactInfoSerializer(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        request = self.context.get('request')
        authenticated = bool(request and request.user and request.user.is_authenticated)
        if not authenticated and not attrs.get('customerInfo'):
            raise serializers.ValidationError({
                'customerInfo': 'Los datos de contacto son obligatorios.',
            })
        return attrs

    def lines(self):
        child = self.fields['items'].child
        return [child.to_line(item) for item in self.validated_data['items']]

    def contact(self, user=None):
        info = self.validated_data.get('customerInfo')
        if info:
            return ContactInfo(**info)
        return ContactInfo.from_user(user)


class QuoteRequestSerializer(_DocumentRequestSerializer):
    urgency = serializers.ChoiceField(choices=Quote.URGENCY_CHOICES, default='normal')
    preferredDeliveryDate = serializers.DateField(required=False, allow_null=True, default=None)


class OrderCreateSerializer(_DocumentRequestSerializer):
    shipping = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=Decimal('0.00'))
    tax = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=Decimal('0.00'))
    shippingAddress = serializers.JSONField(required=False, allow_null=True, default=None)


class QuoteItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = QuoteItem
        fields = [
            'id', 'product', 'product_name', 'size', 'color', 'quantity',
            'original_unit_price', 'discount_percent', 'unit_price', 'total', 'notes',
        ]


class QuoteSerializer(serializers.ModelSerializer):
    items = QuoteItemSerializer(many=True, read_only=True)

    class Meta:
        model = Quote
        fields = [
            'id', 'quote_number', 'customer', 'customer_name', 'customer_email',
            'customer_phone', 'customer_company', 'company_type_name', 'urgency',
            'status', 'subtotal', 'total', 'notes', 'preferred_delivery_date',
            'items', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'size', 'color', 'quantity', 'unit_price', 'total_price']


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'customer', 'customer_name', 'customer_email',
            'customer_phone', 'status', 'subtotal', 'shipping', 'tax', 'total',
            'shipping_address', 'notes', 'items', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class RecentOrderSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = ['id', 'order_number', 'customer_name', 'status', 'total', 'item_count', 'created_at']


class QuoteStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Quote.STATUS_CHOICES)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class OrderQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES, required=False)
    limit = serializers.IntegerField(min_value=1, max_value=200, required=False)
    offset = serializers.IntegerField(min_value=0, default=0)


class LimitSerializer(serializers.Serializer):
    limit = serializers.IntegerField(min_value=1, max_value=100, required=False)
