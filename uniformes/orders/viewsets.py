"""
ViewSets заказов, коммерческих предложений и панели администратора.

Предоставляет:
    - POST /api/quotes/request/           - запрос КП (клиент или гость)
    - GET  /api/quotes/, /api/quotes/{id}/ - администратор видит все, клиент свои
    - PATCH /api/quotes/{id}/status/      - администратор
    - POST /api/orders/                   - оформление заказа
    - GET  /api/orders/, /api/orders/{id}/
    - PUT  /api/orders/{id}/status/       - администратор
    - GET  /api/dashboard/stats|top-products|recent-orders/
"""
import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import get_object_or_404
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import IsAdminRole
from accounts.services import is_admin_user
from storefront.services.catalog_helpers import PricingContext

from .models import Order, Quote
from .serializers import (
    LimitSerializer,
    OrderCreateSerializer,
    OrderQuerySerializer,
    OrderSerializer,
    OrderStatusSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
    QuoteStatusSerializer,
    RecentOrderSerializer,
)
from . import services as order_services
from .services import create_order, create_quote, set_status, visible_orders, visible_quotes

logger = logging.getLogger(__name__)


def _caller(request):
    return request.user if request.user.is_authenticated else None


class _OwnedDocumentMixin:
    """Чужой документ: 403 вместо 404, администратору доступно всё."""
    model = None

    def get_object(self):
        obj = get_object_or_404(self.model.objects.prefetch_related('items'), pk=self.kwargs['pk'])
        if not is_admin_user(self.request.user) and obj.customer_id != self.request.user.pk:
            raise PermissionDenied('No tiene acceso a este documento.')
        return obj


class QuoteViewSet(_OwnedDocumentMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = QuoteSerializer
    permission_classes = [IsAuthenticated]
    model = Quote

    def get_queryset(self):
        return visible_quotes(self.request.user)

    @action(detail=False, methods=['post'], url_path='request', permission_classes=[AllowAny])
    def request_quote(self, request):
        serializer = QuoteRequestSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        customer = _caller(request)
        quote = create_quote(
            serializer.lines(),
            PricingContext.from_request(request),
            customer=customer,
            contact=serializer.contact(customer),
            urgency=serializer.validated_data['urgency'],
            notes=serializer.validated_data['notes'],
            preferred_delivery_date=serializer.validated_data['preferredDeliveryDate'],
        )
        return Response(QuoteSerializer(quote).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['patch'], url_path='status', permission_classes=[IsAdminRole])
    def update_status(self, request, pk=None):
        quote = self.get_object()
        serializer = QuoteStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        set_status(quote, serializer.validated_data['status'])
        return Response(QuoteSerializer(quote).data)


class OrderViewSet(_OwnedDocumentMixin,
                   mixins.CreateModelMixin,
                   viewsets.ReadOnlyModelViewSet):
    serializer_class = OrderSerializer
    model = Order

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        if self.action == 'update_status':
            return [IsAdminRole()]
        return [IsAuthenticated()]

    def get_queryset(self):
        return visible_orders(self.request.user)

    def list(self, request, *args, **kwargs):
        query = OrderQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        queryset = self.get_queryset()
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])
        offset = params['offset']
        limit = params.get('limit')
        queryset = queryset[offset:offset + limit] if limit else queryset[offset:]
        return Response(OrderSerializer(queryset, many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = OrderCreateSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        customer = _caller(request)
        data = serializer.validated_data
        order = create_order(
            serializer.lines(),
            PricingContext.from_request(request),
            customer=customer,
            contact=serializer.contact(customer),
            shipping=data['shipping'],
            tax=data['tax'],
            shipping_address=data['shippingAddress'],
            notes=data['notes'],
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        set_status(order, serializer.validated_data['status'])
        return Response(OrderSerializer(order).data)


class DashboardViewSet(viewsets.ViewSet):
    """Сводка для панели администратора."""
    permission_classes = [IsAdminRole]

    def _limit(self, request, default):
        query = LimitSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return query.validated_data.get('limit', default)

    @action(detail=False, methods=['get'])
    def stats(self, request):
        return Response(order_services.dashboard_stats())

    @action(detail=False, methods=['get'], url_path='top-products')
    def top_products(self, request):
        return Response(order_services.top_products(self._limit(request, 5)))

    @action(detail=False, methods=['get'], url_path='recent-orders')
    def recent_orders(self, request):
        orders = order_services.recent_orders(self._limit(request, 10))
        return Response(RecentOrderSerializer(orders, many=True).data)
