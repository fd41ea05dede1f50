from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .viewsets import DashboardViewSet, OrderViewSet, QuoteViewSet

router = SimpleRouter()
router.register(r'quotes', QuoteViewSet, basename='api-quote')
router.register(r'orders', OrderViewSet, basename='api-order')
router.register(r'dashboard', DashboardViewSet, basename='api-dashboard')

urlpatterns = [
    path('', include(router.urls)),
]
