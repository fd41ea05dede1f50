"""
Django REST Framework API URLs with Router.

Автоматически генерирует URL patterns для ViewSets каталога.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .viewsets import BrandViewSet, CategoryViewSet, ColorViewSet, ProductViewSet

router = DefaultRouter()

router.register(r'categories', CategoryViewSet, basename='api-category')
router.register(r'brands', BrandViewSet, basename='api-brand')
router.register(r'colors', ColorViewSet, basename='api-color')
router.register(r'products', ProductViewSet, basename='api-product')

urlpatterns = [
    path('', include(router.urls)),
]

# Автоматически созданные URLs:
# GET    /api/categories/                         - Список категорий
# GET    /api/brands/                             - Марки
# GET    /api/colors/                             - Справочник цветов (кеш)
# GET    /api/products/                           - Список товаров с ценами уровня
# GET    /api/products/{id}/?color=               - Детали товара
# GET    /api/products/{id}/color-images/         - Фото по цветам
# PUT    /api/products/{id}/color-images/         - Полная замена фото по цветам
# GET    /api/products/{id}/display-images/       - Фото для выбранного цвета
# PUT    /api/products/{id}/inventory/            - Остаток по размеру и цвету
# GET    /api/products/price-list/                - Прайс-лист XLSX
