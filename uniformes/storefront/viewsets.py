"""
Django REST Framework ViewSets for Storefront API.

Каталог: категории, цвета, товары, фото по цветам и прайс-лист.
Чтение открыто всем, запись только администраторам.
"""
import logging

from django.db import IntegrityError, transaction
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from accounts.permissions import IsAdminOrReadOnly
from productcolors.models import Color, ProductColorImage
from productcolors.services import (
    ColorImagePayload,
    color_hex,
    first_valid_image,
    get_colors_cached,
    replace_product_color_images,
    resolve_display_images,
    set_primary_color_image,
)

from .exceptions import DuplicateSKU, InvalidProductId
from .models import Brand, Category, Product
from .serializers import (
    BrandSerializer,
    CategorySerializer,
    ColorImageAssignmentSerializer,
    ColorSerializer,
    InventorySerializer,
    InventoryUpdateSerializer,
    ProductColorImageSerializer,
    ProductQuerySerializer,
    ProductSerializer,
)
from .services.catalog_helpers import (
    PricingContext,
    enrich_products,
    enrichment_fields,
    load_color_image_refs_map,
    safe_color_refs,
)
from .services.inventory import product_inventory, update_inventory
from .services.price_list import XLSX_CONTENT_TYPE, build_price_list, price_list_filename

logger = logging.getLogger(__name__)


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet для категорий товаров.

    Предоставляет:
        - list: GET /api/categories/
        - retrieve: GET /api/categories/{id}/
        - create/update/destroy: только администраторы
    """
    serializer_class = CategorySerializer
    permission_classes = [IsAdminOrReadOnly]
    queryset = Category.objects.all().order_by('order', 'name')


class BrandViewSet(viewsets.ModelViewSet):
    """
    Марки одежды: чтение открыто всем, запись только администраторам.
    """
    serializer_class = BrandSerializer
    permission_classes = [IsAdminOrReadOnly]
    queryset = Brand.objects.all().order_by('name')

    def destroy(self, request, *args, **kwargs):
        brand = self.get_object()
        brand_id = brand.pk
        brand.delete()
        logger.info('Brand deleted: %s', brand_id)
        return Response({'message': 'Marca eliminada correctamente'}, status=status.HTTP_200_OK)


class ColorViewSet(viewsets.ModelViewSet):
    """
    Справочник цветов.

    Список отдается из кеша фрагментов; кеш сбрасывается сигналами
    `productcolors.signals` при любой записи.
    """
    serializer_class = ColorSerializer
    permission_classes = [IsAdminOrReadOnly]
    queryset = Color.objects.all().order_by('name')

    def list(self, request, *args, **kwargs):
        return Response(get_colors_cached())


class ProductViewSet(viewsets.ModelViewSet):
    """
    ViewSet для товаров.

    Предоставляет:
        - list: GET /api/products/?categoryId=&brand=&isActive=&search=&limit=&offset=
        - retrieve: GET /api/products/{id}/?color=Rojo
        - create/update/partial_update/destroy: только администраторы
        - color_images: GET/POST/PUT /api/products/{id}/color-images/
        - color_image_detail: PUT/PATCH/DELETE /api/products/{id}/color-images/{pk}/
        - display_images: GET /api/products/{id}/display-images/?color=Rojo
        - inventory: GET/PUT /api/products/{id}/inventory/
        - price_list: GET /api/products/price-list/ (XLSX)

    Ответы list/retrieve дополнены ценой по уровню компании покупателя
    (originalPrice, discountedPrice, discount, companyTypeName) и фото
    по цветам (colorImages, primaryImage).
    """
    serializer_class = ProductSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        return Product.objects.select_related('category').order_by('-created_at', '-id')

    def _product_or_400(self, pk):
        if pk is None or not str(pk).isdigit():
            raise InvalidProductId()
        return get_object_or_404(self.get_queryset(), pk=int(pk))

    # ----- каталог -----

    def list(self, request, *args, **kwargs):
        query = ProductQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        queryset = self.get_queryset()
        if params.get('categoryId'):
            queryset = queryset.filter(category_id=params['categoryId'])
        if params.get('brand'):
            queryset = queryset.filter(brand=params['brand'])
        if params.get('isActive') is not None:
            queryset = queryset.filter(is_active=params['isActive'])
        if params.get('search'):
            queryset = queryset.filter(name__icontains=params['search'])

        offset = params.get('offset') or 0
        limit = params.get('limit')
        if limit:
            products = list(queryset[offset:offset + limit])
        else:
            products = list(queryset[offset:])

        payloads = self.get_serializer(products, many=True).data
        return Response(enrich_products(products, payloads, request))

    def retrieve(self, request, *args, **kwargs):
        product = self._product_or_400(kwargs.get('pk'))
        colors = safe_color_refs()
        color_images = load_color_image_refs_map([product.pk]).get(product.pk, [])
        payload = dict(self.get_serializer(product).data)
        payload.update(enrichment_fields(product, PricingContext.from_request(request), color_images, colors))

        selected = request.query_params.get('color', '')
        display_images = resolve_display_images(product.images, color_images, colors, selected)
        payload['selectedColor'] = selected or None
        payload['displayImages'] = display_images
        payload['firstImage'] = first_valid_image(display_images)
        payload['colorHex'] = [
            {'name': label, 'hexCode': color_hex(label, colors)}
            for label in (product.colors or [])
        ]
        return Response(payload)

    def perform_create(self, serializer):
        self._save_with_sku_guard(serializer)
        logger.info('Product created: %s (sku=%s)', serializer.instance.pk, serializer.instance.sku)

    def perform_update(self, serializer):
        self._save_with_sku_guard(serializer)

    def _save_with_sku_guard(self, serializer):
        sku = serializer.validated_data.get('sku')
        try:
            with transaction.atomic():
                serializer.save()
        except IntegrityError:
            # Параллельная запись успела занять тот же SKU
            if sku and Product.objects.filter(sku=sku).exists():
                raise DuplicateSKU(sku)
            raise

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        product_id = product.pk
        product.delete()
        logger.info('Product deleted: %s', product_id)
        return Response({'message': 'Producto eliminado correctamente'}, status=status.HTTP_200_OK)

    # ----- фото по цветам -----

    @action(detail=True, methods=['get', 'post', 'put'], url_path='color-images')
    def color_images(self, request, pk=None):
        """
        GET: фото товара по цветам (по sort_order).
        POST: добавить фото для одного цвета.
        PUT: полностью заменить набор {"colorImages": [...]} (clear-then-recreate).
        """
        product = self._product_or_400(pk)

        if request.method == 'GET':
            rows = product.color_images.select_related('color').order_by('sort_order', 'id')
            return Response(ProductColorImageSerializer(rows, many=True).data)

        if request.method == 'POST':
            serializer = ProductColorImageSerializer(data=request.data, context={'product': product})
            serializer.is_valid(raise_exception=True)
            with transaction.atomic():
                association = serializer.save(product=product)
                if association.is_primary:
                    set_primary_color_image(association)
            return Response(ProductColorImageSerializer(association).data, status=status.HTTP_201_CREATED)

        serializer = ColorImageAssignmentSerializer(
            data=request.data,
            context={'product': product, 'replace': True},
        )
        serializer.is_valid(raise_exception=True)
        payloads = [
            ColorImagePayload(
                color=item['color'],
                images=item.get('images', []),
                is_primary=item.get('is_primary', False),
                sort_order=item.get('sort_order'),
            )
            for item in serializer.validated_data['colorImages']
        ]
        rows = replace_product_color_images(product, payloads)
        return Response(ProductColorImageSerializer(rows, many=True).data)

    @action(
        detail=True,
        methods=['put', 'patch', 'delete'],
        url_path=r'color-images/(?P<association_pk>\d+)',
    )
    def color_image_detail(self, request, pk=None, association_pk=None):
        product = self._product_or_400(pk)
        association = get_object_or_404(
            ProductColorImage.objects.select_related('color'),
            pk=association_pk,
            product=product,
        )

        if request.method == 'DELETE':
            association.delete()
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = ProductColorImageSerializer(
            association,
            data=request.data,
            partial=request.method == 'PATCH',
            context={'product': product},
        )
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            association = serializer.save()
            if association.is_primary:
                set_primary_color_image(association)
        return Response(ProductColorImageSerializer(association).data)

    @action(detail=True, methods=['get'], url_path='display-images', permission_classes=[AllowAny])
    def display_images(self, request, pk=None):
        """
        Фото для выбранного цвета с откатом на фото товара.

        Example:
            GET /api/products/12/display-images/?color=Rojo
            -> {"images": [...], "firstImage": "https://..."}
        """
        product = self._product_or_400(pk)
        images = resolve_display_images(
            product.images,
            load_color_image_refs_map([product.pk]).get(product.pk, []),
            safe_color_refs(),
            request.query_params.get('color', ''),
        )
        return Response({'images': images, 'firstImage': first_valid_image(images)})

    # ----- остатки -----

    @action(detail=True, methods=['get', 'put'], url_path='inventory')
    def inventory(self, request, pk=None):
        """
        GET: остатки товара по размеру и цвету.
        PUT: {"size": "M", "color": "Azul", "quantity": 12}, создает или обновляет строку.
        """
        product = self._product_or_400(pk)
        if request.method == 'GET':
            return Response(InventorySerializer(product_inventory(product), many=True).data)

        serializer = InventoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        row = update_inventory(product, **serializer.validated_data)
        return Response(InventorySerializer(row).data)

    # ----- прайс-лист -----

    @action(detail=False, methods=['get'], url_path='price-list', permission_classes=[AllowAny])
    def price_list(self, request):
        """
        XLSX с ценами активных товаров; для клиентов с уровнем компании
        колонка «Tu precio» уже учитывает скидку.
        """
        products = (
            Product.objects.filter(is_active=True)
            .select_related('category')
            .order_by('category__name', 'name')
        )
        content = build_price_list(products, PricingContext.from_request(request))
        response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
        response['Content-Disposition'] = f'attachment; filename="{price_list_filename()}"'
        return response
