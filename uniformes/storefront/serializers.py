"""
Django REST Framework Serializers for Storefront API.

Сериализаторы каталога: категории, товары, цвета и фото по цветам.
Поля моделей отдаются в snake_case; цвета и фото по цветам в camelCase,
как их ожидает витрина.
"""

from rest_framework import serializers

from productcolors.models import Color, ProductColorImage
from productcolors.services import normalize_hex_code

from .exceptions import DuplicateSKU
from .models import Brand, Category, Inventory, Product


class CategorySerializer(serializers.ModelSerializer):
    """
    Сериализатор для категорий товаров.

    Fields:
        - id: ID категории
        - name: Название категории (уникально)
        - slug: URL slug (генерируется из названия)
        - description, order, is_active
    """

    class Meta:
        model = Category
        fields = ['id', 'name', 'slug', 'description', 'order', 'is_active']
        read_only_fields = ['id', 'slug']

    def validate_name(self, value):
        return value.strip()


class BrandSerializer(serializers.ModelSerializer):
    class Meta:
        model = Brand
        fields = ['id', 'name', 'description', 'logo', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError('El nombre de la marca es obligatorio.')
        return name


class ColorSerializer(serializers.ModelSerializer):
    """
    Справочник цветов: {id, name, hexCode}.

    HEX нормализуется к #RRGGBB, имя уникально без учета регистра.
    """
    hexCode = serializers.CharField(
        source='hex_code',
        required=False,
        allow_null=True,
        allow_blank=True,
        max_length=7,
    )

    class Meta:
        model = Color
        fields = ['id', 'name', 'hexCode']
        read_only_fields = ['id']

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError('El nombre del color es obligatorio.')
        queryset = Color.objects.filter(name__iexact=name)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise serializers.ValidationError('Ya existe un color con ese nombre.')
        return name

    def validate_hexCode(self, value):
        try:
            return normalize_hex_code(value)
        except ValueError:
            raise serializers.ValidationError('Código HEX inválido, usa el formato #RRGGBB.')


class ImageListField(serializers.ListField):
    """Упорядоченный список URL изображений (пустые строки отбрасываются)."""
    child = serializers.CharField(allow_blank=True)

    def to_internal_value(self, data):
        values = super().to_internal_value(data)
        return [value.strip() for value in values if value and value.strip()]


class ProductSerializer(serializers.ModelSerializer):
    """
    Сериализатор товара (чтение и запись из админки).

    Fields:
        - id, name, slug, sku, description
        - category: ID категории (nullable), category_name (read-only)
        - brand, price
        - images: упорядоченный список URL
        - sizes, colors: подписи размеров и цветов
        - is_active, created_at, updated_at

    Пустой SKU генерируется автоматически, занятый SKU -> 400 duplicate_sku.
    """
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        allow_null=True,
        required=False,
    )
    category_name = serializers.SerializerMethodField()
    images = ImageListField(required=False)
    sizes = serializers.ListField(child=serializers.CharField(max_length=20), required=False)
    colors = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'sku', 'description',
            'category', 'category_name', 'brand', 'price',
            'images', 'sizes', 'colors', 'is_active',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'slug', 'created_at', 'updated_at']
        extra_kwargs = {
            # Дубликаты SKU обрабатываются в validate_sku
            'sku': {'validators': [], 'required': False, 'allow_null': True, 'allow_blank': True},
        }

    def validate_sku(self, value):
        sku = (value or '').strip()
        if not sku:
            return None
        queryset = Product.objects.filter(sku=sku)
        if self.instance is not None:
            queryset = queryset.exclude(pk=self.instance.pk)
        if queryset.exists():
            raise DuplicateSKU(sku)
        return sku

    def get_category_name(self, obj):
        return obj.category.name if obj.category_id else None


class ProductColorImageSerializer(serializers.ModelSerializer):
    """
    Фото товара для одного цвета: {id, colorId, colorName, hexCode,
    images, isPrimary, sortOrder}.
    """
    colorId = serializers.PrimaryKeyRelatedField(source='color', queryset=Color.objects.all())
    colorName = serializers.CharField(source='color.name', read_only=True)
    hexCode = serializers.CharField(source='color.hex_code', read_only=True)
    images = ImageListField(required=False)
    isPrimary = serializers.BooleanField(source='is_primary', required=False, default=False)
    sortOrder = serializers.IntegerField(source='sort_order', required=False, min_value=0)

    class Meta:
        model = ProductColorImage
        fields = ['id', 'colorId', 'colorName', 'hexCode', 'images', 'isPrimary', 'sortOrder']
        read_only_fields = ['id']

    def validate(self, attrs):
        product = self.context.get('product')
        color = attrs.get('color')
        # При полной замене набора старые записи будут удалены
        if self.context.get('replace'):
            return attrs
        if product is not None and color is not None:
            duplicates = ProductColorImage.objects.filter(product=product, color=color)
            if self.instance is not None:
                duplicates = duplicates.exclude(pk=self.instance.pk)
            if duplicates.exists():
                raise serializers.ValidationError(
                    {'colorId': 'Este color ya tiene imágenes asignadas para el producto.'}
                )
        return attrs


class ColorImageAssignmentSerializer(serializers.Serializer):
    """
    Полная замена фото по цветам: {"colorImages": [...]}.

    Каждый цвет может встречаться в наборе только один раз.
    """
    colorImages = ProductColorImageSerializer(many=True)

    def validate_colorImages(self, value):
        seen = set()
        for item in value:
            color_id = item['color'].pk
            if color_id in seen:
                raise serializers.ValidationError('Cada color puede aparecer una sola vez.')
            seen.add(color_id)
        return value


class ProductQuerySerializer(serializers.Serializer):
    """
    Параметры списка товаров.

    Query Parameters:
        - categoryId: ID категории
        - brand: Марка (точное совпадение)
        - isActive: true/false
        - search: Подстрока названия (без учета регистра)
        - limit, offset: Пагинация
    """
    categoryId = serializers.IntegerField(required=False, min_value=1)
    brand = serializers.CharField(required=False, allow_blank=True, max_length=100)
    isActive = serializers.BooleanField(required=False, allow_null=True, default=None)
    search = serializers.CharField(required=False, allow_blank=True, max_length=200)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=500)
    offset = serializers.IntegerField(required=False, min_value=0)


class InventorySerializer(serializers.ModelSerializer):
    available_quantity = serializers.IntegerField(read_only=True)

    class Meta:
        model = Inventory
        fields = [
            'id', 'product', 'size', 'color',
            'quantity', 'reserved_quantity', 'available_quantity', 'updated_at',
        ]
        read_only_fields = fields


class InventoryUpdateSerializer(serializers.Serializer):
    """Тело PUT /api/products/{id}/inventory/: {size, color, quantity}."""
    size = serializers.CharField(max_length=20)
    color = serializers.CharField(max_length=50)
    quantity = serializers.IntegerField(min_value=0)
