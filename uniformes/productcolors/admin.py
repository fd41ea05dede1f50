from django import forms
from django.contrib import admin

from .models import Color, ProductColorImage
from .services.color_service import normalize_hex_code


class ColorAdminForm(forms.ModelForm):
    class Meta:
        model = Color
        fields = ('name', 'hex_code')

    def clean_name(self):
        return self.cleaned_data['name'].strip()

    def clean_hex_code(self):
        try:
            return normalize_hex_code(self.cleaned_data.get('hex_code'))
        except ValueError:
            raise forms.ValidationError('Usa el formato #RRGGBB.')


@admin.register(Color)
class ColorAdmin(admin.ModelAdmin):
    form = ColorAdminForm
    list_display = ('name', 'hex_code')
    search_fields = ('name',)


class ProductColorImageInline(admin.TabularInline):
    """Inline с фото по цветам на странице товара."""
    model = ProductColorImage
    extra = 0
    fields = ('color', 'images', 'is_primary', 'sort_order')
    autocomplete_fields = ('color',)


@admin.register(ProductColorImage)
class ProductColorImageAdmin(admin.ModelAdmin):
    list_display = ('product', 'color', 'is_primary', 'sort_order', 'image_count')
    list_filter = ('is_primary', 'color')
    search_fields = ('product__name', 'color__name')
    list_select_related = ('product', 'color')

    def image_count(self, obj):
        return len(obj.images or [])
    image_count.short_description = 'Fotos'
