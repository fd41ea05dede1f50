from django.contrib import admin

from productcolors.admin import ProductColorImageInline

from .models import Brand, Category, Inventory, Product


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'order', 'is_active')
    list_filter = ('is_active',)
    prepopulated_fields = {'slug': ('name',)}


@admin.register(Brand)
class BrandAdmin(admin.ModelAdmin):
    list_display = ('name', 'is_active', 'created_at')
    list_filter = ('is_active',)
    search_fields = ('name',)


class InventoryInline(admin.TabularInline):
    model = Inventory
    extra = 0
    fields = ('size', 'color', 'quantity', 'reserved_quantity', 'updated_at')
    readonly_fields = ('updated_at',)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'sku', 'category', 'brand', 'price', 'is_active', 'created_at')
    list_filter = ('is_active', 'category', 'brand')
    search_fields = ('name', 'sku', 'brand')
    prepopulated_fields = {'slug': ('name',)}
    inlines = (ProductColorImageInline, InventoryInline)
