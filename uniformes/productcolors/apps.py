from django.apps import AppConfig


class ProductcolorsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'productcolors'
    verbose_name = 'Colores de producto'

    def ready(self):
        # Сигналы для инвалидации кеша справочника цветов
        from . import signals  # noqa: F401
