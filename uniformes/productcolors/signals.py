"""
Сигналы для инвалидации кеша справочника цветов
"""
import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Color
from .services.color_service import invalidate_colors_cache

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Color)
def invalidate_colors_on_save(sender, instance, created, **kwargs):
    action = "создан" if created else "обновлен"
    logger.info("Цвет %s (ID: %s) %s, сбрасываем кеш цветов", instance.name, instance.pk, action)
    invalidate_colors_cache()


@receiver(post_delete, sender=Color)
def invalidate_colors_on_delete(sender, instance, **kwargs):
    logger.info("Цвет %s (ID: %s) удален, сбрасываем кеш цветов", instance.name, instance.pk)
    invalidate_colors_cache()
