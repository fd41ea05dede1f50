"""
Сигналы заказов и коммерческих предложений: журнал смены статуса.
"""
import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from .models import Order, Quote

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Order)
@receiver(pre_save, sender=Quote)
def remember_previous_status(sender, instance, **kwargs):
    """Запоминает статус до сохранения, чтобы post_save мог его сравнить."""
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            sender.objects.filter(pk=instance.pk).values_list('status', flat=True).first()
        )


@receiver(post_save, sender=Order)
@receiver(post_save, sender=Quote)
def log_status_change(sender, instance, created, **kwargs):
    if created:
        return
    previous = getattr(instance, '_previous_status', None)
    if previous and previous != instance.status:
        logger.info(
            "%s %s: статус %s -> %s",
            sender.__name__,
            instance.pk,
            previous,
            instance.status,
        )
