"""
Утилиты для работы с кешем, абстрагируют получение alias-ов Redis.
"""
import logging

from django.core.cache import cache, caches
from django.core.cache.backends.base import InvalidCacheBackendError

logger = logging.getLogger(__name__)


def get_cache(alias='default'):
    """
    Возвращает кэш по алиасу, подстраховываясь fallback-ом на default.
    """
    if alias in ('default', None):
        return cache
    try:
        return caches[alias]
    except InvalidCacheBackendError:
        return cache


def get_fragment_cache():
    """
    Кэш для фрагментов (Redis alias 'fragments'), резервируется на default.
    """
    return get_cache('fragments')


def cached_fragment(key, builder, timeout):
    """
    Возвращает значение из кэша фрагментов или строит его через ``builder``.

    ``None`` не кэшируется: пустой результат всегда пересчитывается.
    """
    fragment_cache = get_fragment_cache()
    value = fragment_cache.get(key)
    if value is not None:
        return value
    value = builder()
    if value is not None:
        fragment_cache.set(key, value, timeout)
    return value


def invalidate_fragment(*keys):
    fragment_cache = get_fragment_cache()
    for key in keys:
        fragment_cache.delete(key)
        logger.debug("Fragment cache key %s invalidated", key)
