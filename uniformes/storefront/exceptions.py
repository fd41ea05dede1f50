from rest_framework import status
from rest_framework.exceptions import APIException


class DuplicateSKU(APIException):
    """SKU уже занят другим товаром."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'duplicate_sku'

    def __init__(self, sku):
        super().__init__(detail={
            'message': 'El SKU ya existe en el sistema',
            'error': 'duplicate_sku',
            'detail': f'El SKU "{sku}" ya está siendo usado por otro producto.',
        })


class InvalidProductId(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'invalid_product_id'
    default_detail = 'ID de producto inválido.'
