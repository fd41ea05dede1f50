from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .viewsets import (
    AuthViewSet,
    CompanyTypeViewSet,
    CompanyViewSet,
    CustomerRegistrationView,
    CustomerViewSet,
)

router = SimpleRouter()
router.register(r'company-types', CompanyTypeViewSet, basename='api-company-type')
router.register(r'companies', CompanyViewSet, basename='api-company')
router.register(r'customers', CustomerViewSet, basename='api-customer')
router.register(r'auth', AuthViewSet, basename='api-auth')

urlpatterns = [
    path('register/customer/', CustomerRegistrationView.as_view(), name='api-register-customer'),
    path('', include(router.urls)),
]
