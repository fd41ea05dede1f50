"""
ViewSets клиентов, компаний, ценовых уровней и сессии.
"""
import logging

from django.contrib.auth import authenticate
from django.contrib.auth import login as auth_login
from django.contrib.auth import logout as auth_logout
from django.contrib.auth.models import User
from django.shortcuts import get_object_or_404
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .models import Company, CompanyType, CustomerProfile
from .permissions import IsAdminRole, IsAuthenticatedReadOrAdmin
from .serializers import (
    CompanySerializer,
    CompanyTypeSerializer,
    CustomerCompanySerializer,
    CustomerRegistrationSerializer,
    CustomerSerializer,
    LoginSerializer,
    current_user_payload,
)
from .services import assign_customer_company, register_customer

logger = logging.getLogger(__name__)


def _active_only(request):
    return request.query_params.get('active', '').lower() in ('1', 'true', 'yes')


class CompanyTypeViewSet(viewsets.ModelViewSet):
    """
    Ценовые уровни (типы компаний).

    Предоставляет:
        - list: GET /api/company-types/?active=true (по sort_order, name)
        - retrieve/create/update/destroy: запись только администраторам
    """
    serializer_class = CompanyTypeSerializer
    permission_classes = [IsAuthenticatedReadOrAdmin]

    def get_queryset(self):
        queryset = CompanyType.objects.all().order_by('sort_order', 'name')
        if _active_only(self.request):
            queryset = queryset.filter(is_active=True)
        return queryset


class CompanyViewSet(viewsets.ModelViewSet):
    """
    Компании клиентов.

    Предоставляет:
        - list: GET /api/companies/?active=true (по имени)
        - retrieve/create/update/destroy
    """
    serializer_class = CompanySerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        queryset = Company.objects.select_related('company_type').order_by('name')
        if _active_only(self.request):
            queryset = queryset.filter(is_active=True)
        return queryset


class CustomerViewSet(viewsets.ReadOnlyModelViewSet):
    """
    Клиенты магазина (роль customer) с компанией и уровнем.

    Предоставляет:
        - list: GET /api/customers/
        - retrieve: GET /api/customers/{id}/
        - company: POST /api/customers/{id}/company/ {"companyId": 3 | null}
    """
    serializer_class = CustomerSerializer
    permission_classes = [IsAdminRole]

    def get_queryset(self):
        return (
            User.objects.filter(customer_profile__role=CustomerProfile.ROLE_CUSTOMER)
            .select_related('customer_profile__company__company_type')
            .order_by('-date_joined', '-id')
        )

    @action(detail=True, methods=['post'], url_path='company')
    def company(self, request, pk=None):
        user = self.get_object()
        serializer = CustomerCompanySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assign_customer_company(user.customer_profile, serializer.validated_data['companyId'])
        user.refresh_from_db()
        return Response(CustomerSerializer(user).data)


class AuthViewSet(viewsets.ViewSet):
    """
    Сессионная аутентификация.

    Предоставляет:
        - me: GET /api/auth/me/
        - login: POST /api/auth/login/ {"username", "password"}
        - logout: POST /api/auth/logout/
    """
    permission_classes = [AllowAny]

    @action(detail=False, methods=['get'], url_path='me')
    def me(self, request):
        if not request.user.is_authenticated:
            return Response({'message': 'No autenticado'}, status=status.HTTP_401_UNAUTHORIZED)
        return Response(current_user_payload(request.user))

    @action(detail=False, methods=['post'], url_path='login')
    def login(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate(
            request,
            username=serializer.validated_data['username'],
            password=serializer.validated_data['password'],
        )
        if user is None:
            logger.info('Failed login for %s', serializer.validated_data['username'])
            return Response(
                {'message': 'Usuario o contraseña incorrectos'},
                status=status.HTTP_401_UNAUTHORIZED,
            )
        auth_login(request, user)
        return Response(current_user_payload(user))

    @action(detail=False, methods=['post'], url_path='logout')
    def logout(self, request):
        auth_logout(request)
        return Response({'message': 'Sesión cerrada'})


class CustomerRegistrationView(APIView):
    """
    POST /api/register/customer/: регистрация клиента.

    Returns:
        - 201: {"message", "user": {id, email, firstName, lastName, company}}
        - 400: ошибки валидации (email уже зарегистрирован и т.д.)
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CustomerRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        user = register_customer(
            email=data['email'],
            first_name=data['firstName'],
            last_name=data['lastName'],
            password=data.get('password'),
            username=data.get('username'),
            phone=data['phone'],
            address=data['address'],
            city=data['city'],
            state=data['state'],
            zip_code=data['zipCode'],
            company_name=data.get('company', ''),
        )
        return Response(
            {
                'message': 'Cliente registrado exitosamente',
                'user': {
                    'id': user.pk,
                    'email': user.email,
                    'firstName': user.first_name,
                    'lastName': user.last_name,
                    'company': user.customer_profile.company_name or None,
                },
            },
            status=status.HTTP_201_CREATED,
        )
