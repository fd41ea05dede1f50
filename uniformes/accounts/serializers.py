"""
Сериализаторы клиентов, компаний и ценовых уровней.
"""
from django.contrib.auth.models import User
from rest_framework import serializers

from .models import Company, CompanyType, CustomerProfile
from .services import is_admin_user


class CompanyTypeSerializer(serializers.ModelSerializer):
    """
    Ценовой уровень.

    Fields:
        - id, name, description
        - discount_percentage: 0–100, null = без скидки
        - is_active, sort_order
        - companies_count: количество компаний уровня (read-only)
    """
    discount_percentage = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=0,
        max_value=100,
        allow_null=True,
        required=False,
    )
    companies_count = serializers.SerializerMethodField()

    class Meta:
        model = CompanyType
        fields = [
            'id', 'name', 'description', 'discount_percentage',
            'is_active', 'sort_order', 'companies_count', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def get_companies_count(self, obj):
        return obj.companies.count()

    def validate_name(self, value):
        return value.strip()


class CompanySerializer(serializers.ModelSerializer):
    company_type = serializers.PrimaryKeyRelatedField(
        queryset=CompanyType.objects.all(),
        allow_null=True,
        required=False,
    )
    company_type_name = serializers.SerializerMethodField()

    class Meta:
        model = Company
        fields = [
            'id', 'name', 'contact_name', 'email', 'phone', 'tax_id', 'address',
            'company_type', 'company_type_name', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_company_type_name(self, obj):
        return obj.company_type.name if obj.company_type_id else None


class CustomerSerializer(serializers.ModelSerializer):
    """Клиент с компанией и ценовым уровнем (только чтение)."""
    role = serializers.CharField(source='customer_profile.role', read_only=True)
    phone = serializers.CharField(source='customer_profile.phone', read_only=True)
    company_id = serializers.SerializerMethodField()
    company_name = serializers.SerializerMethodField()
    company_type_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name', 'role', 'phone',
            'company_id', 'company_name', 'company_type_name', 'is_active', 'date_joined',
        ]
        read_only_fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_active', 'date_joined']

    def _company(self, obj):
        profile = getattr(obj, 'customer_profile', None)
        return profile.company if profile and profile.company_id else None

    def get_company_id(self, obj):
        company = self._company(obj)
        return company.pk if company else None

    def get_company_name(self, obj):
        company = self._company(obj)
        return company.name if company else None

    def get_company_type_name(self, obj):
        company = self._company(obj)
        if company and company.company_type_id:
            return company.company_type.name
        return None


class CustomerCompanySerializer(serializers.Serializer):
    """{"companyId": 3} привязать, {"companyId": null} отвязать."""
    companyId = serializers.PrimaryKeyRelatedField(
        queryset=Company.objects.all(),
        allow_null=True,
    )


class CustomerRegistrationSerializer(serializers.Serializer):
    firstName = serializers.CharField(min_length=2, max_length=150)
    lastName = serializers.CharField(min_length=2, max_length=150)
    email = serializers.EmailField()
    phone = serializers.CharField(min_length=10, max_length=32)
    company = serializers.CharField(required=False, allow_blank=True, max_length=200)
    address = serializers.CharField(min_length=10)
    city = serializers.CharField(min_length=2, max_length=100)
    state = serializers.CharField(min_length=2, max_length=100)
    zipCode = serializers.CharField(min_length=5, max_length=10)
    username = serializers.CharField(required=False, min_length=3, max_length=150)
    password = serializers.CharField(required=False, min_length=6, write_only=True)

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError('El email ya está registrado')
        return email

    def validate_username(self, value):
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError('El usuario ya existe')
        return value


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(min_length=3)
    password = serializers.CharField(min_length=6, write_only=True)


def current_user_payload(user):
    """
    Payload для /api/auth/me/: пользователь, роль, компания и уровень.
    """
    profile = getattr(user, 'customer_profile', None)
    company = profile.company if profile and profile.company_id else None
    company_type = company.company_type if company and company.company_type_id else None
    return {
        'id': user.pk,
        'username': user.username,
        'email': user.email,
        'firstName': user.first_name,
        'lastName': user.last_name,
        'role': CustomerProfile.ROLE_ADMIN if is_admin_user(user) else CustomerProfile.ROLE_CUSTOMER,
        'companyId': company.pk if company else None,
        'companyName': company.name if company else None,
        'companyTypeName': company_type.name if company_type else None,
        'discountPercentage': (
            str(company_type.discount_percentage)
            if company_type and company_type.discount_percentage is not None
            else None
        ),
    }
