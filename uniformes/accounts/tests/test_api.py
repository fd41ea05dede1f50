"""
API tests for session auth, registration, companies and pricing tiers.
"""
from decimal import Decimal

from django.contrib.auth.models import User
from rest_framework.test import APIClient, APITestCase

from accounts.models import Company, CompanyType


class AccountsAPITestCase(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.gold = CompanyType.objects.create(name="Gold", discount_percentage=Decimal("20.00"), sort_order=1)
        cls.basic = CompanyType.objects.create(name="Básico", is_active=False, sort_order=2)
        cls.acme = Company.objects.create(name="Acme Corp", company_type=cls.gold)
        cls.admin = User.objects.create_user("admin", "admin@uniformes.test", "secret123", is_staff=True)
        cls.customer = User.objects.create_user(
            "cliente", "cliente@uniformes.test", "secret123",
            first_name="Carla", last_name="Ruiz",
        )

    def setUp(self):
        self.client = APIClient()


class AuthTests(AccountsAPITestCase):
    def test_me_requires_login(self):
        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, 401)

    def test_login_and_me(self):
        profile = self.customer.customer_profile
        profile.company = self.acme
        profile.save()

        response = self.client.post(
            '/api/auth/login/',
            {'username': 'cliente', 'password': 'secret123'},
            format='json',
        )
        self.assertEqual(response.status_code, 200)

        response = self.client.get('/api/auth/me/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'customer')
        self.assertEqual(response.data['companyName'], 'Acme Corp')
        self.assertEqual(response.data['companyTypeName'], 'Gold')
        self.assertEqual(response.data['discountPercentage'], '20.00')

    def test_wrong_password(self):
        response = self.client.post(
            '/api/auth/login/',
            {'username': 'cliente', 'password': 'incorrecta'},
            format='json',
        )
        self.assertEqual(response.status_code, 401)

    def test_logout(self):
        self.client.login(username='cliente', password='secret123')
        response = self.client.post('/api/auth/logout/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get('/api/auth/me/').status_code, 401)


class RegistrationTests(AccountsAPITestCase):
    payload = {
        'firstName': 'Laura',
        'lastName': 'Pérez',
        'email': 'laura@clinica.test',
        'phone': '5512345678',
        'company': 'Clínica Norte',
        'address': 'Av. Reforma 123, Centro',
        'city': 'Puebla',
        'state': 'Puebla',
        'zipCode': '72000',
        'password': 'secret123',
    }

    def test_register_customer(self):
        response = self.client.post('/api/register/customer/', self.payload, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['user']['company'], 'Clínica Norte')
        self.assertTrue(User.objects.filter(email='laura@clinica.test').exists())

    def test_duplicate_email(self):
        payload = dict(self.payload, email='CLIENTE@uniformes.test')
        response = self.client.post('/api/register/customer/', payload, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.data)

    def test_short_fields_rejected(self):
        payload = dict(self.payload, zipCode='12', phone='123')
        response = self.client.post('/api/register/customer/', payload, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('zipCode', response.data)
        self.assertIn('phone', response.data)


class CompanyTypeTests(AccountsAPITestCase):
    def test_anonymous_cannot_read(self):
        self.assertEqual(self.client.get('/api/company-types/').status_code, 403)

    def test_customer_reads_active_tiers(self):
        self.client.force_authenticate(self.customer)
        response = self.client.get('/api/company-types/', {'active': 'true'})
        self.assertEqual([item['name'] for item in response.data], ['Gold'])
        self.assertEqual(response.data[0]['companies_count'], 1)

    def test_customer_cannot_write(self):
        self.client.force_authenticate(self.customer)
        response = self.client.post('/api/company-types/', {'name': 'Platino'}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_discount_range_validated(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/company-types/',
            {'name': 'Platino', 'discount_percentage': '120'},
            format='json',
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            '/api/company-types/',
            {'name': 'Platino', 'discount_percentage': '25.5'},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['discount_percentage'], '25.50')


class CustomerCompanyTests(AccountsAPITestCase):
    def test_admin_assigns_and_clears_company(self):
        self.client.force_authenticate(self.admin)
        url = f'/api/customers/{self.customer.pk}/company/'

        response = self.client.post(url, {'companyId': self.acme.pk}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['company_name'], 'Acme Corp')
        self.assertEqual(response.data['company_type_name'], 'Gold')

        response = self.client.post(url, {'companyId': None}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.data['company_name'])

    def test_customers_list_excludes_admins(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/customers/')
        self.assertEqual([item['username'] for item in response.data], ['cliente'])

    def test_customer_cannot_list_customers(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get('/api/customers/').status_code, 403)
