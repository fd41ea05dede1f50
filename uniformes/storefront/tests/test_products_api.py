"""
API tests for the catalog: products, categories, colours and colour images.
"""
import io
from decimal import Decimal
from unittest import mock

from django.contrib.auth.models import User
from django.db import DatabaseError
from django.urls import reverse
from openpyxl import load_workbook
from rest_framework.test import APIClient, APITestCase

from accounts.models import Company, CompanyType
from productcolors.models import Color, ProductColorImage
from storefront.models import Category, Product


class CatalogAPITestCase(APITestCase):
    @classmethod
    def setUpTestData(cls):
        cls.category = Category.objects.create(name="Médico")
        cls.product = Product.objects.create(
            name="Filipina clínica",
            category=cls.category,
            brand="Uniline",
            price=Decimal("50.00"),
            images=["https://cdn.test/p1.jpg", "https://cdn.test/p2.jpg"],
            sizes=["CH", "M", "G"],
            colors=["Rojo", "Morado"],
        )
        cls.inactive = Product.objects.create(
            name="Pantalón quirúrgico",
            brand="Otra",
            price=Decimal("30.00"),
            is_active=False,
        )
        cls.red = Color.objects.create(name="Rojo", hex_code="#FF0000")
        cls.blue = Color.objects.create(name="Azul", hex_code="#0000FF")
        cls.admin = User.objects.create_user("admin", "admin@uniformes.test", "secret123", is_staff=True)
        cls.customer = User.objects.create_user("cliente", "cliente@uniformes.test", "secret123")

        gold = CompanyType.objects.create(name="Gold", discount_percentage=Decimal("20.00"))
        acme = Company.objects.create(name="Acme Corp", company_type=gold)
        profile = cls.customer.customer_profile
        profile.company = acme
        profile.save()

    def setUp(self):
        self.client = APIClient()

    def product_url(self, pk, suffix=''):
        return f'/api/products/{pk}/{suffix}'


class ProductListTests(CatalogAPITestCase):
    def test_list_returns_all_products_newest_first(self):
        response = self.client.get('/api/products/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item['id'] for item in response.data], [self.inactive.pk, self.product.pk])

    def test_filters(self):
        response = self.client.get('/api/products/', {'isActive': 'true'})
        self.assertEqual([item['id'] for item in response.data], [self.product.pk])

        response = self.client.get('/api/products/', {'categoryId': self.category.pk})
        self.assertEqual([item['id'] for item in response.data], [self.product.pk])

        response = self.client.get('/api/products/', {'search': 'quirúrgico'})
        self.assertEqual([item['id'] for item in response.data], [self.inactive.pk])

        response = self.client.get('/api/products/', {'limit': 1, 'offset': 1})
        self.assertEqual([item['id'] for item in response.data], [self.product.pk])

    def test_anonymous_enrichment(self):
        response = self.client.get('/api/products/', {'isActive': 'true'})
        item = response.data[0]
        self.assertEqual(item['originalPrice'], '50.00')
        self.assertEqual(item['discountedPrice'], '50.00')
        self.assertEqual(item['discount'], '0')
        self.assertIsNone(item['companyTypeName'])
        self.assertEqual(item['primaryImage'], 'https://cdn.test/p1.jpg')
        self.assertEqual(item['colorImages'], [])

    def test_customer_gets_tier_price(self):
        self.client.force_authenticate(self.customer)
        response = self.client.get('/api/products/', {'isActive': 'true'})
        item = response.data[0]
        self.assertEqual(item['originalPrice'], '50.00')
        self.assertEqual(item['discountedPrice'], '40.00')
        self.assertEqual(item['companyTypeName'], 'Gold')

    def test_admin_sees_list_price(self):
        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/products/', {'isActive': 'true'})
        self.assertEqual(response.data[0]['discountedPrice'], '50.00')


class ProductDetailTests(CatalogAPITestCase):
    def test_non_numeric_id_is_400(self):
        response = self.client.get(self.product_url('abc'))
        self.assertEqual(response.status_code, 400)

    def test_missing_product_is_404(self):
        response = self.client.get(self.product_url(999999))
        self.assertEqual(response.status_code, 404)

    def test_selected_colour_images(self):
        ProductColorImage.objects.create(product=self.product, color=self.red, images=["a.jpg", "b.jpg"])
        response = self.client.get(self.product_url(self.product.pk), {'color': 'rojo'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['displayImages'], ["a.jpg", "b.jpg"])
        self.assertEqual(response.data['selectedColor'], 'rojo')
        self.assertEqual(
            response.data['colorHex'],
            [{'name': 'Rojo', 'hexCode': '#FF0000'}, {'name': 'Morado', 'hexCode': '#CCCCCC'}],
        )
        self.assertEqual(response.data['colorImages'][0]['name'], 'Rojo')

    def test_without_colour_uses_product_images(self):
        response = self.client.get(self.product_url(self.product.pk))
        self.assertEqual(response.data['displayImages'], self.product.images)
        self.assertEqual(response.data['firstImage'], 'https://cdn.test/p1.jpg')

    def test_display_images_endpoint(self):
        ProductColorImage.objects.create(product=self.product, color=self.blue, images=[])
        response = self.client.get(self.product_url(self.product.pk, 'display-images/'), {'color': 'Azul'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {
            'images': self.product.images,
            'firstImage': 'https://cdn.test/p1.jpg',
        })

    def test_colour_lookup_failure_degrades_to_product_images(self):
        ProductColorImage.objects.create(product=self.product, color=self.red, images=["a.jpg"])
        with mock.patch(
            'storefront.services.catalog_helpers.load_color_refs',
            side_effect=DatabaseError('colors table unavailable'),
        ):
            with self.assertLogs('storefront.services.catalog_helpers', level='WARNING'):
                detail = self.client.get(self.product_url(self.product.pk), {'color': 'Rojo'})
            with self.assertLogs('storefront.services.catalog_helpers', level='WARNING'):
                images = self.client.get(self.product_url(self.product.pk, 'display-images/'), {'color': 'Rojo'})

        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.data['displayImages'], self.product.images)
        self.assertEqual(detail.data['originalPrice'], '50.00')
        self.assertEqual(detail.data['colorHex'][0], {'name': 'Rojo', 'hexCode': '#CCCCCC'})
        self.assertEqual(images.status_code, 200)
        self.assertEqual(images.data['images'], self.product.images)


class ProductWriteTests(CatalogAPITestCase):
    def test_anonymous_cannot_create(self):
        response = self.client.post('/api/products/', {'name': 'X', 'price': '10.00'}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_sku_generated_when_blank(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/products/',
            {'name': 'Gorro quirúrgico', 'price': '25.00', 'sku': ''},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.data['sku'].startswith('PRD-'))

    def test_duplicate_sku(self):
        Product.objects.filter(pk=self.product.pk).update(sku='FIL-001')
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/products/',
            {'name': 'Copia', 'price': '25.00', 'sku': 'FIL-001'},
            format='json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'duplicate_sku')

    def test_delete_returns_message(self):
        self.client.force_authenticate(self.admin)
        response = self.client.delete(self.product_url(self.inactive.pk))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Product.objects.filter(pk=self.inactive.pk).exists())


class ColorImageEndpointTests(CatalogAPITestCase):
    def setUp(self):
        super().setUp()
        self.client.force_authenticate(self.admin)

    def test_create_and_list(self):
        response = self.client.post(
            self.product_url(self.product.pk, 'color-images/'),
            {'colorId': self.red.pk, 'images': ['r1.jpg', 'r2.jpg'], 'isPrimary': True},
            format='json',
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['colorName'], 'Rojo')

        response = self.client.get(self.product_url(self.product.pk, 'color-images/'))
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['images'], ['r1.jpg', 'r2.jpg'])

    def test_duplicate_colour_rejected(self):
        ProductColorImage.objects.create(product=self.product, color=self.red, images=['r.jpg'])
        response = self.client.post(
            self.product_url(self.product.pk, 'color-images/'),
            {'colorId': self.red.pk, 'images': ['x.jpg']},
            format='json',
        )
        self.assertEqual(response.status_code, 400)

    def test_put_replaces_whole_set(self):
        ProductColorImage.objects.create(product=self.product, color=self.red, images=['r.jpg'])
        response = self.client.put(
            self.product_url(self.product.pk, 'color-images/'),
            {'colorImages': [
                {'colorId': self.red.pk, 'images': ['r-new.jpg']},
                {'colorId': self.blue.pk, 'images': ['b.jpg'], 'isPrimary': True},
            ]},
            format='json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item['colorName'] for item in response.data], ['Rojo', 'Azul'])
        self.assertEqual(
            list(self.product.color_images.order_by('sort_order').values_list('images', flat=True)),
            [['r-new.jpg'], ['b.jpg']],
        )

    def test_update_and_delete_single_association(self):
        association = ProductColorImage.objects.create(product=self.product, color=self.red, images=['r.jpg'])
        url = self.product_url(self.product.pk, f'color-images/{association.pk}/')

        response = self.client.patch(url, {'images': ['r2.jpg']}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['images'], ['r2.jpg'])

        response = self.client.delete(url)
        self.assertEqual(response.status_code, 204)
        self.assertFalse(ProductColorImage.objects.filter(pk=association.pk).exists())


class ColorEndpointTests(CatalogAPITestCase):
    def test_list(self):
        response = self.client.get('/api/colors/')
        self.assertEqual(response.data, [
            {'id': self.blue.pk, 'name': 'Azul', 'hexCode': '#0000FF'},
            {'id': self.red.pk, 'name': 'Rojo', 'hexCode': '#FF0000'},
        ])

    def test_create_normalises_hex(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/colors/', {'name': 'Verde', 'hexCode': '00ff00'}, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['hexCode'], '#00FF00')

    def test_invalid_hex_and_duplicate_name(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/colors/', {'name': 'Gris', 'hexCode': 'nothex'}, format='json')
        self.assertEqual(response.status_code, 400)
        response = self.client.post('/api/colors/', {'name': 'rojo'}, format='json')
        self.assertEqual(response.status_code, 400)


class PriceListTests(CatalogAPITestCase):
    def test_customer_price_list(self):
        self.client.force_authenticate(self.customer)
        response = self.client.get(reverse('api-product-price-list'))
        self.assertEqual(response.status_code, 200)
        self.assertIn('lista_precios_', response['Content-Disposition'])

        sheet = load_workbook(io.BytesIO(response.content)).active
        self.assertEqual(sheet.cell(row=3, column=2).value, 'Filipina clínica')
        self.assertEqual(sheet.cell(row=3, column=7).value, 50.0)
        self.assertEqual(sheet.cell(row=3, column=9).value, 40.0)
        self.assertIsNone(sheet.cell(row=4, column=2).value)
