"""
Tests for brands and per-size/colour inventory.
"""
from django.test import TestCase

from storefront.models import Brand, Inventory, Product
from storefront.services.inventory import update_inventory
from storefront.tests.test_products_api import CatalogAPITestCase


class UpdateInventoryTests(TestCase):
    def setUp(self):
        self.product = Product.objects.create(name='Filipina', price='50.00')

    def test_creates_then_updates_same_pair(self):
        with self.assertLogs('storefront.services.inventory', level='INFO'):
            first = update_inventory(self.product, 'M', 'Azul', 10)
        Inventory.objects.filter(pk=first.pk).update(reserved_quantity=3)

        second = update_inventory(self.product, ' M ', 'Azul', 4)

        self.assertEqual(second.pk, first.pk)
        self.assertEqual(Inventory.objects.filter(product=self.product).count(), 1)
        second.refresh_from_db()
        self.assertEqual(second.quantity, 4)
        self.assertEqual(second.reserved_quantity, 3)
        self.assertEqual(second.available_quantity, 1)

    def test_pairs_are_independent(self):
        update_inventory(self.product, 'M', 'Azul', 10)
        update_inventory(self.product, 'M', 'Rojo', 2)
        update_inventory(self.product, 'G', 'Azul', 0)
        self.assertEqual(self.product.inventory.count(), 3)


class InventoryEndpointTests(CatalogAPITestCase):
    def url(self, pk=None):
        return self.product_url(pk or self.product.pk, 'inventory/')

    def test_anyone_can_read(self):
        update_inventory(self.product, 'CH', 'Rojo', 5)
        response = self.client.get(self.url())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['size'], 'CH')
        self.assertEqual(response.data[0]['available_quantity'], 5)

    def test_only_admin_can_write(self):
        payload = {'size': 'M', 'color': 'Rojo', 'quantity': 7}
        self.assertEqual(self.client.put(self.url(), payload, format='json').status_code, 403)

        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.put(self.url(), payload, format='json').status_code, 403)
        self.assertFalse(Inventory.objects.exists())

    def test_admin_upserts(self):
        self.client.force_authenticate(self.admin)
        created = self.client.put(self.url(), {'size': 'M', 'color': 'Rojo', 'quantity': 7}, format='json')
        self.assertEqual(created.status_code, 200)
        self.assertEqual(created.data['quantity'], 7)

        updated = self.client.put(self.url(), {'size': 'M', 'color': 'Rojo', 'quantity': 2}, format='json')
        self.assertEqual(updated.data['id'], created.data['id'])
        self.assertEqual(updated.data['quantity'], 2)

    def test_invalid_payload_and_product_id(self):
        self.client.force_authenticate(self.admin)
        response = self.client.put(self.url(), {'size': 'M', 'color': 'Rojo', 'quantity': -1}, format='json')
        self.assertEqual(response.status_code, 400)
        response = self.client.put(self.url(), {'size': 'M', 'quantity': 1}, format='json')
        self.assertEqual(response.status_code, 400)

        self.assertEqual(self.client.get(self.product_url('abc', 'inventory/')).status_code, 400)
        self.assertEqual(self.client.get(self.url(999999)).status_code, 404)


class BrandEndpointTests(CatalogAPITestCase):
    def test_list_is_public(self):
        Brand.objects.create(name='Uniline')
        Brand.objects.create(name='Cherokee')
        response = self.client.get('/api/brands/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([item['name'] for item in response.data], ['Cherokee', 'Uniline'])

    def test_write_is_admin_only(self):
        self.assertEqual(self.client.post('/api/brands/', {'name': 'Dickies'}, format='json').status_code, 403)
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.post('/api/brands/', {'name': 'Dickies'}, format='json').status_code, 403)

    def test_admin_crud(self):
        self.client.force_authenticate(self.admin)
        created = self.client.post(
            '/api/brands/',
            {'name': 'Dickies', 'logo': 'https://cdn.test/dickies.png'},
            format='json',
        )
        self.assertEqual(created.status_code, 201)
        self.assertTrue(created.data['is_active'])

        duplicate = self.client.post('/api/brands/', {'name': 'Dickies'}, format='json')
        self.assertEqual(duplicate.status_code, 400)

        url = f"/api/brands/{created.data['id']}/"
        updated = self.client.patch(url, {'is_active': False}, format='json')
        self.assertEqual(updated.status_code, 200)
        self.assertFalse(updated.data['is_active'])

        deleted = self.client.delete(url)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.data, {'message': 'Marca eliminada correctamente'})
        self.assertFalse(Brand.objects.exists())
