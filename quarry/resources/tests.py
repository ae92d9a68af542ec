"""
Test suite for site resources
Tests: fuel records, inventory and low stock, safety incidents with status flow and images
"""
import shutil
import tempfile
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from rest_framework import status

from quarry.core.models import AuditLog
from quarry.core.roles import CONTRACTOR, MANAGER
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.core.utils import current_year_prefix
from quarry.resources.models import SafetyIncident


class FuelAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create_assigns_number_and_total(self):
        response = self.client.post('/api/v1/fuel/', {
            'vehicle_number': 'TN-45-AB-1234',
            'fuel_type': 'Diesel',
            'quantity_liters': '120.50',
            'cost_per_liter': '92.40',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['record_number'], f"{current_year_prefix('FUEL')}0001")
        self.assertEqual(Decimal(response.data['total_cost']), Decimal('11134.20'))
        self.assertEqual(response.data['status'], 'pending')

    def test_numbers_are_sequential(self):
        first = TestDataFactory.create_fuel(self.contractor)
        second = TestDataFactory.create_fuel(self.contractor)
        self.assertTrue(first.record_number.endswith('0001'))
        self.assertTrue(second.record_number.endswith('0002'))

    def test_zero_quantity_rejected(self):
        response = self.client.post('/api/v1/fuel/', {
            'vehicle_number': 'TN-45-AB-1234', 'quantity_liters': '0', 'cost_per_liter': '92.40',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('quantity_liters', response.data)

    def test_summary(self):
        TestDataFactory.create_fuel(self.contractor, quantity_liters=Decimal('50'), cost_per_liter=Decimal('90'))
        TestDataFactory.create_fuel(self.contractor, quantity_liters=Decimal('50'), cost_per_liter=Decimal('100'))
        response = self.client.get('/api/v1/fuel/summary/')
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_liters'], 100.0)
        self.assertEqual(response.data['total_cost'], 9500.0)
        self.assertEqual(response.data['average_cost_per_liter'], 95.0)

    def test_search(self):
        TestDataFactory.create_fuel(self.contractor, vehicle_number='KA-01-9999')
        TestDataFactory.create_fuel(self.contractor, vehicle_number='TN-02-1111')
        response = self.client.get('/api/v1/fuel/?search=ka-01')
        self.assertEqual(response.data['count'], 1)


class InventoryAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create_assigns_item_code(self):
        response = self.client.post('/api/v1/inventory/', {
            'item_name': 'Drill bit 32mm',
            'category': 'Consumables',
            'quantity': '12',
            'minimum_quantity': '4',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['item_code'], 'INV-0001')
        self.assertFalse(response.data['is_low_stock'])

    def test_negative_quantity_rejected(self):
        response = self.client.post('/api/v1/inventory/', {'item_name': 'Gloves', 'quantity': '-1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_low_stock_filter_and_summary(self):
        TestDataFactory.create_inventory_item(quantity=Decimal('2'), minimum_quantity=Decimal('5'))
        TestDataFactory.create_inventory_item(quantity=Decimal('5'), minimum_quantity=Decimal('5'))
        TestDataFactory.create_inventory_item(quantity=Decimal('20'), minimum_quantity=Decimal('5'))

        response = self.client.get('/api/v1/inventory/?low_stock=true')
        self.assertEqual(response.data['count'], 2)
        self.assertTrue(all(item['is_low_stock'] for item in response.data['results']))

        response = self.client.get('/api/v1/inventory/summary/')
        self.assertEqual(response.data, {'total_items': 3, 'low_stock_items': 2, 'in_stock_items': 1})

    def test_inventory_is_shared(self):
        TestDataFactory.create_inventory_item(user=TestDataFactory.create_user(role=CONTRACTOR))
        response = self.client.get('/api/v1/inventory/')
        self.assertEqual(response.data['count'], 1)


class SafetyIncidentAPITests(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media_root)
        self.override.enable()
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.manager = TestDataFactory.create_user(role=MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)
        self.manager_client = AuthenticatedAPIClient().authenticate_user(self.manager)

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_report_incident(self):
        response = self.client.post('/api/v1/safety-incidents/', {
            'location': 'Bench 3',
            'incident_type': 'Fall',
            'severity': 'High',
            'description': 'Loose rock fell near the haul road',
            'status': 'closed',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'reported')

    def test_status_moves_forward(self):
        incident = TestDataFactory.create_safety_incident(self.contractor)
        response = self.manager_client.post(f'/api/v1/safety-incidents/{incident.id}/status/', {
            'status': 'investigating',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'investigating')
        self.assertTrue(AuditLog.objects.filter(action='status_change', object_id=str(incident.id)).exists())

        response = self.manager_client.post(f'/api/v1/safety-incidents/{incident.id}/status/', {
            'status': 'resolved', 'corrective_action': 'Barricaded the bench',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        incident.refresh_from_db()
        self.assertEqual(incident.corrective_action, 'Barricaded the bench')

    def test_status_cannot_move_back(self):
        incident = TestDataFactory.create_safety_incident(self.contractor, status=SafetyIncident.STATUS_RESOLVED)
        response = self.manager_client.post(f'/api/v1/safety-incidents/{incident.id}/status/', {
            'status': 'investigating',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_contractor_cannot_change_status(self):
        incident = TestDataFactory.create_safety_incident(self.contractor)
        response = self.client.post(f'/api/v1/safety-incidents/{incident.id}/status/', {
            'status': 'investigating',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_attach_image(self):
        incident = TestDataFactory.create_safety_incident(self.contractor)
        response = self.client.post(f'/api/v1/safety-incidents/{incident.id}/images/', {
            'image': SimpleUploadedFile('scene.png', b'\x89PNG' + b'0' * 20, content_type='image/png'),
            'caption': 'Scene',
        }, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(incident.images.count(), 1)

    def test_attach_non_image_rejected(self):
        incident = TestDataFactory.create_safety_incident(self.contractor)
        response = self.client.post(f'/api/v1/safety-incidents/{incident.id}/images/', {
            'image': SimpleUploadedFile('report.txt', b'text', content_type='text/plain'),
        }, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        TestDataFactory.create_safety_incident(self.contractor, severity='Critical')
        TestDataFactory.create_safety_incident(self.contractor, status=SafetyIncident.STATUS_CLOSED)
        TestDataFactory.create_safety_incident(self.contractor)
        response = self.client.get('/api/v1/safety-incidents/summary/')
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['critical'], 1)
        self.assertEqual(response.data['resolved'], 1)
        self.assertEqual(response.data['this_month'], 3)
