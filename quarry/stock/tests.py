"""
Test suite for the stock module
Tests: production stock entries and material breakdown, purchase requests
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from quarry.core.roles import DIRECTOR, MANAGER
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.core.utils import current_year_prefix
from quarry.stock.models import PurchaseRequest


class ProductionStockAPITests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)

    def test_create(self):
        response = self.client.post('/api/v1/production-stock/', {
            'material_type': '20mm',
            'quantity': '180.5',
            'unit': 'tons',
            'location': 'Stockyard A',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created_by'], self.director.id)

    def test_negative_quantity_rejected(self):
        response = self.client.post('/api/v1/production-stock/', {
            'material_type': '20mm', 'quantity': '-3',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary_by_material(self):
        TestDataFactory.create_production_stock(self.director, material_type='20mm', quantity=Decimal('50'))
        TestDataFactory.create_production_stock(self.director, material_type='20mm', quantity=Decimal('25'))
        TestDataFactory.create_production_stock(self.director, material_type='M-Sand', quantity=Decimal('40'))
        response = self.client.get('/api/v1/production-stock/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['record_count'], 3)
        self.assertEqual(response.data['total_quantity'], 115.0)
        by_material = {row['material_type']: row['quantity'] for row in response.data['by_material']}
        self.assertEqual(by_material, {'20mm': 75.0, 'M-Sand': 40.0})

    def test_date_filter_uses_stock_date(self):
        today = timezone.localdate()
        TestDataFactory.create_production_stock(self.director, stock_date=today)
        TestDataFactory.create_production_stock(self.director, stock_date=today - timedelta(days=40))
        response = self.client.get(f'/api/v1/production-stock/?date_from={(today - timedelta(days=7)).isoformat()}')
        self.assertEqual(response.data['count'], 1)

    def test_manager_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=MANAGER))
        response = client.get('/api/v1/production-stock/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class PurchaseRequestAPITests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)

    def test_create_assigns_number(self):
        response = self.client.post('/api/v1/purchase-requests/', {
            'material_name': 'Drill bits',
            'quantity': '6',
            'priority': 'high',
            'estimated_cost': '18000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['request_number'], f"{current_year_prefix('PR')}001")
        self.assertEqual(response.data['status'], 'pending')

    def test_zero_quantity_rejected(self):
        response = self.client.post('/api/v1/purchase-requests/', {
            'material_name': 'Drill bits', 'quantity': '0',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary_excludes_rejected_cost(self):
        TestDataFactory.create_purchase_request(self.director, estimated_cost=Decimal('1000'))
        approved = TestDataFactory.create_purchase_request(self.director, estimated_cost=Decimal('2000'))
        rejected = TestDataFactory.create_purchase_request(self.director, estimated_cost=Decimal('5000'))
        approved.mark_reviewed(PurchaseRequest.STATUS_APPROVED, self.director)
        rejected.mark_reviewed(PurchaseRequest.STATUS_REJECTED, self.director)

        response = self.client.get('/api/v1/purchase-requests/summary/')
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['pending'], 1)
        self.assertEqual(response.data['approved'], 1)
        self.assertEqual(response.data['rejected'], 1)
        self.assertEqual(response.data['total_estimated_cost'], 3000.0)

    def test_filter_by_priority(self):
        TestDataFactory.create_purchase_request(self.director, priority='urgent')
        TestDataFactory.create_purchase_request(self.director, priority='low')
        response = self.client.get('/api/v1/purchase-requests/?priority=urgent')
        self.assertEqual(response.data['count'], 1)
