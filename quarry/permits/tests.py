"""
Test suite for permits
Tests: date validation, days until expiry, expiry filters, summary, access
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from quarry.core.roles import DIRECTOR, MANAGER
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.permits.models import Permit


class PermitAPITests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)
        self.today = timezone.localdate()

    def test_create_permit(self):
        response = self.client.post('/api/v1/permits/', {
            'company_name': 'Sri Ganesh Blue Metals',
            'permit_type': 'crusher',
            'approval_date': str(self.today - timedelta(days=10)),
            'expiry_date': str(self.today + timedelta(days=355)),
            'quantity_in_mt': '250000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['days_until_expiry'], 355)
        self.assertEqual(response.data['created_by'], self.director.id)

    def test_expiry_before_approval_rejected(self):
        response = self.client.post('/api/v1/permits/', {
            'company_name': 'Sri Ganesh Blue Metals',
            'permit_type': 'quarry',
            'approval_date': str(self.today),
            'expiry_date': str(self.today - timedelta(days=1)),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('expiry_date', response.data)

    def test_same_day_expiry_allowed(self):
        permit = TestDataFactory.create_permit(self.director)
        response = self.client.patch(f'/api/v1/permits/{permit.id}/', {
            'expiry_date': str(permit.approval_date),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_expired_permit_has_negative_days(self):
        permit = TestDataFactory.create_permit(
            approval_date=self.today - timedelta(days=400), expiry_date=self.today - timedelta(days=5)
        )
        self.assertEqual(permit.days_until_expiry, -5)

    def test_expiring_within_filter(self):
        TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=10))
        TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=90))
        TestDataFactory.create_permit(
            approval_date=self.today - timedelta(days=400), expiry_date=self.today - timedelta(days=1)
        )
        response = self.client.get('/api/v1/permits/?expiring_within=30')
        self.assertEqual(response.data['count'], 1)

    def test_expiring_within_out_of_range(self):
        TestDataFactory.create_permit()
        for value in ('3000000', '-5'):
            response = self.client.get(f'/api/v1/permits/?expiring_within={value}')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn('expiring_within', response.data)
        response = self.client.get('/api/v1/permits/summary/?expiring_within=3000000')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_expiring_within_upper_bound(self):
        TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=3000))
        response = self.client.get('/api/v1/permits/?expiring_within=3650')
        self.assertEqual(response.data['count'], 1)

    def test_ordered_by_expiry(self):
        later = TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=200))
        sooner = TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=20))
        response = self.client.get('/api/v1/permits/')
        ids = [row['id'] for row in response.data['results']]
        self.assertEqual(ids, [sooner.id, later.id])

    def test_summary(self):
        TestDataFactory.create_permit(expiry_date=self.today + timedelta(days=10), quantity_in_mt=Decimal('1000'))
        TestDataFactory.create_permit(quantity_in_mt=Decimal('500'))
        TestDataFactory.create_permit(
            approval_date=self.today - timedelta(days=400), expiry_date=self.today - timedelta(days=1),
            status='expired'
        )
        response = self.client.get('/api/v1/permits/summary/')
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(response.data['active'], 2)
        self.assertEqual(response.data['expired'], 1)
        self.assertEqual(response.data['expiring_soon'], 1)
        self.assertEqual(response.data['total_quantity_mt'], 1500.0)

    def test_manager_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=MANAGER))
        response = client.get('/api/v1/permits/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Permit.objects.exists())
