"""
Test suite for the crusher module
Tests: crusher production shift hours and efficiency, EB reports, tariff default,
power factor warnings and the latest-reading pre-fill
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from quarry.core.models import Notification
from quarry.core.roles import CRUSHER_MANAGER, CONTRACTOR, DIRECTOR
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.crusher.models import EBReport


def reading(kwh, pf=0.9):
    return {'kw': 110, 'kva': 120, 'kvah': 800, 'kwh': kwh, 'pf_c': 0.9, 'pf': pf}


class CrusherProductionAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=CRUSHER_MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_with_efficiency(self):
        response = self.client.post('/api/v1/crusher-production/', {
            'shift': 'morning',
            'crusher_type': 'jaw',
            'machine_working_hours': '9',
            'machine_downtime': '1.5',
            'maintenance_hours': '0.5',
            'material_input': '240',
            'total_output': '204',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['efficiency']), Decimal('85.00'))

    def test_hours_over_a_day_rejected(self):
        response = self.client.post('/api/v1/crusher-production/', {
            'machine_working_hours': '20',
            'machine_downtime': '3',
            'maintenance_hours': '2',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('machine_working_hours', response.data)

    def test_negative_output_rejected(self):
        response = self.client.post('/api/v1/crusher-production/', {'total_output': '-5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        TestDataFactory.create_crusher_production(self.user, material_input=Decimal('100'), total_output=Decimal('80'))
        TestDataFactory.create_crusher_production(self.user, material_input=Decimal('100'), total_output=Decimal('90'))
        response = self.client.get('/api/v1/crusher-production/summary/')
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_output'], 170.0)
        self.assertEqual(response.data['total_hours'], 16.0)
        self.assertEqual(response.data['average_efficiency'], 85.0)

    def test_contractor_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=CONTRACTOR))
        response = client.get('/api/v1/crusher-production/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class EBReportAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=CRUSHER_MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_computes_units_and_cost(self):
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': reading(15230.5),
            'ending_reading': reading(15480.5),
            'cost_per_unit': '8.50',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['units_consumed']), Decimal('250.00'))
        self.assertEqual(Decimal(response.data['total_cost']), Decimal('2125.00'))
        self.assertEqual(response.data['ending_reading']['kwh'], 15480.5)
        self.assertEqual(response.data['pf_warnings'], 0)

    def test_cost_per_unit_defaults_to_setting(self):
        TestDataFactory.create_setting('eb_cost_per_unit', '7.25')
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': reading(100),
            'ending_reading': reading(200),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['cost_per_unit']), Decimal('7.25'))
        self.assertEqual(Decimal(response.data['total_cost']), Decimal('725.00'))

    def test_malformed_setting_means_zero_cost(self):
        TestDataFactory.create_setting('eb_cost_per_unit', 'seven')
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': reading(100),
            'ending_reading': reading(200),
        }, format='json')
        self.assertEqual(Decimal(response.data['total_cost']), Decimal('0'))

    def test_ending_below_starting_rejected(self):
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': reading(500),
            'ending_reading': reading(400),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('ending_reading', response.data)

    def test_missing_kwh_rejected(self):
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': {'kw': 10},
            'ending_reading': reading(400),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_high_power_factor_notifies_submitter_and_directors(self):
        director = TestDataFactory.create_user(role=DIRECTOR)
        response = self.client.post('/api/v1/eb-reports/', {
            'starting_reading': reading(100, pf=0.97),
            'ending_reading': reading(200, pf=0.99),
            'cost_per_unit': '8',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['pf_warnings'], 4)

        warnings = Notification.objects.filter(type='pf_warning')
        self.assertEqual(warnings.filter(user=self.user).count(), 2)
        self.assertEqual(warnings.filter(user=director).count(), 2)
        note = warnings.filter(user=self.user, metadata__reading_type='ending').get()
        self.assertEqual(note.metadata['pf_value'], 0.99)
        self.assertEqual(note.metadata['report_id'], response.data['id'])

    def test_power_factor_at_threshold_is_not_flagged(self):
        report = TestDataFactory.create_eb_report(self.user, pf=0.95)
        self.assertEqual(report.high_power_factors(), [])

    def test_latest_reading(self):
        today = timezone.localdate()
        TestDataFactory.create_eb_report(self.user, start_kwh=0, end_kwh=100, report_date=today - timedelta(days=1))
        TestDataFactory.create_eb_report(self.user, start_kwh=100, end_kwh=180, report_date=today)
        response = self.client.get('/api/v1/eb-reports/latest-reading/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['ending_reading']['kwh'], 180)

    def test_latest_reading_empty(self):
        response = self.client.get('/api/v1/eb-reports/latest-reading/')
        self.assertIsNone(response.data['ending_reading'])

    def test_summary(self):
        TestDataFactory.create_eb_report(self.user, start_kwh=0, end_kwh=100, cost_per_unit=Decimal('8'))
        TestDataFactory.create_eb_report(self.user, start_kwh=100, end_kwh=300, cost_per_unit=Decimal('9'))
        response = self.client.get('/api/v1/eb-reports/summary/')
        self.assertEqual(response.data['report_count'], 2)
        self.assertEqual(response.data['total_units'], 300.0)
        self.assertEqual(response.data['total_cost'], 2600.0)
        self.assertEqual(response.data['average_cost_per_unit'], 8.67)
        self.assertEqual(EBReport.objects.count(), 2)
