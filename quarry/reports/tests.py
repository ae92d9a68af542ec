"""
Test suite for dashboards and reports
Tests: director dashboard, contractor dashboard, production, sales, accounting, quarry production, date ranges
"""
from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from quarry.approvals.services import decide
from quarry.core.roles import CONTRACTOR, MANAGER, DIRECTOR, SALES
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient


class ReportTestCase(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)
        self.today = timezone.localdate()


class DirectorDashboardTests(ReportTestCase):

    def test_dashboard_counts(self):
        TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_drilling(self.contractor)
        approved = TestDataFactory.create_blasting(self.contractor)
        decide('blasting', approved.pk, 'approved', self.director)
        TestDataFactory.create_crusher_production(self.director)
        TestDataFactory.create_invoice(self.director)
        TestDataFactory.create_attendance(self.contractor)
        TestDataFactory.create_eb_report(self.director)
        TestDataFactory.create_user(role=SALES, is_active=False)

        response = self.client.get('/api/v1/reports/director-dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['drilling_records'], 2)
        self.assertEqual(response.data['blasting_records'], 1)
        self.assertEqual(response.data['crusher_production_records'], 1)
        self.assertEqual(response.data['total_revenue'], 1050.0)
        self.assertEqual(response.data['pending_approvals'], 2)
        self.assertEqual(response.data['active_users'], 2)
        self.assertEqual(response.data['today_attendance'], 1)
        self.assertEqual(response.data['eb_units_consumed'], 250.0)
        self.assertEqual(response.data['eb_total_cost'], 2000.0)

    def test_manager_can_view_reports(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=MANAGER))
        response = client.get('/api/v1/reports/director-dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_contractor_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(self.contractor)
        response = client.get('/api/v1/reports/director-dashboard/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class ContractorDashboardTests(ReportTestCase):

    def test_counts_own_entries_only(self):
        TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_drilling(self.contractor, date=self.today - timedelta(days=3))
        TestDataFactory.create_drilling(self.contractor, date=self.today - timedelta(days=20))
        loading = TestDataFactory.create_loading(self.contractor)
        decide('loading', loading.pk, 'approved', self.director)
        TestDataFactory.create_drilling(TestDataFactory.create_user(role=CONTRACTOR))

        client = AuthenticatedAPIClient().authenticate_user(self.contractor)
        response = client.get('/api/v1/reports/contractor-dashboard/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['drilling'], {'today': 1, 'last_7_days': 2, 'pending': 3, 'approved': 0})
        self.assertEqual(response.data['loading']['approved'], 1)
        self.assertEqual(response.data['blasting']['today'], 0)
        self.assertEqual(response.data['totals']['today'], 2)
        self.assertEqual(response.data['totals']['pending'], 3)


class ProductionReportTests(ReportTestCase):

    def test_by_material(self):
        TestDataFactory.create_production_stock(self.director, '20mm', Decimal('50'))
        TestDataFactory.create_production_stock(self.director, '20mm', Decimal('30'))
        TestDataFactory.create_production_stock(self.director, 'M-Sand', Decimal('100'))
        TestDataFactory.create_production_stock(
            self.director, '40mm', Decimal('70'), stock_date=self.today - timedelta(days=45)
        )
        response = self.client.get('/api/v1/reports/production/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period']['to'], self.today.isoformat())
        self.assertEqual(response.data['summary']['total_quantity'], 180.0)
        self.assertEqual(response.data['summary']['entry_count'], 3)
        self.assertEqual(response.data['summary']['material_count'], 2)
        self.assertEqual(response.data['by_material'][0]['material_type'], 'M-Sand')
        self.assertEqual(response.data['by_material'][1]['entries'], 2)

    def test_default_window_includes_today(self):
        TestDataFactory.create_production_stock(
            self.director, '20mm', Decimal('10'), stock_date=self.today - timedelta(days=29)
        )
        TestDataFactory.create_production_stock(
            self.director, '20mm', Decimal('25'), stock_date=self.today - timedelta(days=30)
        )
        response = self.client.get('/api/v1/reports/production/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period']['from'], (self.today - timedelta(days=29)).isoformat())
        self.assertEqual(response.data['summary']['total_quantity'], 10.0)
        self.assertEqual(response.data['summary']['entry_count'], 1)

    def test_explicit_range(self):
        TestDataFactory.create_production_stock(
            self.director, '40mm', Decimal('70'), stock_date=self.today - timedelta(days=45)
        )
        date_from = (self.today - timedelta(days=60)).isoformat()
        response = self.client.get(f'/api/v1/reports/production/?date_from={date_from}')
        self.assertEqual(response.data['summary']['total_quantity'], 70.0)

    def test_bad_dates(self):
        response = self.client.get('/api/v1/reports/production/?date_from=18-10-2026')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        response = self.client.get('/api/v1/reports/production/?date_from=2026-02-01&date_to=2026-01-01')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class SalesReportTests(ReportTestCase):

    def test_summary_and_top_lists(self):
        TestDataFactory.create_dispatch(self.director, Decimal('30'), Decimal('30'), customer_name='Kaveri Infra',
                                        material_type='20mm', delivery_status='delivered')
        TestDataFactory.create_dispatch(self.director, Decimal('10'), customer_name='Kaveri Infra',
                                        material_type='M-Sand')
        TestDataFactory.create_dispatch(self.director, Decimal('20'), customer_name='Lakshmi Builders',
                                        material_type='20mm', delivery_status='cancelled')
        TestDataFactory.create_dispatch(self.director, Decimal('40'), dispatch_date=self.today - timedelta(days=90))

        response = self.client.get('/api/v1/reports/sales/')
        summary = response.data['summary']
        self.assertEqual(summary['total_dispatches'], 3)
        self.assertEqual(summary['total_quantity'], 60.0)
        self.assertEqual(summary['delivered'], 1)
        self.assertEqual(summary['pending'], 1)
        self.assertEqual(summary['delivery_rate'], 33.33)
        self.assertEqual(summary['average_per_dispatch'], 20.0)
        self.assertEqual(response.data['top_customers'][0], {
            'name': 'Kaveri Infra', 'total_quantity': 40.0, 'dispatch_count': 2,
        })
        self.assertEqual(response.data['top_materials'][0]['name'], '20mm')

    def test_empty_period(self):
        response = self.client.get('/api/v1/reports/sales/')
        self.assertEqual(response.data['summary']['delivery_rate'], 0)
        self.assertEqual(response.data['top_customers'], [])


class AccountingReportTests(ReportTestCase):

    def test_income_and_expense(self):
        TestDataFactory.create_account_transaction(self.director, 'invoice', Decimal('5000'), payment_method='upi')
        TestDataFactory.create_account_transaction(self.director, 'payment', Decimal('2000'), payment_method='cash')
        TestDataFactory.create_account_transaction(self.director, 'expense', Decimal('1200'), payment_method='cash')
        TestDataFactory.create_account_transaction(self.director, 'expense', Decimal('300'), reason='Spares',
                                                   payment_method='cash')

        response = self.client.get('/api/v1/reports/accounting/')
        summary = response.data['summary']
        self.assertEqual(summary['total_income'], 7000.0)
        self.assertEqual(summary['total_expense'], 1500.0)
        self.assertEqual(summary['net_balance'], 5500.0)
        self.assertEqual(summary['transaction_count'], 4)
        self.assertEqual(response.data['top_expense_reasons'][0], {'reason': 'Diesel', 'total': 1200.0, 'count': 1})
        methods = {row['method']: row['count'] for row in response.data['payment_methods']}
        self.assertEqual(methods, {'upi': 1, 'cash': 3})


class QuarryProductionReportTests(ReportTestCase):

    def test_sections(self):
        TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_blasting(self.contractor)
        TestDataFactory.create_loading(self.contractor)
        TestDataFactory.create_transport(self.contractor)
        TestDataFactory.create_transport(self.contractor, date=self.today - timedelta(days=40))

        response = self.client.get('/api/v1/reports/quarry-production/')
        self.assertEqual(response.data['drilling']['total_holes'], 14)
        self.assertEqual(response.data['drilling']['total_depth'], 110.0)
        self.assertEqual(response.data['drilling']['approx_production_tons'], 88.0)
        self.assertEqual(response.data['blasting']['total_ed'], 10)
        self.assertEqual(response.data['blasting']['total_pg'], 2.0)
        self.assertEqual(response.data['loading']['total_hours_worked'], 8.5)
        self.assertEqual(response.data['transport']['total_trips'], 1)
        self.assertEqual(response.data['transport']['total_distance'], 12.0)
