"""
Test suite for the approval queue
Tests: cross-module listing, filters, one-shot decisions, audit trail, notifications, access
"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status

from quarry.core.models import AuditLog, Notification
from quarry.core.roles import CONTRACTOR, MANAGER, DIRECTOR
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.operations.models import DrillingRecord
from quarry.approvals.services import ApprovalError, decide
from quarry.approvals.views import ApprovalQueue


class ApprovalServiceTests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.manager = TestDataFactory.create_user(role=MANAGER)

    def test_decide_stamps_reviewer(self):
        record = TestDataFactory.create_drilling(self.contractor)
        decided = decide('drilling', record.pk, 'approved', self.manager)
        self.assertEqual(decided.status, 'approved')
        self.assertEqual(decided.reviewed_by, self.manager)
        self.assertIsNotNone(decided.reviewed_at)

    def test_second_decision_rejected(self):
        record = TestDataFactory.create_blasting(self.contractor)
        decide('blasting', record.pk, 'rejected', self.manager)
        with self.assertRaises(ApprovalError):
            decide('blasting', record.pk, 'approved', self.manager)
        record.refresh_from_db()
        self.assertEqual(record.status, 'rejected')

    def test_invalid_decision(self):
        record = TestDataFactory.create_fuel(self.contractor)
        with self.assertRaises(ApprovalError):
            decide('fuel', record.pk, 'pending', self.manager)

    def test_no_self_notification(self):
        record = TestDataFactory.create_transport(self.manager)
        decide('transport', record.pk, 'approved', self.manager)
        self.assertFalse(Notification.objects.filter(user=self.manager).exists())


class ApprovalAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.manager = TestDataFactory.create_user(role=MANAGER)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.manager)

    def _populate(self):
        drilling = TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_loading(self.contractor)
        TestDataFactory.create_jcb(self.contractor)
        TestDataFactory.create_purchase_request(self.contractor, required_by=timezone.localdate())
        approved = TestDataFactory.create_fuel(self.contractor)
        decide('fuel', approved.pk, 'approved', self.manager)
        return drilling

    def test_list_across_modules(self):
        self._populate()
        response = self.client.get('/api/v1/approvals/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 5)
        types = {item['record_type'] for item in response.data['results']}
        self.assertEqual(types, {'drilling', 'loading', 'jcb', 'purchase_request', 'fuel'})

    def test_status_and_type_filters(self):
        self._populate()
        response = self.client.get('/api/v1/approvals/?status=pending')
        self.assertEqual(response.data['count'], 4)
        response = self.client.get('/api/v1/approvals/?status=approved&record_type=fuel')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['reviewed_by'], self.manager.username)

    def test_newest_first(self):
        older = TestDataFactory.create_drilling(self.contractor)
        newer = TestDataFactory.create_blasting(self.contractor)
        DrillingRecord.objects.filter(pk=older.pk).update(created_at=timezone.now() - timedelta(hours=2))
        response = self.client.get('/api/v1/approvals/')
        ids = [(item['record_type'], item['record_id']) for item in response.data['results']]
        self.assertEqual(ids, [('blasting', newer.pk), ('drilling', older.pk)])

    def test_pages_follow_submission_order_across_types(self):
        now = timezone.now()
        created = [
            ('drilling', TestDataFactory.create_drilling(self.contractor), 1),
            ('fuel', TestDataFactory.create_fuel(self.contractor), 2),
            ('blasting', TestDataFactory.create_blasting(self.contractor), 3),
            ('drilling', TestDataFactory.create_drilling(self.contractor), 4),
            ('jcb', TestDataFactory.create_jcb(self.contractor), 5),
        ]
        for _, record, hours in created:
            type(record).objects.filter(pk=record.pk).update(created_at=now - timedelta(hours=hours))
        expected = [(record_type, record.pk) for record_type, record, _ in created]

        response = self.client.get('/api/v1/approvals/?limit=2&page=2')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 5)
        self.assertEqual(response.data['total_pages'], 3)
        ids = [(item['record_type'], item['record_id']) for item in response.data['results']]
        self.assertEqual(ids, expected[2:4])

        response = self.client.get('/api/v1/approvals/?limit=2&page=3')
        ids = [(item['record_type'], item['record_id']) for item in response.data['results']]
        self.assertEqual(ids, expected[4:])

    def test_queue_slice_reads_only_leading_rows(self):
        for _ in range(4):
            TestDataFactory.create_drilling(self.contractor)
        queue = ApprovalQueue(['drilling', 'fuel'])
        self.assertEqual(queue.count(), 4)
        with self.assertNumQueries(2):
            rows = queue[0:2]
        self.assertEqual(len(rows), 2)
        self.assertEqual(queue[3:10][0]['record_type'], 'drilling')
        self.assertEqual(queue[4:6], [])

    def test_invalid_filters(self):
        response = self.client.get('/api/v1/approvals/?status=archived')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get('/api/v1/approvals/?record_type=payroll')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        self._populate()
        response = self.client.get('/api/v1/approvals/summary/')
        self.assertEqual(response.data['total_pending'], 4)
        self.assertEqual(response.data['by_type']['drilling'], 1)
        self.assertEqual(response.data['by_type']['fuel'], 0)

    def test_approve(self):
        record = TestDataFactory.create_drilling(self.contractor)
        response = self.client.post(f'/api/v1/approvals/drilling/{record.pk}/', {'decision': 'approved'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'approved')
        self.assertEqual(response.data['reviewed_by'], self.manager.username)

        log = AuditLog.objects.get(action='approve')
        self.assertEqual(log.model_name, 'DrillingRecord')
        self.assertEqual(log.user, self.manager)

        notification = Notification.objects.get(user=self.contractor)
        self.assertEqual(notification.type, 'approval')
        self.assertEqual(notification.metadata['record_id'], record.pk)
        self.assertEqual(notification.metadata['decision'], 'approved')

    def test_reject_purchase_request(self):
        request = TestDataFactory.create_purchase_request(self.contractor)
        response = self.client.post(f'/api/v1/approvals/purchase_request/{request.pk}/',
                                    {'decision': 'rejected'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['date'])
        self.assertTrue(AuditLog.objects.filter(action='reject', model_name='PurchaseRequest').exists())

    def test_decide_twice(self):
        record = TestDataFactory.create_drilling(self.contractor)
        url = f'/api/v1/approvals/drilling/{record.pk}/'
        self.client.post(url, {'decision': 'approved'}, format='json')
        response = self.client.post(url, {'decision': 'rejected'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_invalid_decision_value(self):
        record = TestDataFactory.create_drilling(self.contractor)
        response = self.client.post(f'/api/v1/approvals/drilling/{record.pk}/', {'decision': 'maybe'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unknown_type_or_record(self):
        response = self.client.post('/api/v1/approvals/payroll/1/', {'decision': 'approved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        response = self.client.post('/api/v1/approvals/drilling/999/', {'decision': 'approved'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_director_can_decide(self):
        record = TestDataFactory.create_loading(self.contractor)
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=DIRECTOR))
        response = client.post(f'/api/v1/approvals/loading/{record.pk}/', {'decision': 'approved'},
                               format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_contractor_forbidden(self):
        record = TestDataFactory.create_drilling(self.contractor)
        client = AuthenticatedAPIClient().authenticate_user(self.contractor)
        response = client.post(f'/api/v1/approvals/drilling/{record.pk}/', {'decision': 'approved'},
                               format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = client.get('/api/v1/approvals/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        record.refresh_from_db()
        self.assertTrue(record.is_pending)
