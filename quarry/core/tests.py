"""
Test suite for the core module
Tests: login/JWT claims, roles and module access, users, settings, audit logs, notifications
"""
from io import StringIO
from unittest import mock

from django.contrib.auth.models import Group
from django.core.management import call_command
from django.db import IntegrityError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from quarry.core.models import AuditLog, Notification, Setting
from quarry.core.roles import (
    DIRECTOR, MANAGER, CONTRACTOR, CRUSHER_MANAGER, SALES,
    get_user_role, can_access_module, is_reviewer, module_access,
)
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.core.utils import (
    SEQUENCE_ATTEMPTS, create_audit_log, notify, next_sequence_number, current_year_prefix
)
from quarry.resources.models import FuelRecord, InventoryItem


class RoleTests(TestCase):
    """Role resolution and module access"""

    def test_role_from_group(self):
        user = TestDataFactory.create_user(role=CONTRACTOR)
        self.assertEqual(get_user_role(user), CONTRACTOR)

    def test_no_group_has_no_role(self):
        user = TestDataFactory.create_user()
        self.assertIsNone(get_user_role(user))
        self.assertFalse(can_access_module(user, 'drilling'))

    def test_superuser_without_group_is_director(self):
        user = TestDataFactory.create_user(is_superuser=True, is_staff=True)
        self.assertEqual(get_user_role(user), DIRECTOR)

    def test_highest_priority_group_wins(self):
        user = TestDataFactory.create_user(role=CONTRACTOR)
        user.groups.add(Group.objects.get_or_create(name='Manager')[0])
        self.assertEqual(get_user_role(user), MANAGER)

    def test_director_can_access_everything(self):
        user = TestDataFactory.create_user(role=DIRECTOR)
        self.assertTrue(all(module_access(user).values()))

    def test_contractor_modules(self):
        user = TestDataFactory.create_user(role=CONTRACTOR)
        self.assertTrue(can_access_module(user, 'drilling'))
        self.assertTrue(can_access_module(user, 'fuel'))
        self.assertFalse(can_access_module(user, 'sales'))
        self.assertFalse(can_access_module(user, 'crusher_production'))
        self.assertFalse(can_access_module(user, 'approvals'))

    def test_crusher_manager_modules(self):
        user = TestDataFactory.create_user(role=CRUSHER_MANAGER)
        self.assertTrue(can_access_module(user, 'eb_reports'))
        self.assertFalse(can_access_module(user, 'drilling'))

    def test_sales_modules(self):
        user = TestDataFactory.create_user(role=SALES)
        self.assertTrue(can_access_module(user, 'customers'))
        self.assertFalse(can_access_module(user, 'permits'))

    def test_reviewers(self):
        self.assertTrue(is_reviewer(TestDataFactory.create_user(role=DIRECTOR)))
        self.assertTrue(is_reviewer(TestDataFactory.create_user(role=MANAGER)))
        self.assertFalse(is_reviewer(TestDataFactory.create_user(role=CONTRACTOR)))


class AuthTests(TestCase):
    """Login, token claims and the current-user endpoint"""

    def setUp(self):
        self.client = APIClient()
        self.user = TestDataFactory.create_user(username='site_lead', password='testpass123', role=MANAGER)

    def test_login_returns_tokens_and_user(self):
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'site_lead', 'password': 'testpass123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['user']['role'], MANAGER)

    def test_token_carries_role_claims(self):
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'site_lead', 'password': 'testpass123'
        }, format='json')
        token = AccessToken(response.data['access'])
        self.assertEqual(token['username'], 'site_lead')
        self.assertEqual(token['role'], MANAGER)
        self.assertEqual(token['groups'], ['Manager'])

    def test_login_wrong_password(self):
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'site_lead', 'password': 'wrong'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_disabled_account_cannot_login(self):
        TestDataFactory.create_user(username='gone', password='testpass123', is_active=False)
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'gone', 'password': 'testpass123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh(self):
        login = self.client.post('/api/v1/auth/login/', {
            'username': 'site_lead', 'password': 'testpass123'
        }, format='json')
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_refresh_for_deleted_user(self):
        login = self.client.post('/api/v1/auth/login/', {
            'username': 'site_lead', 'password': 'testpass123'
        }, format='json')
        self.user.delete()
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_lists_modules(self):
        client = AuthenticatedAPIClient().authenticate_user(self.user)
        response = client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'site_lead')
        self.assertTrue(response.data['modules']['approvals'])
        self.assertFalse(response.data['modules']['users'])

    def test_unauthenticated_request_rejected(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserAPITests(TestCase):
    """Director user management"""

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)

    def test_create_user_with_role(self):
        response = self.client.post('/api/v1/users/', {
            'username': 'driller1',
            'email': 'driller1@example.com',
            'password': 'Quarry-pass-2024',
            'password_confirm': 'Quarry-pass-2024',
            'role': CONTRACTOR,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['role'], CONTRACTOR)
        self.assertTrue(AuditLog.objects.filter(action='user_create', object_name='driller1').exists())

    def test_create_user_duplicate_email(self):
        TestDataFactory.create_user(email='taken@example.com')
        response = self.client.post('/api/v1/users/', {
            'username': 'another',
            'email': 'taken@example.com',
            'password': 'Quarry-pass-2024',
            'password_confirm': 'Quarry-pass-2024',
            'role': SALES,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_create_user_password_mismatch(self):
        response = self.client.post('/api/v1/users/', {
            'username': 'another',
            'email': 'another@example.com',
            'password': 'Quarry-pass-2024',
            'password_confirm': 'Quarry-pass-2025',
            'role': SALES,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_change_role_and_deactivate(self):
        user = TestDataFactory.create_user(role=CONTRACTOR)
        response = self.client.patch(f'/api/v1/users/{user.id}/', {
            'role': CRUSHER_MANAGER, 'is_active': False
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        user.refresh_from_db()
        self.assertEqual(get_user_role(user), CRUSHER_MANAGER)
        self.assertFalse(user.is_active)

    def test_filter_by_role(self):
        TestDataFactory.create_user(role=SALES)
        response = self.client.get('/api/v1/users/?role=sales')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_cannot_delete_self(self):
        response = self.client.delete(f'/api/v1/users/{self.director.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_user(self):
        user = TestDataFactory.create_user()
        response = self.client.delete(f'/api/v1/users/{user.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_non_director_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=MANAGER))
        response = client.get('/api/v1/users/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class SettingAPITests(TestCase):

    def setUp(self):
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.create_user(role=DIRECTOR))

    def test_create_and_read_setting(self):
        response = self.client.post('/api/v1/settings/', {'key': 'eb_cost_per_unit', 'value': '7.50'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Setting.get_value('eb_cost_per_unit'), '7.50')

    def test_get_value_default(self):
        self.assertEqual(Setting.get_value('missing', 'fallback'), 'fallback')


class AuditLogTests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)

    def test_create_audit_log_requires_fields(self):
        self.assertIsNone(create_audit_log(user=self.director, action='create', model_name='X'))
        log = create_audit_log(user=self.director, action='create', model_name='X', object_id=1)
        self.assertEqual(log.object_id, '1')

    def test_contractor_sees_only_own_entries(self):
        create_audit_log(user=self.director, action='create', model_name='X', object_id=1)
        create_audit_log(user=self.contractor, action='create', model_name='X', object_id=2)
        client = AuthenticatedAPIClient().authenticate_user(self.contractor)
        response = client.get('/api/v1/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_director_sees_all_entries(self):
        create_audit_log(user=self.director, action='create', model_name='X', object_id=1)
        create_audit_log(user=self.contractor, action='create', model_name='X', object_id=2)
        client = AuthenticatedAPIClient().authenticate_user(self.director)
        response = client.get('/api/v1/audit-logs/?action=create')
        self.assertEqual(response.data['count'], 2)


class NotificationTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_notify_skips_missing_user(self):
        self.assertIsNone(notify(None, 'title', 'message'))

    def test_list_and_mark_read(self):
        first = notify(self.user, 'Approved', 'Your record was approved', type='approval')
        notify(self.user, 'Rejected', 'Your record was rejected', type='approval')

        response = self.client.get('/api/v1/notifications/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['unread_count'], 2)

        response = self.client.post(f'/api/v1/notifications/{first.id}/read/')
        self.assertTrue(response.data['is_read'])

        response = self.client.get('/api/v1/notifications/?unread=true')
        self.assertEqual(response.data['count'], 1)

    def test_mark_all_read(self):
        notify(self.user, 'A', 'a')
        notify(self.user, 'B', 'b')
        response = self.client.post('/api/v1/notifications/read-all/')
        self.assertEqual(response.data['updated'], 2)
        self.assertFalse(Notification.objects.filter(user=self.user, is_read=False).exists())

    def test_cannot_read_someone_elses_notification(self):
        other = notify(TestDataFactory.create_user(), 'A', 'a')
        response = self.client.post(f'/api/v1/notifications/{other.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class SequenceNumberTests(TestCase):

    def test_sequence_increments(self):
        user = TestDataFactory.create_user()
        TestDataFactory.create_fuel(user)
        TestDataFactory.create_fuel(user)
        prefix = current_year_prefix('FUEL')
        self.assertEqual(next_sequence_number(FuelRecord, 'record_number', prefix, width=4), f'{prefix}0003')

    def test_non_numeric_suffix_ignored(self):
        TestDataFactory.create_inventory_item(item_code='INV-SPARE')
        self.assertEqual(next_sequence_number(InventoryItem, 'item_code', 'INV-', width=4), 'INV-0001')

    def test_sequence_past_width(self):
        TestDataFactory.create_inventory_item(item_code='INV-9999')
        self.assertEqual(next_sequence_number(InventoryItem, 'item_code', 'INV-', width=4), 'INV-10000')
        TestDataFactory.create_inventory_item(item_code='INV-10000')
        self.assertEqual(next_sequence_number(InventoryItem, 'item_code', 'INV-', width=4), 'INV-10001')

    def test_taken_number_is_retried(self):
        TestDataFactory.create_inventory_item(item_code='INV-0001')
        with mock.patch('quarry.core.utils.next_sequence_number', side_effect=['INV-0001', 'INV-0002']):
            item = TestDataFactory.create_inventory_item()
        self.assertEqual(item.item_code, 'INV-0002')
        self.assertEqual(InventoryItem.objects.filter(item_code='INV-0002').count(), 1)

    def test_gives_up_after_repeated_collisions(self):
        TestDataFactory.create_inventory_item(item_code='INV-0001')
        with mock.patch('quarry.core.utils.next_sequence_number', return_value='INV-0001') as numbering:
            with self.assertRaises(IntegrityError):
                TestDataFactory.create_inventory_item()
        self.assertEqual(numbering.call_count, SEQUENCE_ATTEMPTS)
        self.assertEqual(InventoryItem.objects.count(), 1)


class MigrationTests(TestCase):
    """Shipped migrations stay in step with the models"""

    @override_settings(MIGRATION_MODULES={})
    def test_no_missing_migrations(self):
        output = StringIO()
        call_command('makemigrations', '--check', '--dry-run', stdout=output)
        self.assertIn('No changes detected', output.getvalue())
