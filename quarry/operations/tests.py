"""
Test suite for site operations
Tests: drilling/JCB/shift calculations, drilling, blasting, loading, transport,
JCB, attendance and media endpoints, ownership scoping and approval locking
"""
import shutil
import tempfile
from datetime import time, timedelta
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework import status

from quarry.core.models import AuditLog
from quarry.core.roles import CONTRACTOR, MANAGER, SALES
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.operations.calculations import (
    CalculationError, drilling_totals, elapsed_hours, hour_meter_hours, parse_clock_time, rod_length, shift_hours,
)
from quarry.operations.models import DrillingRecord, JCBOperation, MediaRecord


class CalculationTests(SimpleTestCase):
    """Derived values that do not need the database"""

    def test_rod_length(self):
        self.assertEqual(rod_length('rod7'), 7)
        self.assertEqual(rod_length('rod10_set2'), 10)

    def test_rod_length_unknown_key(self):
        with self.assertRaises(CalculationError):
            rod_length('rod11')
        with self.assertRaises(CalculationError):
            rod_length('pipe3')
        with self.assertRaises(CalculationError):
            rod_length('rod01')
        with self.assertRaises(CalculationError):
            rod_length('rod0')

    def test_drilling_totals(self):
        holes, depth, tons = drilling_totals({'rod7': 10, 'rod10': 4, 'rod3_set2': ''})
        self.assertEqual(holes, 14)
        self.assertEqual(depth, Decimal('110.00'))
        self.assertEqual(tons, Decimal('88.00'))

    def test_drilling_totals_empty(self):
        self.assertEqual(drilling_totals({}), (0, Decimal('0.00'), Decimal('0.00')))

    def test_drilling_totals_negative_count(self):
        with self.assertRaises(CalculationError):
            drilling_totals({'rod5': -1})

    def test_drilling_totals_whole_counts_only(self):
        for count in (2.9, True, '1.5', 'three'):
            with self.assertRaises(CalculationError):
                drilling_totals({'rod5': count})

    def test_drilling_totals_accepts_integral_values(self):
        self.assertEqual(drilling_totals({'rod5': 3.0, 'rod2': '4'})[0], 7)

    def test_parse_clock_time(self):
        self.assertEqual(parse_clock_time('08:30'), Decimal('8.5'))
        self.assertEqual(parse_clock_time('5:15 PM'), Decimal('17.25'))
        self.assertEqual(parse_clock_time('12:00 AM'), Decimal('0'))
        self.assertIsNone(parse_clock_time('25:00'))
        self.assertIsNone(parse_clock_time('noon'))
        self.assertIsNone(parse_clock_time(''))

    def test_elapsed_hours(self):
        self.assertEqual(elapsed_hours('08:00', '17:30'), Decimal('9.50'))

    def test_elapsed_hours_over_midnight(self):
        self.assertEqual(elapsed_hours('10:00 PM', '02:00 AM'), Decimal('4.00'))

    def test_elapsed_hours_invalid(self):
        with self.assertRaises(CalculationError):
            elapsed_hours('soon', '17:00')

    def test_hour_meter_hours(self):
        self.assertEqual(hour_meter_hours(Decimal('100'), Decimal('108.5')), Decimal('8.5'))
        self.assertIsNone(hour_meter_hours(None, Decimal('10')))
        with self.assertRaises(CalculationError):
            hour_meter_hours(Decimal('10'), Decimal('9'))

    def test_shift_hours(self):
        self.assertEqual(shift_hours(time(8, 0), time(16, 45)), Decimal('8.75'))
        self.assertIsNone(shift_hours(time(8, 0), None))
        with self.assertRaises(CalculationError):
            shift_hours(time(17, 0), time(8, 0))


class DrillingAPITests(TestCase):
    """Drilling records: derived totals, scoping and approval locking"""

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create_computes_totals(self):
        response = self.client.post('/api/v1/drilling/', {
            'date': timezone.localdate().isoformat(),
            'location': 'North Face',
            'equipment_used': 'Compressor Drill',
            'diesel_consumed': '40.00',
            'rod_measurements': {'rod7': 10, 'rod10': 4},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['holes_drilled'], 14)
        self.assertEqual(Decimal(response.data['total_depth']), Decimal('110.00'))
        self.assertEqual(Decimal(response.data['approx_production_tons']), Decimal('88.00'))
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['created_by'], self.contractor.id)
        self.assertTrue(AuditLog.objects.filter(action='create', model_name='DrillingRecord').exists())

    def test_client_cannot_set_status(self):
        response = self.client.post('/api/v1/drilling/', {
            'location': 'North Face',
            'equipment_used': 'Compressor Drill',
            'rod_measurements': {'rod5': 2},
            'status': 'approved',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')

    def test_rejects_unknown_rod(self):
        response = self.client.post('/api/v1/drilling/', {
            'location': 'North Face',
            'equipment_used': 'Compressor Drill',
            'rod_measurements': {'rod42': 2},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('rod_measurements', response.data)

    def test_rejects_padded_key_and_fractional_count(self):
        for measurements in ({'rod01': 1}, {'rod5': 2.9}, {'rod5': True}):
            response = self.client.post('/api/v1/drilling/', {
                'location': 'North Face',
                'equipment_used': 'Compressor Drill',
                'rod_measurements': measurements,
            }, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn('rod_measurements', response.data)
        self.assertFalse(DrillingRecord.objects.exists())

    def test_rejects_missing_location(self):
        response = self.client.post('/api/v1/drilling/', {
            'equipment_used': 'Compressor Drill',
            'rod_measurements': {'rod5': 2},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('location', response.data)

    def test_rejects_negative_diesel(self):
        response = self.client.post('/api/v1/drilling/', {
            'location': 'North Face',
            'equipment_used': 'Compressor Drill',
            'diesel_consumed': '-1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_contractor_sees_only_own_records(self):
        TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_drilling(TestDataFactory.create_user(role=CONTRACTOR))
        response = self.client.get('/api/v1/drilling/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)

    def test_manager_sees_all_records(self):
        TestDataFactory.create_drilling(self.contractor)
        TestDataFactory.create_drilling(TestDataFactory.create_user(role=CONTRACTOR))
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=MANAGER))
        response = client.get('/api/v1/drilling/')
        self.assertEqual(response.data['count'], 2)

    def test_date_and_status_filters(self):
        today = timezone.localdate()
        TestDataFactory.create_drilling(self.contractor, date=today)
        old = TestDataFactory.create_drilling(self.contractor, date=today - timedelta(days=10))
        old.mark_reviewed('approved', TestDataFactory.create_user(role=MANAGER))

        response = self.client.get(f'/api/v1/drilling/?date_from={(today - timedelta(days=2)).isoformat()}')
        self.assertEqual(response.data['count'], 1)
        response = self.client.get('/api/v1/drilling/?status=approved')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['id'], old.id)

    def test_pagination(self):
        for _ in range(3):
            TestDataFactory.create_drilling(self.contractor)
        response = self.client.get('/api/v1/drilling/?limit=2&page=2')
        self.assertEqual(response.data['count'], 3)
        self.assertEqual(len(response.data['results']), 1)
        self.assertEqual(response.data['total_pages'], 2)
        self.assertIsNone(response.data['next'])

    def test_update_pending_record(self):
        record = TestDataFactory.create_drilling(self.contractor)
        response = self.client.patch(f'/api/v1/drilling/{record.id}/', {
            'rod_measurements': {'rod5': 3},
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        record.refresh_from_db()
        self.assertEqual(record.holes_drilled, 3)
        self.assertEqual(record.total_depth, Decimal('15.00'))

    def test_decided_record_is_locked(self):
        record = TestDataFactory.create_drilling(self.contractor)
        record.mark_reviewed('approved', TestDataFactory.create_user(role=MANAGER))
        response = self.client.patch(f'/api/v1/drilling/{record.id}/', {'notes': 'late edit'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.delete(f'/api/v1/drilling/{record.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(DrillingRecord.objects.filter(id=record.id).exists())

    def test_delete_pending_record(self):
        record = TestDataFactory.create_drilling(self.contractor)
        response = self.client.delete(f'/api/v1/drilling/{record.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_cannot_open_another_contractors_record(self):
        other = TestDataFactory.create_drilling(TestDataFactory.create_user(role=CONTRACTOR))
        response = self.client.get(f'/api/v1/drilling/{other.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_summary(self):
        TestDataFactory.create_drilling(self.contractor, diesel_consumed=Decimal('20.00'))
        TestDataFactory.create_drilling(self.contractor, rod_measurements={'rod5': 6}, diesel_consumed=Decimal('10.00'))
        response = self.client.get('/api/v1/drilling/summary/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_holes'], 20)
        self.assertEqual(response.data['total_depth'], 140.0)
        self.assertEqual(response.data['total_diesel'], 30.0)
        self.assertEqual(response.data['average_depth_per_hole'], 7.0)

    def test_sales_role_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=SALES))
        response = client.get('/api/v1/drilling/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class BlastingAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create(self):
        response = self.client.post('/api/v1/blasting/', {
            'ed_nos': 12, 'edet_nos': 4, 'nonel_3m_nos': 6, 'nonel_4m_nos': 2,
            'pg_nos': '3.5', 'pg_unit': 'boxes',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')

    def test_rejects_negative_count(self):
        response = self.client.post('/api/v1/blasting/', {'ed_nos': -2}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        TestDataFactory.create_blasting(self.contractor, ed_nos=10, pg_nos=Decimal('2.00'))
        TestDataFactory.create_blasting(self.contractor, ed_nos=5, pg_nos=Decimal('1.50'))
        response = self.client.get('/api/v1/blasting/summary/')
        self.assertEqual(response.data['total_ed'], 15)
        self.assertEqual(response.data['total_pg'], 3.5)


class LoadingAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create_computes_hours(self):
        response = self.client.post('/api/v1/loading/', {
            'vehicle_used': 'Excavator EX200',
            'vehicle_owner_name': 'Kumar',
            'starting_hours': '1200.50',
            'ending_hours': '1208.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['hours_worked']), Decimal('7.50'))

    def test_ending_before_starting_rejected(self):
        response = self.client.post('/api/v1/loading/', {
            'vehicle_used': 'Excavator EX200',
            'starting_hours': '1200',
            'ending_hours': '1100',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('ending_hours', response.data)

    def test_summary(self):
        TestDataFactory.create_loading(self.contractor, vehicle_owner_name='Kumar')
        TestDataFactory.create_loading(self.contractor, vehicle_owner_name='Ravi', vehicle_used='JCB 3DX')
        response = self.client.get('/api/v1/loading/summary/')
        self.assertEqual(response.data['total_hours_worked'], 17.0)
        self.assertEqual(response.data['unique_owners'], 2)
        self.assertEqual(response.data['unique_vehicles'], 2)


class TransportAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create(self):
        response = self.client.post('/api/v1/transport/', {
            'vehicle_type': 'Tipper',
            'from_location': 'Quarry',
            'to_location': 'Crusher',
            'distance_km': '4.5',
            'quantity': '18',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_negative_distance_rejected(self):
        response = self.client.post('/api/v1/transport/', {
            'vehicle_type': 'Tipper', 'from_location': 'Quarry', 'to_location': 'Crusher', 'distance_km': '-4',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_summary(self):
        TestDataFactory.create_transport(self.contractor)
        TestDataFactory.create_transport(self.contractor)
        response = self.client.get('/api/v1/transport/summary/')
        self.assertEqual(response.data['total_trips'], 2)
        self.assertEqual(response.data['total_distance'], 24.0)
        self.assertEqual(response.data['total_quantity'], 40.0)


class JCBAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def test_create_computes_hours(self):
        response = self.client.post('/api/v1/jcb-operations/', {
            'operator_name': 'Ramesh',
            'vehicle_number': 'TN-4521',
            'start_time': '8:00 AM',
            'end_time': '5:30 PM',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['total_hours']), Decimal('9.50'))

    def test_overnight_shift(self):
        record = TestDataFactory.create_jcb(self.contractor, start_time='22:00', end_time='06:00')
        self.assertEqual(record.total_hours, Decimal('8.00'))

    def test_invalid_time_rejected(self):
        response = self.client.post('/api/v1/jcb-operations/', {
            'operator_name': 'Ramesh',
            'vehicle_number': 'TN-4521',
            'start_time': 'morning',
            'end_time': '5:30 PM',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('start_time', response.data)

    def test_summary(self):
        TestDataFactory.create_jcb(self.contractor, fuel_consumed=Decimal('12.00'))
        TestDataFactory.create_jcb(self.contractor, start_time='09:00', end_time='13:00')
        response = self.client.get('/api/v1/jcb-operations/summary/')
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_hours'], 13.5)
        self.assertEqual(response.data['total_fuel'], 12.0)
        self.assertEqual(JCBOperation.objects.count(), 2)


class AttendanceAPITests(TestCase):

    def setUp(self):
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)
        self.worker_a = TestDataFactory.create_worker('Arun')
        self.worker_b = TestDataFactory.create_worker('Bala')

    def test_create_worker(self):
        response = self.client.post('/api/v1/workers/', {'name': 'Chandran'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['employee_id'])

    def test_create_attendance(self):
        response = self.client.post('/api/v1/attendance/', {
            'check_in': '08:00',
            'check_out': '16:30',
            'location': 'Pit 2',
            'workers': [self.worker_a.id, self.worker_b.id],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['number_of_workers'], 2)
        self.assertEqual(sorted(response.data['worker_names']), ['Arun', 'Bala'])
        self.assertEqual(Decimal(response.data['hours_worked']), Decimal('8.50'))

    def test_attendance_needs_workers(self):
        response = self.client.post('/api/v1/attendance/', {
            'check_in': '08:00', 'check_out': '16:30', 'workers': [],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('workers', response.data)

    def test_check_out_before_check_in(self):
        response = self.client.post('/api/v1/attendance/', {
            'check_in': '17:00', 'check_out': '08:00', 'workers': [self.worker_a.id],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('check_out', response.data)

    def test_filter_by_worker(self):
        TestDataFactory.create_attendance(self.contractor, workers=[self.worker_a, self.worker_b])
        TestDataFactory.create_attendance(self.contractor, workers=[self.worker_b])
        response = self.client.get(f'/api/v1/attendance/?worker={self.worker_a.id}')
        self.assertEqual(response.data['count'], 1)
        response = self.client.get(f'/api/v1/attendance/?worker={self.worker_b.id}')
        self.assertEqual(response.data['count'], 2)

    def test_summary(self):
        today = timezone.localdate()
        TestDataFactory.create_attendance(self.contractor, workers=[self.worker_a, self.worker_b], date=today)
        TestDataFactory.create_attendance(self.contractor, workers=[self.worker_a], date=today - timedelta(days=1))
        response = self.client.get('/api/v1/attendance/summary/')
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_days'], 2)
        self.assertEqual(response.data['total_hours'], 18.0)
        self.assertEqual(response.data['total_workers'], 2)
        self.assertEqual(response.data['average_workers_per_day'], 1.5)


class MediaAPITests(TestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.override = override_settings(MEDIA_ROOT=self.media_root, MAX_UPLOAD_SIZE_MB=1)
        self.override.enable()
        self.contractor = TestDataFactory.create_user(role=CONTRACTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.contractor)

    def tearDown(self):
        self.override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def _upload(self, name, content, content_type, media_type='photo'):
        return self.client.post('/api/v1/media-records/', {
            'record_type': 'blasting',
            'media_type': media_type,
            'title': 'Blast at bench 4',
            'file': SimpleUploadedFile(name, content, content_type=content_type),
        }, format='multipart')

    def test_upload_photo(self):
        response = self._upload('blast.jpg', b'\xff\xd8\xff' + b'0' * 100, 'image/jpeg')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['content_type'], 'image/jpeg')
        self.assertEqual(response.data['file_size'], 103)
        self.assertTrue(response.data['media_url'].startswith('http'))
        self.assertTrue(AuditLog.objects.filter(action='upload', model_name='MediaRecord').exists())

    def test_wrong_content_type_rejected(self):
        response = self._upload('notes.pdf', b'%PDF-1.4', 'application/pdf')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('file', response.data)

    def test_video_type_checked_against_media_type(self):
        response = self._upload('clip.jpg', b'0' * 10, 'image/jpeg', media_type='video')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_oversized_file_rejected(self):
        response = self._upload('huge.png', b'0' * (1024 * 1024 + 1), 'image/png')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(MediaRecord.objects.exists())

    def test_summary(self):
        self._upload('a.png', b'0' * 10, 'image/png')
        self._upload('b.mp4', b'0' * 10, 'video/mp4', media_type='video')
        response = self.client.get('/api/v1/media-records/summary/')
        self.assertEqual(response.data['total_photos'], 1)
        self.assertEqual(response.data['total_videos'], 1)
        self.assertEqual(response.data['this_month'], 2)

    def test_media_type_change_must_match_stored_file(self):
        created = self._upload('a.png', b'0' * 10, 'image/png')
        url = f"/api/v1/media-records/{created.data['id']}/"
        response = self.client.patch(url, {'media_type': 'video'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('media_type', response.data)
        self.assertEqual(MediaRecord.objects.get(pk=created.data['id']).media_type, 'photo')

        response = self.client.patch(url, {'title': 'Bench 4 after blast'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
