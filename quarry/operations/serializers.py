from django.conf import settings
from rest_framework import serializers

from quarry.core.serializers import OwnedRecordSerializer, APPROVAL_READ_ONLY
from .calculations import CalculationError, drilling_totals, parse_clock_time, hour_meter_hours, shift_hours
from .models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, JCBOperation,
    Worker, AttendanceRecord, MediaRecord,
)

PHOTO_CONTENT_TYPES = {'image/jpeg', 'image/png', 'image/gif', 'image/webp'}
VIDEO_CONTENT_TYPES = {'video/mp4', 'video/quicktime', 'video/x-msvideo'}


def non_negative(value):
    if value is not None and value < 0:
        raise serializers.ValidationError('Must not be negative.')
    return value


class DrillingRecordSerializer(OwnedRecordSerializer):
    class Meta:
        model = DrillingRecord
        fields = ['id', 'date', 'location', 'material_type', 'equipment_used', 'diesel_consumed',
                  'rod_measurements', 'holes_drilled', 'total_depth', 'approx_production_tons', 'notes',
                  'status', 'created_by', 'created_by_username', 'reviewed_by', 'reviewed_by_username',
                  'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY + ['holes_drilled', 'total_depth', 'approx_production_tons']

    def validate_diesel_consumed(self, value):
        return non_negative(value)

    def validate_rod_measurements(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError('Expected an object mapping rod keys to hole counts.')
        try:
            drilling_totals(value)
        except CalculationError as e:
            raise serializers.ValidationError(str(e))
        return value


class BlastingRecordSerializer(OwnedRecordSerializer):
    class Meta:
        model = BlastingRecord
        fields = ['id', 'date', 'ed_nos', 'edet_nos', 'nonel_3m_nos', 'nonel_4m_nos', 'pg_nos', 'pg_unit',
                  'material_type', 'notes', 'status', 'created_by', 'created_by_username',
                  'reviewed_by', 'reviewed_by_username', 'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY

    def validate_pg_nos(self, value):
        return non_negative(value)


class LoadingRecordSerializer(OwnedRecordSerializer):
    class Meta:
        model = LoadingRecord
        fields = ['id', 'date', 'material_type', 'vehicle_used', 'vehicle_owner_name', 'destination',
                  'breaker_bucket', 'starting_hours', 'ending_hours', 'hours_worked', 'notes',
                  'status', 'created_by', 'created_by_username', 'reviewed_by', 'reviewed_by_username',
                  'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY + ['hours_worked']

    def validate(self, attrs):
        starting = attrs.get('starting_hours', getattr(self.instance, 'starting_hours', None))
        ending = attrs.get('ending_hours', getattr(self.instance, 'ending_hours', None))
        for field, value in (('starting_hours', starting), ('ending_hours', ending)):
            if value is not None and value < 0:
                raise serializers.ValidationError({field: 'Must not be negative.'})
        try:
            hour_meter_hours(starting, ending)
        except CalculationError as e:
            raise serializers.ValidationError({'ending_hours': str(e)})
        return attrs


class TransportRecordSerializer(OwnedRecordSerializer):
    class Meta:
        model = TransportRecord
        fields = ['id', 'date', 'vehicle_type', 'from_location', 'to_location', 'distance_km',
                  'fuel_consumed', 'material_transported', 'quantity', 'notes',
                  'status', 'created_by', 'created_by_username', 'reviewed_by', 'reviewed_by_username',
                  'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY

    def validate_distance_km(self, value):
        return non_negative(value)

    def validate_fuel_consumed(self, value):
        return non_negative(value)

    def validate_quantity(self, value):
        return non_negative(value)


class JCBOperationSerializer(OwnedRecordSerializer):
    class Meta:
        model = JCBOperation
        fields = ['id', 'date', 'operator_name', 'vehicle_number', 'start_time', 'end_time', 'total_hours',
                  'fuel_consumed', 'work_description', 'notes',
                  'status', 'created_by', 'created_by_username', 'reviewed_by', 'reviewed_by_username',
                  'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = APPROVAL_READ_ONLY + ['total_hours']

    def _clock_time(self, value, label):
        if parse_clock_time(value) is None:
            raise serializers.ValidationError(f'{label} must be HH:MM or h:MM AM/PM.')
        return value.strip()

    def validate_start_time(self, value):
        return self._clock_time(value, 'Start time')

    def validate_end_time(self, value):
        return self._clock_time(value, 'End time')

    def validate_fuel_consumed(self, value):
        return non_negative(value)


class WorkerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Worker
        fields = ['id', 'name', 'employee_id', 'is_active', 'created_at']

    def validate_employee_id(self, value):
        return value or None


class AttendanceRecordSerializer(serializers.ModelSerializer):
    workers = serializers.PrimaryKeyRelatedField(queryset=Worker.objects.all(), many=True)
    number_of_workers = serializers.IntegerField(read_only=True)
    worker_names = serializers.ListField(child=serializers.CharField(), read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = AttendanceRecord
        fields = ['id', 'date', 'check_in', 'check_out', 'location', 'work_type', 'workers',
                  'number_of_workers', 'worker_names', 'hours_worked', 'status', 'notes',
                  'created_by', 'created_by_username', 'created_at', 'updated_at']
        read_only_fields = ['hours_worked', 'created_by', 'created_at', 'updated_at']

    def validate_workers(self, value):
        if not value:
            raise serializers.ValidationError('Select at least one worker.')
        return value

    def validate(self, attrs):
        check_in = attrs.get('check_in', getattr(self.instance, 'check_in', None))
        check_out = attrs.get('check_out', getattr(self.instance, 'check_out', None))
        try:
            shift_hours(check_in, check_out)
        except CalculationError as e:
            raise serializers.ValidationError({'check_out': str(e)})
        return attrs


class MediaRecordSerializer(serializers.ModelSerializer):
    media_url = serializers.SerializerMethodField()
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = MediaRecord
        fields = ['id', 'record_type', 'media_type', 'file', 'media_url', 'file_size', 'content_type',
                  'title', 'description', 'location', 'date_taken',
                  'created_by', 'created_by_username', 'created_at']
        read_only_fields = ['file_size', 'content_type', 'created_by', 'created_at']
        extra_kwargs = {'file': {'write_only': True}}

    def get_media_url(self, obj):
        if not obj.file:
            return None
        request = self.context.get('request')
        url = obj.file.url
        return request.build_absolute_uri(url) if request else url

    def _check_content_type(self, media_type, content_type, field='file'):
        allowed = PHOTO_CONTENT_TYPES if media_type == 'photo' else VIDEO_CONTENT_TYPES
        if content_type not in allowed:
            raise serializers.ValidationError(
                {field: f'Unsupported {media_type} type: {content_type or "unknown"}.'}
            )

    def validate(self, attrs):
        upload = attrs.get('file')
        if upload is None:
            # Changing media_type alone must still agree with the stored file
            if self.instance is not None and 'media_type' in attrs:
                self._check_content_type(attrs['media_type'], self.instance.content_type, field='media_type')
            return attrs
        max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
        if upload.size > max_bytes:
            raise serializers.ValidationError({'file': f'File exceeds the {settings.MAX_UPLOAD_SIZE_MB}MB limit.'})

        media_type = attrs.get('media_type', getattr(self.instance, 'media_type', None))
        content_type = getattr(upload, 'content_type', '') or ''
        self._check_content_type(media_type, content_type)
        attrs['file_size'] = upload.size
        attrs['content_type'] = content_type
        return attrs
