from django.contrib import admin
from .models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, JCBOperation,
    Worker, AttendanceRecord, MediaRecord,
)

APPROVAL_READONLY = ['created_by', 'reviewed_by', 'reviewed_at', 'created_at', 'updated_at']


@admin.register(DrillingRecord)
class DrillingRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'location', 'equipment_used', 'holes_drilled', 'total_depth', 'status', 'created_by']
    list_filter = ['status', 'date']
    search_fields = ['location', 'equipment_used']
    readonly_fields = APPROVAL_READONLY + ['holes_drilled', 'total_depth', 'approx_production_tons']


@admin.register(BlastingRecord)
class BlastingRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'ed_nos', 'edet_nos', 'nonel_3m_nos', 'nonel_4m_nos', 'pg_nos', 'status']
    list_filter = ['status', 'date']
    readonly_fields = APPROVAL_READONLY


@admin.register(LoadingRecord)
class LoadingRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'vehicle_used', 'vehicle_owner_name', 'hours_worked', 'status']
    list_filter = ['status', 'date']
    search_fields = ['vehicle_used', 'vehicle_owner_name']
    readonly_fields = APPROVAL_READONLY + ['hours_worked']


@admin.register(TransportRecord)
class TransportRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'vehicle_type', 'from_location', 'to_location', 'quantity', 'status']
    list_filter = ['status', 'date', 'vehicle_type']
    readonly_fields = APPROVAL_READONLY


@admin.register(JCBOperation)
class JCBOperationAdmin(admin.ModelAdmin):
    list_display = ['date', 'operator_name', 'vehicle_number', 'start_time', 'end_time', 'total_hours', 'status']
    list_filter = ['status', 'date']
    search_fields = ['operator_name', 'vehicle_number']
    readonly_fields = APPROVAL_READONLY + ['total_hours']


@admin.register(Worker)
class WorkerAdmin(admin.ModelAdmin):
    list_display = ['name', 'employee_id', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'employee_id']


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display = ['date', 'location', 'check_in', 'check_out', 'hours_worked', 'status']
    list_filter = ['status', 'date']
    filter_horizontal = ['workers']


@admin.register(MediaRecord)
class MediaRecordAdmin(admin.ModelAdmin):
    list_display = ['title', 'record_type', 'media_type', 'date_taken', 'created_by']
    list_filter = ['record_type', 'media_type']
