from django.contrib import admin
from .models import FuelRecord, InventoryItem, SafetyIncident, SafetyIncidentImage


@admin.register(FuelRecord)
class FuelRecordAdmin(admin.ModelAdmin):
    list_display = ['record_number', 'date', 'vehicle_number', 'fuel_type', 'quantity_liters', 'total_cost', 'status']
    list_filter = ['status', 'fuel_type', 'date']
    search_fields = ['record_number', 'vehicle_number', 'supplier']
    readonly_fields = ['record_number', 'total_cost', 'created_by', 'reviewed_by', 'reviewed_at']


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['item_code', 'item_name', 'category', 'quantity', 'minimum_quantity', 'unit']
    list_filter = ['category']
    search_fields = ['item_code', 'item_name']


class SafetyIncidentImageInline(admin.TabularInline):
    model = SafetyIncidentImage
    extra = 0


@admin.register(SafetyIncident)
class SafetyIncidentAdmin(admin.ModelAdmin):
    list_display = ['date', 'incident_type', 'location', 'severity', 'status']
    list_filter = ['severity', 'status']
    search_fields = ['incident_type', 'location', 'description']
    inlines = [SafetyIncidentImageInline]
