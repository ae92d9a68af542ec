from django.contrib import admin
from .models import CrusherProduction, EBReport


@admin.register(CrusherProduction)
class CrusherProductionAdmin(admin.ModelAdmin):
    list_display = ['date', 'shift', 'crusher_type', 'material_input', 'total_output', 'status']
    list_filter = ['shift', 'crusher_type', 'status']


@admin.register(EBReport)
class EBReportAdmin(admin.ModelAdmin):
    list_display = ['report_date', 'units_consumed', 'cost_per_unit', 'total_cost', 'created_by']
    readonly_fields = ['units_consumed', 'total_cost']
