from django.contrib import admin
from .models import ProductionStock, PurchaseRequest


@admin.register(ProductionStock)
class ProductionStockAdmin(admin.ModelAdmin):
    list_display = ['stock_date', 'material_type', 'quantity', 'unit', 'location', 'quality_grade']
    list_filter = ['material_type', 'stock_date']


@admin.register(PurchaseRequest)
class PurchaseRequestAdmin(admin.ModelAdmin):
    list_display = ['request_number', 'material_name', 'quantity', 'priority', 'estimated_cost', 'status']
    list_filter = ['status', 'priority']
    search_fields = ['request_number', 'material_name']
    readonly_fields = ['request_number', 'created_by', 'reviewed_by', 'reviewed_at']
