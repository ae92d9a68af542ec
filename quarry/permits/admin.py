from django.contrib import admin
from .models import Permit


@admin.register(Permit)
class PermitAdmin(admin.ModelAdmin):
    list_display = ['company_name', 'permit_type', 'approval_date', 'expiry_date', 'status']
    list_filter = ['permit_type', 'status']
    search_fields = ['company_name']
