from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['company_name', 'contact_person', 'phone', 'city', 'customer_type', 'credit_limit', 'is_active']
    list_filter = ['customer_type', 'is_active', 'state']
    search_fields = ['company_name', 'contact_person', 'phone', 'email', 'tax_id']
