from django.contrib import admin
from .models import Invoice, InvoicePayment, DispatchEntry, AccountTransaction


class InvoicePaymentInline(admin.TabularInline):
    model = InvoicePayment
    extra = 0
    readonly_fields = ['recorded_by', 'recorded_at']


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ['invoice_number', 'customer_name', 'invoice_date', 'total_amount', 'amount_paid', 'status']
    list_filter = ['status', 'invoice_date']
    search_fields = ['invoice_number', 'customer_name']
    readonly_fields = ['invoice_number', 'subtotal', 'tax_amount', 'total_amount', 'status']
    inlines = [InvoicePaymentInline]


@admin.register(DispatchEntry)
class DispatchEntryAdmin(admin.ModelAdmin):
    list_display = ['dispatch_number', 'material_type', 'quantity_dispatched', 'quantity_received',
                    'balance_quantity', 'delivery_status', 'dispatch_date']
    list_filter = ['delivery_status', 'material_type']
    search_fields = ['dispatch_number', 'customer_name', 'vehicle_number']


@admin.register(AccountTransaction)
class AccountTransactionAdmin(admin.ModelAdmin):
    list_display = ['transaction_date', 'transaction_type', 'customer_name', 'amount', 'amount_given',
                    'balance', 'status']
    list_filter = ['transaction_type', 'status', 'payment_method']
    search_fields = ['invoice_number', 'customer_name', 'reason']
