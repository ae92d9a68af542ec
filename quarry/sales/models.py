from decimal import Decimal

from django.db import models
from django.utils import timezone

from quarry.core.models import User
from quarry.core.utils import save_with_sequence_number, current_year_prefix
from quarry.parties.models import Customer
from .calculations import net_weight, price_items, invoice_totals, payment_status

PAYMENT_MODE_CHOICES = [
    ('cash', 'Cash'),
    ('bank_transfer', 'Bank Transfer'),
    ('cheque', 'Cheque'),
    ('upi', 'UPI'),
    ('card', 'Card'),
    ('other', 'Other'),
]


class Invoice(models.Model):
    STATUS_CHOICES = [
        ('paid', 'Paid'),
        ('partial', 'Partially Paid'),
        ('unpaid', 'Unpaid'),
    ]

    invoice_number = models.CharField(max_length=30, unique=True, blank=True)
    customer = models.ForeignKey(Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name='invoices')
    customer_name = models.CharField(max_length=200)
    invoice_date = models.DateField(default=timezone.localdate)
    due_date = models.DateField(null=True, blank=True)
    items = models.JSONField(default=list)
    empty_weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    gross_weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    net_weight = models.DecimalField(max_digits=12, decimal_places=3, null=True, blank=True)
    subtotal = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('5.00'))
    tax_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    amount_paid = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='unpaid')
    payment_mode = models.CharField(max_length=20, choices=PAYMENT_MODE_CHOICES, blank=True)
    payment_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    terms_conditions = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='invoices')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def balance(self):
        return self.total_amount - self.amount_paid

    def recalculate(self):
        """Refresh weights, item amounts, totals and status from the raw inputs"""
        weight = net_weight(self.empty_weight, self.gross_weight)
        if weight is not None:
            self.net_weight = weight
        self.items = price_items(self.items, self.net_weight)
        self.subtotal, self.tax_amount, self.total_amount = invoice_totals(self.items, self.tax_rate)
        self.status = payment_status(self.total_amount, self.amount_paid)

    def save(self, *args, **kwargs):
        self.recalculate()
        if self.invoice_number:
            return super().save(*args, **kwargs)
        save_with_sequence_number(self, 'invoice_number', current_year_prefix('INV'),
                                  save=lambda: super(Invoice, self).save(*args, **kwargs))

    def __str__(self):
        return self.invoice_number

    class Meta:
        db_table = 'invoices'
        ordering = ['-invoice_date', '-created_at']
        indexes = [
            models.Index(fields=['invoice_date'], name='idx_invoice_date'),
            models.Index(fields=['status'], name='idx_invoice_status'),
        ]


class InvoicePayment(models.Model):
    """One payment against an invoice; the initial payment is recorded here too"""
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='payments')
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_mode = models.CharField(max_length=20, choices=PAYMENT_MODE_CHOICES, blank=True)
    payment_date = models.DateField(default=timezone.localdate)
    notes = models.CharField(max_length=255, blank=True)
    recorded_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='+')
    recorded_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.invoice.invoice_number} - {self.amount}"

    class Meta:
        db_table = 'invoice_payments'
        ordering = ['recorded_at']


class DispatchEntry(models.Model):
    DELIVERY_STATUS_CHOICES = [
        ('dispatched', 'Dispatched'),
        ('in_transit', 'In Transit'),
        ('delivered', 'Delivered'),
        ('cancelled', 'Cancelled'),
    ]

    dispatch_number = models.CharField(max_length=50, unique=True)
    material_type = models.CharField(max_length=100)
    quantity_dispatched = models.DecimalField(max_digits=12, decimal_places=2)
    quantity_received = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    balance_quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    unit = models.CharField(max_length=20, default='tons')
    transportation_mode = models.CharField(max_length=50, blank=True)
    vehicle_number = models.CharField(max_length=50, blank=True)
    driver_name = models.CharField(max_length=200, blank=True)
    driver_contact = models.CharField(max_length=20, blank=True)
    destination = models.CharField(max_length=200)
    customer_name = models.CharField(max_length=200, blank=True)
    dispatch_date = models.DateField(default=timezone.localdate)
    expected_delivery_date = models.DateField(null=True, blank=True)
    delivery_status = models.CharField(max_length=20, choices=DELIVERY_STATUS_CHOICES, default='dispatched')
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='dispatch_entries')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.balance_quantity = (self.quantity_dispatched or 0) - (self.quantity_received or 0)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.dispatch_number

    class Meta:
        db_table = 'dispatch_list'
        ordering = ['-dispatch_date', '-created_at']
        verbose_name_plural = 'dispatch entries'


class AccountTransaction(models.Model):
    TRANSACTION_TYPE_CHOICES = [
        ('invoice', 'Invoice'),
        ('payment', 'Payment'),
        ('expense', 'Expense'),
    ]
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('partial', 'Partial'),
        ('paid', 'Paid'),
        ('overdue', 'Overdue'),
    ]
    INCOME_TYPES = ('invoice', 'payment')

    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPE_CHOICES)
    invoice_number = models.CharField(max_length=50, blank=True)
    customer_name = models.CharField(max_length=200, blank=True)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    amount_given = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    balance = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    reason = models.CharField(max_length=255, blank=True)
    transaction_date = models.DateField(default=timezone.localdate)
    payment_method = models.CharField(max_length=20, choices=PAYMENT_MODE_CHOICES, blank=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='account_transactions')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.balance = (self.amount or 0) - (self.amount_given or 0)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.get_transaction_type_display()} {self.amount} ({self.transaction_date})"

    class Meta:
        db_table = 'accounts'
        ordering = ['-transaction_date', '-created_at']
        indexes = [
            models.Index(fields=['transaction_type'], name='idx_accounts_type'),
        ]
