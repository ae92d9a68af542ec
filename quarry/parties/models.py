from decimal import Decimal

from django.db import models

from quarry.core.models import User


class Customer(models.Model):
    """Buyers of crushed material"""
    CUSTOMER_TYPE_CHOICES = [
        ('Retail', 'Retail'),
        ('Wholesale', 'Wholesale'),
        ('Contractor', 'Contractor'),
        ('Government', 'Government'),
        ('Reseller', 'Reseller'),
        ('Other', 'Other'),
    ]
    PAYMENT_TERMS_CHOICES = [
        ('Net 7', 'Net 7'),
        ('Net 15', 'Net 15'),
        ('Net 30', 'Net 30'),
        ('Net 60', 'Net 60'),
        ('Due on Receipt', 'Due on Receipt'),
        ('Custom', 'Custom'),
    ]

    company_name = models.CharField(max_length=200, unique=True)
    contact_person = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.TextField(blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    postal_code = models.CharField(max_length=20, blank=True)
    country = models.CharField(max_length=100, default='India')
    tax_id = models.CharField(max_length=50, blank=True, help_text="GSTIN")
    customer_type = models.CharField(max_length=20, choices=CUSTOMER_TYPE_CHOICES, default='Retail')
    payment_terms = models.CharField(max_length=20, choices=PAYMENT_TERMS_CHOICES, default='Net 30')
    credit_limit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal('0.00'))
    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='customers')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.company_name

    class Meta:
        db_table = 'customers'
        ordering = ['company_name']
