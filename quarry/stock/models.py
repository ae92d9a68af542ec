from django.db import models
from django.utils import timezone

from quarry.core.models import User, ApprovalRecord
from quarry.core.utils import save_with_sequence_number, current_year_prefix


class ProductionStock(models.Model):
    """Finished material on hand (e.g. 20mm, 40mm, M-sand) on a given date"""
    material_type = models.CharField(max_length=100)
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit = models.CharField(max_length=20, default='tons')
    stock_date = models.DateField(default=timezone.localdate)
    location = models.CharField(max_length=200, blank=True)
    quality_grade = models.CharField(max_length=50, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='production_stock')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.material_type} {self.quantity} {self.unit} ({self.stock_date})"

    class Meta:
        db_table = 'production_stock'
        ordering = ['-stock_date', '-created_at']


class PurchaseRequest(ApprovalRecord):
    PRIORITY_CHOICES = [
        ('low', 'Low'),
        ('medium', 'Medium'),
        ('high', 'High'),
        ('urgent', 'Urgent'),
    ]

    request_number = models.CharField(max_length=30, unique=True, blank=True)
    material_name = models.CharField(max_length=200)
    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit = models.CharField(max_length=20, default='pcs')
    purpose = models.TextField(blank=True)
    priority = models.CharField(max_length=10, choices=PRIORITY_CHOICES, default='medium')
    required_by = models.DateField(null=True, blank=True)
    estimated_cost = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    supplier_suggestion = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)

    def save(self, *args, **kwargs):
        if self.request_number:
            return super().save(*args, **kwargs)
        save_with_sequence_number(self, 'request_number', current_year_prefix('PR'),
                                  save=lambda: super(PurchaseRequest, self).save(*args, **kwargs))

    def __str__(self):
        return self.request_number or f"Request for {self.material_name}"

    class Meta:
        db_table = 'purchase_requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='idx_pr_status'),
        ]
