from decimal import Decimal

from django.db import models
from django.utils import timezone

from quarry.core.models import User, ApprovalRecord
from quarry.core.utils import save_with_sequence_number, current_year_prefix


class FuelRecord(ApprovalRecord):
    FUEL_TYPE_CHOICES = [
        ('Diesel', 'Diesel'),
        ('Petrol', 'Petrol'),
    ]

    record_number = models.CharField(max_length=30, unique=True, blank=True)
    date = models.DateField(default=timezone.localdate)
    vehicle_number = models.CharField(max_length=50)
    vehicle_type = models.CharField(max_length=100, blank=True)
    fuel_type = models.CharField(max_length=10, choices=FUEL_TYPE_CHOICES, default='Diesel')
    quantity_liters = models.DecimalField(max_digits=10, decimal_places=2)
    cost_per_liter = models.DecimalField(max_digits=10, decimal_places=2)
    total_cost = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    odometer_reading = models.DecimalField(max_digits=12, decimal_places=1, null=True, blank=True)
    supplier = models.CharField(max_length=200, blank=True)
    receipt_number = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    def save(self, *args, **kwargs):
        self.total_cost = (self.quantity_liters or Decimal('0')) * (self.cost_per_liter or Decimal('0'))
        if self.record_number:
            return super().save(*args, **kwargs)
        save_with_sequence_number(self, 'record_number', current_year_prefix('FUEL'),
                                  save=lambda: super(FuelRecord, self).save(*args, **kwargs), width=4)

    def __str__(self):
        return self.record_number or f"Fuel {self.vehicle_number} {self.date}"

    class Meta:
        db_table = 'fuel_records'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_fuel_date'),
            models.Index(fields=['vehicle_number'], name='idx_fuel_vehicle'),
        ]


class InventoryItem(models.Model):
    """Site store item (spares, consumables, tools)"""
    item_name = models.CharField(max_length=200)
    item_code = models.CharField(max_length=30, unique=True, blank=True)
    category = models.CharField(max_length=100, blank=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    unit = models.CharField(max_length=30, default='pcs')
    minimum_quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    location = models.CharField(max_length=200, blank=True, help_text="Storage area")
    supplier = models.CharField(max_length=200, blank=True)
    given_to = models.CharField(max_length=200, blank=True)
    last_restock_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='inventory_items')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_low_stock(self):
        return self.quantity <= self.minimum_quantity

    def save(self, *args, **kwargs):
        if self.item_code:
            return super().save(*args, **kwargs)
        save_with_sequence_number(self, 'item_code', 'INV-',
                                  save=lambda: super(InventoryItem, self).save(*args, **kwargs), width=4)

    def __str__(self):
        return f"{self.item_code} {self.item_name}"

    class Meta:
        db_table = 'inventory_items'
        ordering = ['item_name']


class SafetyIncident(models.Model):
    SEVERITY_CHOICES = [
        ('Low', 'Low'),
        ('Medium', 'Medium'),
        ('High', 'High'),
        ('Critical', 'Critical'),
    ]
    STATUS_REPORTED = 'reported'
    STATUS_INVESTIGATING = 'investigating'
    STATUS_RESOLVED = 'resolved'
    STATUS_CLOSED = 'closed'
    STATUS_CHOICES = [
        (STATUS_REPORTED, 'Reported'),
        (STATUS_INVESTIGATING, 'Investigating'),
        (STATUS_RESOLVED, 'Resolved'),
        (STATUS_CLOSED, 'Closed'),
    ]
    # Status may only move forward along this order
    STATUS_ORDER = [STATUS_REPORTED, STATUS_INVESTIGATING, STATUS_RESOLVED, STATUS_CLOSED]

    date = models.DateField(default=timezone.localdate)
    time = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=200)
    incident_type = models.CharField(max_length=100)
    severity = models.CharField(max_length=10, choices=SEVERITY_CHOICES, default='Low')
    description = models.TextField()
    people_involved = models.TextField(blank=True)
    witnesses = models.TextField(blank=True)
    immediate_action = models.TextField(blank=True)
    corrective_action = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_REPORTED)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='safety_incidents')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def can_move_to(self, new_status):
        if new_status not in self.STATUS_ORDER:
            return False
        return self.STATUS_ORDER.index(new_status) > self.STATUS_ORDER.index(self.status)

    def __str__(self):
        return f"{self.incident_type} @ {self.location} ({self.date})"

    class Meta:
        db_table = 'safety_incidents'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['severity'], name='idx_safety_severity'),
            models.Index(fields=['status'], name='idx_safety_status'),
        ]


def incident_image_path(instance, filename):
    return f"safety/{instance.incident_id}/{filename}"


class SafetyIncidentImage(models.Model):
    incident = models.ForeignKey(SafetyIncident, on_delete=models.CASCADE, related_name='images')
    image = models.FileField(upload_to=incident_image_path)
    caption = models.CharField(max_length=200, blank=True)
    uploaded_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='+')
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'safety_incident_images'
        ordering = ['uploaded_at']
