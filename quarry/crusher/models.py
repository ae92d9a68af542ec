from decimal import Decimal

from django.db import models
from django.utils import timezone

from quarry.core.models import User

READING_FIELDS = ('kw', 'kva', 'kvah', 'kwh', 'pf_c', 'pf')
PF_WARNING_THRESHOLD = Decimal('0.95')


class CrusherProduction(models.Model):
    SHIFT_CHOICES = [
        ('morning', 'Morning'),
        ('night', 'Night'),
    ]
    CRUSHER_TYPE_CHOICES = [
        ('jaw', 'Jaw Crusher'),
        ('vsi', 'VSI'),
    ]
    MATERIAL_SOURCE_CHOICES = [
        ('quarry', 'Quarry'),
        ('stockyard', 'Stockyard'),
    ]
    STATUS_CHOICES = [
        ('completed', 'Completed'),
        ('in_progress', 'In Progress'),
        ('maintenance', 'Maintenance'),
        ('breakdown', 'Breakdown'),
    ]

    date = models.DateField(default=timezone.localdate)
    shift = models.CharField(max_length=10, choices=SHIFT_CHOICES, default='morning')
    crusher_type = models.CharField(max_length=10, choices=CRUSHER_TYPE_CHOICES, default='jaw')
    machine_working_hours = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    machine_downtime = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    maintenance_hours = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    material_source = models.CharField(max_length=20, choices=MATERIAL_SOURCE_CHOICES, default='quarry')
    material_input = models.DecimalField(max_digits=12, decimal_places=2, default=0, help_text="Tons fed")
    total_output = models.DecimalField(max_digits=12, decimal_places=2, default=0, help_text="Tons produced")
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='completed')
    maintenance_notes = models.TextField(blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='crusher_productions')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def efficiency(self):
        """Output as a percentage of input"""
        if not self.material_input:
            return Decimal('0')
        return (self.total_output / self.material_input * 100).quantize(Decimal('0.01'))

    def __str__(self):
        return f"{self.get_crusher_type_display()} {self.date} ({self.shift})"

    class Meta:
        db_table = 'crusher_production'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_crusher_date'),
        ]


class EBReport(models.Model):
    """Electricity board meter readings for one day"""
    report_date = models.DateField(default=timezone.localdate)
    starting_reading = models.JSONField(default=dict)
    ending_reading = models.JSONField(default=dict)
    units_consumed = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    cost_per_unit = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    total_cost = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='eb_reports')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @staticmethod
    def reading_value(reading, field):
        value = (reading or {}).get(field)
        if value in (None, ''):
            return Decimal('0')
        return Decimal(str(value))

    def save(self, *args, **kwargs):
        start_kwh = self.reading_value(self.starting_reading, 'kwh')
        end_kwh = self.reading_value(self.ending_reading, 'kwh')
        self.units_consumed = end_kwh - start_kwh
        self.total_cost = (self.units_consumed * (self.cost_per_unit or Decimal('0'))).quantize(Decimal('0.01'))
        super().save(*args, **kwargs)

    def high_power_factors(self):
        """[(reading_type, pf)] for readings whose PF is above the threshold"""
        flagged = []
        for reading_type, reading in (('starting', self.starting_reading), ('ending', self.ending_reading)):
            pf = self.reading_value(reading, 'pf')
            if pf > PF_WARNING_THRESHOLD:
                flagged.append((reading_type, pf))
        return flagged

    def __str__(self):
        return f"EB report {self.report_date}"

    class Meta:
        db_table = 'eb_reports'
        ordering = ['-report_date', '-created_at']
