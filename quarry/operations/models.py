from decimal import Decimal

from django.db import models
from django.utils import timezone

from quarry.core.models import User, ApprovalRecord
from .calculations import drilling_totals, elapsed_hours, hour_meter_hours, shift_hours


class DrillingRecord(ApprovalRecord):
    """Daily drilling entry; rod_measurements holds hole counts per rod length"""
    date = models.DateField(default=timezone.localdate)
    location = models.CharField(max_length=200)
    material_type = models.CharField(max_length=100, blank=True)
    equipment_used = models.CharField(max_length=200)
    diesel_consumed = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    rod_measurements = models.JSONField(default=dict, blank=True)
    holes_drilled = models.PositiveIntegerField(default=0)
    total_depth = models.DecimalField(max_digits=12, decimal_places=2, default=0, help_text="Feet")
    approx_production_tons = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = models.TextField(blank=True)

    def save(self, *args, **kwargs):
        self.holes_drilled, self.total_depth, self.approx_production_tons = drilling_totals(self.rod_measurements)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Drilling {self.date} @ {self.location}"

    class Meta:
        db_table = 'drilling_records'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_drilling_date'),
            models.Index(fields=['status'], name='idx_drilling_status'),
        ]


class BlastingRecord(ApprovalRecord):
    PG_UNIT_CHOICES = [
        ('boxes', 'Boxes'),
        ('nos', 'Nos'),
    ]

    date = models.DateField(default=timezone.localdate)
    ed_nos = models.PositiveIntegerField(default=0, help_text="Electric detonators")
    edet_nos = models.PositiveIntegerField(default=0, help_text="Electronic detonators")
    nonel_3m_nos = models.PositiveIntegerField(default=0)
    nonel_4m_nos = models.PositiveIntegerField(default=0)
    pg_nos = models.DecimalField(max_digits=10, decimal_places=2, default=0, help_text="Power gel")
    pg_unit = models.CharField(max_length=10, choices=PG_UNIT_CHOICES, default='boxes')
    material_type = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)

    def __str__(self):
        return f"Blasting {self.date}"

    class Meta:
        db_table = 'blasting_records'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_blasting_date'),
            models.Index(fields=['status'], name='idx_blasting_status'),
        ]


class LoadingRecord(ApprovalRecord):
    """Breaking/loading shift measured on the machine hour meter"""
    date = models.DateField(default=timezone.localdate)
    material_type = models.CharField(max_length=100, blank=True)
    vehicle_used = models.CharField(max_length=100)
    vehicle_owner_name = models.CharField(max_length=200, blank=True)
    destination = models.CharField(max_length=200, blank=True)
    breaker_bucket = models.CharField(max_length=100, blank=True)
    starting_hours = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    ending_hours = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    hours_worked = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    notes = models.TextField(blank=True)

    def save(self, *args, **kwargs):
        self.hours_worked = hour_meter_hours(self.starting_hours, self.ending_hours) or Decimal('0')
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Loading {self.date} - {self.vehicle_used}"

    class Meta:
        db_table = 'loading_records'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_loading_date'),
            models.Index(fields=['status'], name='idx_loading_status'),
        ]


class TransportRecord(ApprovalRecord):
    date = models.DateField(default=timezone.localdate)
    vehicle_type = models.CharField(max_length=100)
    from_location = models.CharField(max_length=200)
    to_location = models.CharField(max_length=200)
    distance_km = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    fuel_consumed = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    material_transported = models.CharField(max_length=100, blank=True)
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    notes = models.TextField(blank=True)

    def __str__(self):
        return f"Transport {self.date} {self.from_location} -> {self.to_location}"

    class Meta:
        db_table = 'transport_records'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_transport_date'),
            models.Index(fields=['status'], name='idx_transport_status'),
        ]


class JCBOperation(ApprovalRecord):
    """JCB shift; start/end are kept as entered (24-hour or AM/PM)"""
    date = models.DateField(default=timezone.localdate)
    operator_name = models.CharField(max_length=200)
    vehicle_number = models.CharField(max_length=50)
    start_time = models.CharField(max_length=20)
    end_time = models.CharField(max_length=20)
    total_hours = models.DecimalField(max_digits=6, decimal_places=2, default=0)
    fuel_consumed = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    work_description = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    def save(self, *args, **kwargs):
        self.total_hours = elapsed_hours(self.start_time, self.end_time)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"JCB {self.vehicle_number} {self.date}"

    class Meta:
        db_table = 'jcb_operations'
        ordering = ['-date', '-created_at']
        indexes = [
            models.Index(fields=['date'], name='idx_jcb_date'),
            models.Index(fields=['status'], name='idx_jcb_status'),
        ]


class Worker(models.Model):
    name = models.CharField(max_length=200)
    employee_id = models.CharField(max_length=50, unique=True, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'workers'
        ordering = ['name']


class AttendanceRecord(models.Model):
    STATUS_CHOICES = [
        ('present', 'Present'),
        ('absent', 'Absent'),
        ('half_day', 'Half Day'),
    ]

    date = models.DateField(default=timezone.localdate)
    check_in = models.TimeField()
    check_out = models.TimeField(null=True, blank=True)
    location = models.CharField(max_length=200, blank=True)
    work_type = models.CharField(max_length=100, blank=True)
    workers = models.ManyToManyField(Worker, related_name='attendance_records')
    hours_worked = models.DecimalField(max_digits=5, decimal_places=2, default=0)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='present')
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='attendance_records')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        self.hours_worked = shift_hours(self.check_in, self.check_out) or Decimal('0')
        super().save(*args, **kwargs)

    @property
    def number_of_workers(self):
        return self.workers.count()

    @property
    def worker_names(self):
        return [worker.name for worker in self.workers.all()]

    def __str__(self):
        return f"Attendance {self.date} @ {self.location}"

    class Meta:
        db_table = 'attendance_records'
        ordering = ['-date', '-created_at']


def media_upload_path(instance, filename):
    return f"site-media/{instance.record_type}/{timezone.now():%Y/%m}/{filename}"


class MediaRecord(models.Model):
    RECORD_TYPE_CHOICES = [
        ('drilling', 'Drilling'),
        ('blasting', 'Blasting'),
        ('loading', 'Loading'),
        ('transport', 'Transport'),
        ('general', 'General'),
    ]
    MEDIA_TYPE_CHOICES = [
        ('photo', 'Photo'),
        ('video', 'Video'),
    ]

    record_type = models.CharField(max_length=20, choices=RECORD_TYPE_CHOICES, default='general')
    media_type = models.CharField(max_length=10, choices=MEDIA_TYPE_CHOICES)
    file = models.FileField(upload_to=media_upload_path)
    file_size = models.PositiveBigIntegerField(default=0)
    content_type = models.CharField(max_length=100, blank=True)
    title = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    location = models.CharField(max_length=200, blank=True)
    date_taken = models.DateField(default=timezone.localdate)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='media_records')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.title or self.file.name

    class Meta:
        db_table = 'media_records'
        ordering = ['-created_at']
