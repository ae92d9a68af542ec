from django.db import models
from django.utils import timezone

from quarry.core.models import User


class Permit(models.Model):
    """Mining/crusher licence held by the company"""
    PERMIT_TYPE_CHOICES = [
        ('quarry', 'Quarry'),
        ('crusher', 'Crusher'),
    ]
    STATUS_CHOICES = [
        ('active', 'Active'),
        ('expired', 'Expired'),
        ('pending_renewal', 'Pending Renewal'),
    ]

    company_name = models.CharField(max_length=200)
    permit_type = models.CharField(max_length=10, choices=PERMIT_TYPE_CHOICES)
    approval_date = models.DateField()
    expiry_date = models.DateField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='active')
    description = models.TextField(blank=True)
    document_url = models.URLField(max_length=500, blank=True)
    quantity_in_mt = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True,
                                         help_text="Permitted quantity in metric tons")
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='permits')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def days_until_expiry(self):
        """Negative once the permit has expired"""
        return (self.expiry_date - timezone.localdate()).days

    def __str__(self):
        return f"{self.company_name} ({self.get_permit_type_display()})"

    class Meta:
        db_table = 'permits'
        ordering = ['expiry_date']
