"""
Test utilities and factories for creating test data
"""
import random
import string
from datetime import time, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from quarry.core.models import Setting
from quarry.core.roles import GROUP_FOR_ROLE
from quarry.crusher.models import CrusherProduction, EBReport
from quarry.operations.models import (
    DrillingRecord, BlastingRecord, LoadingRecord, TransportRecord, JCBOperation,
    Worker, AttendanceRecord,
)
from quarry.parties.models import Customer
from quarry.permits.models import Permit
from quarry.resources.models import FuelRecord, InventoryItem, SafetyIncident
from quarry.sales.models import Invoice, DispatchEntry, AccountTransaction
from quarry.stock.models import ProductionStock, PurchaseRequest

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', role=None,
                    is_staff=False, is_superuser=False, is_active=True):
        """Create a test user, optionally placed in a role group"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser,
            is_active=is_active,
        )
        if role:
            group, _ = Group.objects.get_or_create(name=GROUP_FOR_ROLE[role])
            user.groups.add(group)
        return user

    @staticmethod
    def create_setting(key, value):
        setting, _ = Setting.objects.update_or_create(key=key, defaults={'value': value})
        return setting

    @staticmethod
    def create_drilling(user, date=None, rod_measurements=None, **kwargs):
        """Create a drilling record (10 holes with the 7ft rod and 4 with the 10ft rod by default)"""
        return DrillingRecord.objects.create(
            created_by=user,
            date=date or timezone.localdate(),
            location=kwargs.pop('location', 'North Face'),
            equipment_used=kwargs.pop('equipment_used', 'Compressor Drill'),
            rod_measurements=rod_measurements if rod_measurements is not None else {'rod7': 10, 'rod10': 4},
            **kwargs
        )

    @staticmethod
    def create_blasting(user, date=None, **kwargs):
        kwargs.setdefault('ed_nos', 10)
        kwargs.setdefault('pg_nos', Decimal('2.00'))
        return BlastingRecord.objects.create(created_by=user, date=date or timezone.localdate(), **kwargs)

    @staticmethod
    def create_loading(user, date=None, starting_hours=Decimal('100.00'), ending_hours=Decimal('108.50'), **kwargs):
        return LoadingRecord.objects.create(
            created_by=user,
            date=date or timezone.localdate(),
            vehicle_used=kwargs.pop('vehicle_used', 'Excavator EX200'),
            starting_hours=starting_hours,
            ending_hours=ending_hours,
            **kwargs
        )

    @staticmethod
    def create_transport(user, date=None, **kwargs):
        kwargs.setdefault('distance_km', Decimal('12.00'))
        kwargs.setdefault('fuel_consumed', Decimal('8.00'))
        kwargs.setdefault('quantity', Decimal('20.00'))
        return TransportRecord.objects.create(
            created_by=user,
            date=date or timezone.localdate(),
            vehicle_type=kwargs.pop('vehicle_type', 'Tipper'),
            from_location=kwargs.pop('from_location', 'Quarry'),
            to_location=kwargs.pop('to_location', 'Crusher'),
            **kwargs
        )

    @staticmethod
    def create_jcb(user, date=None, start_time='08:00', end_time='17:30', **kwargs):
        return JCBOperation.objects.create(
            created_by=user,
            date=date or timezone.localdate(),
            operator_name=kwargs.pop('operator_name', 'Ramesh'),
            vehicle_number=kwargs.pop('vehicle_number', f'TN-{random.randint(1000, 9999)}'),
            start_time=start_time,
            end_time=end_time,
            **kwargs
        )

    @staticmethod
    def create_fuel(user, quantity_liters=Decimal('50.00'), cost_per_liter=Decimal('90.00'), **kwargs):
        return FuelRecord.objects.create(
            created_by=user,
            vehicle_number=kwargs.pop('vehicle_number', f'TN-{random.randint(1000, 9999)}'),
            quantity_liters=quantity_liters,
            cost_per_liter=cost_per_liter,
            **kwargs
        )

    @staticmethod
    def create_worker(name=None, employee_id=None):
        if not name:
            name = f'Worker_{TestDataFactory.random_string(6)}'
        return Worker.objects.create(name=name, employee_id=employee_id)

    @staticmethod
    def create_attendance(user, workers=None, date=None, check_in=time(8, 0), check_out=time(17, 0), **kwargs):
        record = AttendanceRecord.objects.create(
            created_by=user,
            date=date or timezone.localdate(),
            check_in=check_in,
            check_out=check_out,
            **kwargs
        )
        record.workers.set(workers or [TestDataFactory.create_worker()])
        return record

    @staticmethod
    def create_inventory_item(user=None, item_name=None, quantity=Decimal('10.00'),
                              minimum_quantity=Decimal('5.00'), **kwargs):
        return InventoryItem.objects.create(
            created_by=user,
            item_name=item_name or f'Item_{TestDataFactory.random_string(6)}',
            quantity=quantity,
            minimum_quantity=minimum_quantity,
            **kwargs
        )

    @staticmethod
    def create_safety_incident(user, severity='Low', **kwargs):
        return SafetyIncident.objects.create(
            created_by=user,
            location=kwargs.pop('location', 'Bench 3'),
            incident_type=kwargs.pop('incident_type', 'Slip'),
            description=kwargs.pop('description', 'Worker slipped on loose gravel'),
            severity=severity,
            **kwargs
        )

    @staticmethod
    def create_crusher_production(user, material_input=Decimal('100.00'), total_output=Decimal('85.00'), **kwargs):
        kwargs.setdefault('machine_working_hours', Decimal('8.00'))
        return CrusherProduction.objects.create(
            created_by=user,
            material_input=material_input,
            total_output=total_output,
            **kwargs
        )

    @staticmethod
    def create_eb_report(user, start_kwh=1000, end_kwh=1250, cost_per_unit=Decimal('8.00'), pf=0.9, **kwargs):
        return EBReport.objects.create(
            created_by=user,
            starting_reading={'kw': 100, 'kva': 110, 'kvah': 900, 'kwh': start_kwh, 'pf_c': 0.9, 'pf': pf},
            ending_reading={'kw': 120, 'kva': 130, 'kvah': 1100, 'kwh': end_kwh, 'pf_c': 0.9, 'pf': pf},
            cost_per_unit=cost_per_unit,
            **kwargs
        )

    @staticmethod
    def create_production_stock(user, material_type='20mm', quantity=Decimal('50.00'), **kwargs):
        return ProductionStock.objects.create(
            created_by=user, material_type=material_type, quantity=quantity, **kwargs
        )

    @staticmethod
    def create_purchase_request(user, material_name='Drill bits', quantity=Decimal('4.00'),
                                estimated_cost=Decimal('12000.00'), **kwargs):
        return PurchaseRequest.objects.create(
            created_by=user,
            material_name=material_name,
            quantity=quantity,
            estimated_cost=estimated_cost,
            **kwargs
        )

    @staticmethod
    def create_customer(user=None, company_name=None, **kwargs):
        if not company_name:
            company_name = f'Customer_{TestDataFactory.random_string(6)}'
        return Customer.objects.create(created_by=user, company_name=company_name, **kwargs)

    @staticmethod
    def create_invoice(user, customer=None, items=None, amount_paid=Decimal('0'), **kwargs):
        """Create an invoice; the default single item totals 1050.00 tax inclusive"""
        if customer is None:
            customer = TestDataFactory.create_customer(user)
        return Invoice.objects.create(
            created_by=user,
            customer=customer,
            customer_name=kwargs.pop('customer_name', customer.company_name),
            items=items or [{'material': '20mm', 'quantity': 10, 'rate': 105}],
            amount_paid=amount_paid,
            **kwargs
        )

    @staticmethod
    def create_dispatch(user, quantity_dispatched=Decimal('20.00'), quantity_received=Decimal('0'), **kwargs):
        return DispatchEntry.objects.create(
            created_by=user,
            dispatch_number=kwargs.pop('dispatch_number', f'DSP-{TestDataFactory.random_string(8).upper()}'),
            material_type=kwargs.pop('material_type', '20mm'),
            quantity_dispatched=quantity_dispatched,
            quantity_received=quantity_received,
            destination=kwargs.pop('destination', 'Site A'),
            **kwargs
        )

    @staticmethod
    def create_account_transaction(user, transaction_type='invoice', amount=Decimal('1000.00'), **kwargs):
        if transaction_type == 'expense':
            kwargs.setdefault('reason', 'Diesel')
        return AccountTransaction.objects.create(
            created_by=user, transaction_type=transaction_type, amount=amount, **kwargs
        )

    @staticmethod
    def create_permit(user=None, approval_date=None, expiry_date=None, **kwargs):
        today = timezone.localdate()
        return Permit.objects.create(
            created_by=user,
            company_name=kwargs.pop('company_name', 'Sri Ganesh Blue Metals'),
            permit_type=kwargs.pop('permit_type', 'quarry'),
            approval_date=approval_date or today - timedelta(days=300),
            expiry_date=expiry_date or today + timedelta(days=65),
            **kwargs
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
