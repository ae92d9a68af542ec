"""
Test suite for the sales module
Tests: invoice arithmetic, thermal receipts, invoices and payments, dispatch list, accounts
"""
from datetime import datetime, timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone
from rest_framework import status

from quarry.core.models import AuditLog
from quarry.core.roles import SALES, DIRECTOR, CONTRACTOR
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.core.utils import current_year_prefix
from quarry.sales.calculations import invoice_totals, net_weight, payment_status, price_items
from quarry.sales.models import Invoice, InvoicePayment
from quarry.sales.receipts import ReceiptError, columns_for, format_line, render_invoice_receipt


class InvoiceCalculationTests(SimpleTestCase):

    def test_net_weight(self):
        self.assertEqual(net_weight(Decimal('12.5'), Decimal('32.75')), Decimal('20.250'))
        self.assertIsNone(net_weight(None, Decimal('32.75')))

    def test_price_items_uses_weight_for_first_item(self):
        items = price_items(
            [{'material': '20mm', 'quantity': 1, 'rate': 850}, {'material': 'Loading', 'quantity': 1, 'rate': 300}],
            Decimal('20.000'),
        )
        self.assertEqual(items[0]['quantity'], 20.0)
        self.assertEqual(items[0]['amount'], 17000.0)
        self.assertEqual(items[1]['amount'], 300.0)

    def test_totals_are_tax_inclusive(self):
        subtotal, tax, total = invoice_totals([{'amount': 1050.0}], Decimal('5.00'))
        self.assertEqual(total, Decimal('1050.00'))
        self.assertEqual(subtotal, Decimal('1000.00'))
        self.assertEqual(tax, Decimal('50.00'))

    def test_zero_tax(self):
        subtotal, tax, total = invoice_totals([{'amount': 99.99}], Decimal('0'))
        self.assertEqual((subtotal, tax, total), (Decimal('99.99'), Decimal('0.00'), Decimal('99.99')))

    def test_payment_status(self):
        self.assertEqual(payment_status(Decimal('100'), Decimal('0')), 'unpaid')
        self.assertEqual(payment_status(Decimal('100'), Decimal('40')), 'partial')
        self.assertEqual(payment_status(Decimal('100'), Decimal('100')), 'paid')


class ReceiptTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.printed_at = timezone.make_aware(datetime(2026, 3, 14, 9, 45))

    def test_columns_for_width(self):
        self.assertEqual(columns_for(80), 32)
        self.assertEqual(columns_for('58'), 24)
        with self.assertRaises(ReceiptError):
            columns_for(72)

    def test_format_line_keeps_a_space(self):
        self.assertEqual(format_line('Total:', '10.00', 14), 'Total:   10.00')
        self.assertEqual(format_line('Subtotal:', '1000.00', 12), 'Subtotal: 1000.00')

    def test_receipt_contents(self):
        invoice = TestDataFactory.create_invoice(
            self.user,
            customer_name='Kaveri Infra Projects',
            amount_paid=Decimal('500'),
            notes='Deliver to gate 2',
        )
        text = render_invoice_receipt(invoice, 80, company_name='Sri Ganesh Blue Metals', printed_at=self.printed_at)
        self.assertIn('SRI GANESH BLUE METALS', text)
        self.assertIn(f'Bill#: {invoice.invoice_number}', text)
        self.assertIn('Kaveri Infra Projects', text)
        self.assertIn('1050.00', text)
        self.assertIn('Balance:', text)
        self.assertIn('[ PARTIAL ]', text)
        self.assertIn('Deliver to gate 2', text)
        self.assertIn('Printed: 14/03/2026 09:45', text)

    def test_lines_fit_narrow_paper(self):
        invoice = TestDataFactory.create_invoice(
            self.user,
            items=[{'material': 'Manufactured sand (plastering grade)', 'quantity': 12.5, 'rate': 1480}],
            terms_conditions='Goods once sold will not be taken back. Subject to local jurisdiction.',
        )
        text = render_invoice_receipt(invoice, 58, company_name='Sri Ganesh Blue Metals and Crushers',
                                      printed_at=self.printed_at)
        self.assertTrue(all(len(line) <= 24 for line in text.splitlines()))

    def test_no_company_header(self):
        invoice = TestDataFactory.create_invoice(self.user)
        text = render_invoice_receipt(invoice, 80, printed_at=self.printed_at)
        self.assertEqual(text.splitlines()[0].strip(), 'BILL')


class InvoiceAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.customer = TestDataFactory.create_customer(self.user, company_name='Kaveri Infra')

    def test_create_from_weighbridge(self):
        response = self.client.post('/api/v1/invoices/', {
            'customer': self.customer.id,
            'items': [{'material': '20mm', 'quantity': '1', 'rate': '850'}],
            'empty_weight': '12.5',
            'gross_weight': '32.5',
            'tax_rate': '5',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['invoice_number'], f"{current_year_prefix('INV')}001")
        self.assertEqual(response.data['customer_name'], 'Kaveri Infra')
        self.assertEqual(Decimal(response.data['net_weight']), Decimal('20.000'))
        self.assertEqual(Decimal(response.data['items'][0]['amount']), Decimal('17000.00'))
        self.assertEqual(Decimal(response.data['total_amount']), Decimal('17000.00'))
        self.assertEqual(Decimal(response.data['subtotal']), Decimal('16190.48'))
        self.assertEqual(Decimal(response.data['tax_amount']), Decimal('809.52'))
        self.assertEqual(response.data['status'], 'unpaid')

    def test_initial_payment_recorded(self):
        response = self.client.post('/api/v1/invoices/', {
            'customer_name': 'Walk-in buyer',
            'items': [{'material': 'M-Sand', 'quantity': '2', 'rate': '500'}],
            'amount_paid': '400',
            'payment_mode': 'cash',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'partial')
        self.assertEqual(len(response.data['payments']), 1)
        self.assertEqual(Decimal(response.data['balance']), Decimal('600.00'))

    def test_overpaid_on_creation_rejected(self):
        response = self.client.post('/api/v1/invoices/', {
            'customer_name': 'Walk-in buyer',
            'items': [{'material': 'M-Sand', 'quantity': '2', 'rate': '500'}],
            'amount_paid': '1500',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('amount_paid', response.data)

    def test_requires_items(self):
        response = self.client.post('/api/v1/invoices/', {'customer_name': 'Walk-in', 'items': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('items', response.data)

    def test_requires_a_customer(self):
        response = self.client.post('/api/v1/invoices/', {
            'items': [{'material': 'M-Sand', 'quantity': '2', 'rate': '500'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('customer_name', response.data)

    def test_gross_below_empty_rejected(self):
        response = self.client.post('/api/v1/invoices/', {
            'customer_name': 'Walk-in',
            'items': [{'material': '20mm', 'quantity': '1', 'rate': '850'}],
            'empty_weight': '30',
            'gross_weight': '12',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('gross_weight', response.data)

    def test_blank_name_on_update_falls_back_to_customer(self):
        invoice = TestDataFactory.create_invoice(self.user, customer=self.customer, customer_name='Site office')
        response = self.client.patch(f'/api/v1/invoices/{invoice.id}/', {'customer_name': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        invoice.refresh_from_db()
        self.assertEqual(invoice.customer_name, 'Kaveri Infra')

    def test_blank_name_on_update_without_customer_rejected(self):
        invoice = TestDataFactory.create_invoice(self.user, customer=self.customer, customer_name='Walk-in buyer')
        Invoice.objects.filter(pk=invoice.pk).update(customer=None)
        response = self.client.patch(f'/api/v1/invoices/{invoice.id}/', {'customer_name': ''}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('customer_name', response.data)
        invoice.refresh_from_db()
        self.assertEqual(invoice.customer_name, 'Walk-in buyer')

    def test_update_recalculates_but_keeps_payments(self):
        invoice = TestDataFactory.create_invoice(self.user, customer=self.customer, amount_paid=Decimal('50'))
        response = self.client.patch(f'/api/v1/invoices/{invoice.id}/', {
            'items': [{'material': '20mm', 'quantity': '20', 'rate': '105'}],
            'amount_paid': '2100',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        invoice.refresh_from_db()
        self.assertEqual(invoice.total_amount, Decimal('2100.00'))
        self.assertEqual(invoice.amount_paid, Decimal('50.00'))
        self.assertEqual(invoice.status, 'partial')

    def test_overdue_filter(self):
        today = timezone.localdate()
        TestDataFactory.create_invoice(self.user, customer=self.customer, due_date=today - timedelta(days=3))
        TestDataFactory.create_invoice(self.user, customer=self.customer, due_date=today + timedelta(days=3))
        response = self.client.get('/api/v1/invoices/?overdue=true')
        self.assertEqual(response.data['count'], 1)
        response = self.client.get('/api/v1/invoices/?overdue=false')
        self.assertEqual(response.data['count'], 1)

    def test_summary(self):
        TestDataFactory.create_invoice(self.user, customer=self.customer)
        TestDataFactory.create_invoice(self.user, customer=self.customer, amount_paid=Decimal('1050'))
        TestDataFactory.create_invoice(self.user, customer=self.customer, amount_paid=Decimal('50'))
        response = self.client.get('/api/v1/invoices/summary/')
        self.assertEqual(response.data['invoice_count'], 3)
        self.assertEqual(response.data['total_amount'], 3150.0)
        self.assertEqual(response.data['total_paid'], 1100.0)
        self.assertEqual(response.data['total_balance'], 2050.0)
        self.assertEqual(response.data['paid_count'], 1)
        self.assertEqual(response.data['partial_count'], 1)
        self.assertEqual(response.data['unpaid_count'], 1)

    def test_contractor_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=CONTRACTOR))
        response = client.get('/api/v1/invoices/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class InvoicePaymentTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.invoice = TestDataFactory.create_invoice(self.user)

    def test_partial_then_full_payment(self):
        url = f'/api/v1/invoices/{self.invoice.id}/payments/'
        response = self.client.post(url, {'amount': '600', 'payment_mode': 'upi'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'partial')
        self.assertEqual(Decimal(response.data['balance']), Decimal('450.00'))

        response = self.client.post(url, {'amount': '450', 'payment_mode': 'cash'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'paid')

        response = self.client.get(url)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(InvoicePayment.objects.filter(invoice=self.invoice).count(), 2)
        self.assertEqual(AuditLog.objects.filter(action='payment_add').count(), 2)

    def test_overpayment_rejected(self):
        response = self.client.post(f'/api/v1/invoices/{self.invoice.id}/payments/', {'amount': '1050.01'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.invoice.refresh_from_db()
        self.assertEqual(self.invoice.amount_paid, Decimal('0.00'))

    def test_zero_payment_rejected(self):
        response = self.client.post(f'/api/v1/invoices/{self.invoice.id}/payments/', {'amount': '0'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(InvoicePayment.objects.exists())

    def test_payment_on_paid_invoice_rejected(self):
        paid = TestDataFactory.create_invoice(self.user, amount_paid=Decimal('1050'))
        response = self.client.post(f'/api/v1/invoices/{paid.id}/payments/', {'amount': '1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Invoice.objects.get(pk=paid.pk).status, 'paid')


class InvoiceReceiptAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.invoice = TestDataFactory.create_invoice(self.user)
        TestDataFactory.create_setting('company_name', 'Sri Ganesh Blue Metals')

    def test_receipt_is_plain_text(self):
        response = self.client.get(f'/api/v1/invoices/{self.invoice.id}/receipt/?width=58')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response['Content-Type'].startswith('text/plain'))
        text = response.content.decode()
        self.assertIn('SRI GANESH BLUE', text)
        self.assertTrue(all(len(line) <= 24 for line in text.splitlines()))

    def test_receipt_without_company(self):
        response = self.client.get(f'/api/v1/invoices/{self.invoice.id}/receipt/?show_company=false')
        self.assertNotIn('SRI GANESH', response.content.decode())

    def test_unsupported_width(self):
        response = self.client.get(f'/api/v1/invoices/{self.invoice.id}/receipt/?width=72')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class DispatchAPITests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)

    def test_create_computes_balance(self):
        response = self.client.post('/api/v1/dispatch/', {
            'dispatch_number': 'DSP-1001',
            'material_type': '40mm',
            'quantity_dispatched': '30',
            'quantity_received': '28.5',
            'destination': 'NH-44 site',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['balance_quantity']), Decimal('1.50'))

    def test_received_above_dispatched_rejected(self):
        response = self.client.post('/api/v1/dispatch/', {
            'dispatch_number': 'DSP-1002',
            'material_type': '40mm',
            'quantity_dispatched': '30',
            'quantity_received': '31',
            'destination': 'NH-44 site',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('quantity_received', response.data)

    def test_status_filter_and_summary(self):
        TestDataFactory.create_dispatch(self.director, delivery_status='delivered',
                                        quantity_received=Decimal('20'))
        TestDataFactory.create_dispatch(self.director)
        response = self.client.get('/api/v1/dispatch/?status=delivered')
        self.assertEqual(response.data['count'], 1)

        response = self.client.get('/api/v1/dispatch/summary/')
        self.assertEqual(response.data['record_count'], 2)
        self.assertEqual(response.data['total_dispatched'], 40.0)
        self.assertEqual(response.data['total_received'], 20.0)
        self.assertEqual(response.data['total_balance'], 20.0)
        self.assertEqual(response.data['delivered_count'], 1)

    def test_sales_role_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=SALES))
        response = client.get('/api/v1/dispatch/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class AccountAPITests(TestCase):

    def setUp(self):
        self.director = TestDataFactory.create_user(role=DIRECTOR)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.director)

    def test_create_computes_balance(self):
        response = self.client.post('/api/v1/accounts/', {
            'transaction_type': 'invoice',
            'invoice_number': 'INV-2026-010',
            'amount': '5000',
            'amount_given': '3000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['balance']), Decimal('2000.00'))

    def test_expense_needs_reason(self):
        response = self.client.post('/api/v1/accounts/', {
            'transaction_type': 'expense', 'amount': '800',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('reason', response.data)

    def test_summary(self):
        TestDataFactory.create_account_transaction(self.director, 'invoice', Decimal('5000'))
        TestDataFactory.create_account_transaction(self.director, 'payment', Decimal('1000'))
        TestDataFactory.create_account_transaction(self.director, 'expense', Decimal('1500'))
        response = self.client.get('/api/v1/accounts/summary/')
        self.assertEqual(response.data['total_income'], 6000.0)
        self.assertEqual(response.data['total_expense'], 1500.0)
        self.assertEqual(response.data['net_balance'], 4500.0)

    def test_type_filter(self):
        TestDataFactory.create_account_transaction(self.director, 'invoice')
        TestDataFactory.create_account_transaction(self.director, 'expense')
        response = self.client.get('/api/v1/accounts/?transaction_type=expense')
        self.assertEqual(response.data['count'], 1)
