"""
Test suite for the parties module
Tests: customer CRUD, search, uniqueness and customer statements
"""
from decimal import Decimal

from django.test import TestCase
from rest_framework import status

from quarry.core.roles import SALES, CONTRACTOR
from quarry.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from quarry.parties.models import Customer


class CustomerAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_customer(self):
        response = self.client.post('/api/v1/customers/', {
            'company_name': 'Sri Murugan Builders',
            'contact_person': 'Senthil',
            'phone': '9876543210',
            'city': 'Coimbatore',
            'customer_type': 'Contractor',
            'credit_limit': '200000',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['country'], 'India')
        self.assertEqual(response.data['payment_terms'], 'Net 30')
        self.assertEqual(response.data['created_by'], self.user.id)

    def test_duplicate_company_rejected(self):
        TestDataFactory.create_customer(company_name='Sri Murugan Builders')
        response = self.client.post('/api/v1/customers/', {'company_name': 'Sri Murugan Builders'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('company_name', response.data)

    def test_blank_company_rejected(self):
        response = self.client.post('/api/v1/customers/', {'company_name': '   '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_search(self):
        TestDataFactory.create_customer(company_name='Kaveri Infra', city='Salem')
        TestDataFactory.create_customer(company_name='Palani Roadways', city='Madurai')
        response = self.client.get('/api/v1/customers/?q=salem')
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['company_name'], 'Kaveri Infra')

    def test_update_and_delete(self):
        customer = TestDataFactory.create_customer()
        response = self.client.patch(f'/api/v1/customers/{customer.id}/', {'is_active': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data['is_active'])
        response = self.client.delete(f'/api/v1/customers/{customer.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Customer.objects.filter(id=customer.id).exists())

    def test_contractor_forbidden(self):
        client = AuthenticatedAPIClient().authenticate_user(TestDataFactory.create_user(role=CONTRACTOR))
        response = client.get('/api/v1/customers/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class CustomerStatementTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user(role=SALES)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.customer = TestDataFactory.create_customer(self.user, credit_limit=Decimal('1000'))

    def test_statement_totals(self):
        TestDataFactory.create_invoice(self.user, customer=self.customer, amount_paid=Decimal('50'))
        TestDataFactory.create_invoice(self.user, customer=self.customer)
        response = self.client.get(f'/api/v1/customers/{self.customer.id}/statement/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        summary = response.data['summary']
        self.assertEqual(summary['invoice_count'], 2)
        self.assertEqual(summary['total_billed'], 2100.0)
        self.assertEqual(summary['total_paid'], 50.0)
        self.assertEqual(summary['outstanding_balance'], 2050.0)
        self.assertTrue(summary['over_credit_limit'])
        self.assertEqual(len(response.data['invoices']), 2)

    def test_statement_without_invoices(self):
        response = self.client.get(f'/api/v1/customers/{self.customer.id}/statement/')
        self.assertEqual(response.data['summary']['outstanding_balance'], 0.0)
        self.assertFalse(response.data['summary']['over_credit_limit'])
