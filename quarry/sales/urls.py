from django.urls import path
from . import views

urlpatterns = [
    # Invoices
    path('invoices/', views.invoice_list_create, name='invoice-list-create'),
    path('invoices/summary/', views.invoice_summary, name='invoice-summary'),
    path('invoices/<int:pk>/', views.invoice_detail, name='invoice-detail'),
    path('invoices/<int:pk>/payments/', views.invoice_payments, name='invoice-payments'),
    path('invoices/<int:pk>/receipt/', views.invoice_receipt, name='invoice-receipt'),

    # Dispatch list
    path('dispatch/', views.dispatch_list_create, name='dispatch-list-create'),
    path('dispatch/summary/', views.dispatch_summary, name='dispatch-summary'),
    path('dispatch/<int:pk>/', views.dispatch_detail, name='dispatch-detail'),

    # Accounts
    path('accounts/', views.account_list_create, name='account-list-create'),
    path('accounts/summary/', views.account_summary, name='account-summary'),
    path('accounts/<int:pk>/', views.account_detail, name='account-detail'),
]
