from django.urls import path
from . import views

urlpatterns = [
    # Production stock
    path('production-stock/', views.production_stock_list_create, name='production-stock-list-create'),
    path('production-stock/summary/', views.production_stock_summary, name='production-stock-summary'),
    path('production-stock/<int:pk>/', views.production_stock_detail, name='production-stock-detail'),

    # Purchase requests
    path('purchase-requests/', views.purchase_request_list_create, name='purchase-request-list-create'),
    path('purchase-requests/summary/', views.purchase_request_summary, name='purchase-request-summary'),
    path('purchase-requests/<int:pk>/', views.purchase_request_detail, name='purchase-request-detail'),
]
