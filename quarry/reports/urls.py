from django.urls import path
from . import views

urlpatterns = [
    path('reports/director-dashboard/', views.director_dashboard, name='director-dashboard'),
    path('reports/contractor-dashboard/', views.contractor_dashboard, name='contractor-dashboard'),
    path('reports/production/', views.production_report, name='production-report'),
    path('reports/sales/', views.sales_report, name='sales-report'),
    path('reports/accounting/', views.accounting_report, name='accounting-report'),
    path('reports/quarry-production/', views.quarry_production_report, name='quarry-production-report'),
]
