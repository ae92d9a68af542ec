from django.urls import path
from . import views

urlpatterns = [
    # Crusher production
    path('crusher-production/', views.production_list_create, name='crusher-production-list-create'),
    path('crusher-production/summary/', views.production_summary, name='crusher-production-summary'),
    path('crusher-production/<int:pk>/', views.production_detail, name='crusher-production-detail'),

    # EB reports
    path('eb-reports/', views.eb_list_create, name='eb-report-list-create'),
    path('eb-reports/summary/', views.eb_summary, name='eb-report-summary'),
    path('eb-reports/latest-reading/', views.eb_latest_reading, name='eb-report-latest-reading'),
    path('eb-reports/<int:pk>/', views.eb_detail, name='eb-report-detail'),
]
