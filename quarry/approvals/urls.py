from django.urls import path
from . import views

urlpatterns = [
    path('approvals/', views.approval_list, name='approval-list'),
    path('approvals/summary/', views.approval_summary, name='approval-summary'),
    path('approvals/<str:record_type>/<int:pk>/', views.approval_decide, name='approval-decide'),
]
