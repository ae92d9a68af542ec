from django.urls import path
from . import views

urlpatterns = [
    path('permits/', views.permit_list_create, name='permit-list-create'),
    path('permits/summary/', views.permit_summary, name='permit-summary'),
    path('permits/<int:pk>/', views.permit_detail, name='permit-detail'),
]
