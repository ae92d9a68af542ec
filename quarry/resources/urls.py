from django.urls import path
from . import views

urlpatterns = [
    # Fuel
    path('fuel/', views.fuel_list_create, name='fuel-list-create'),
    path('fuel/summary/', views.fuel_summary, name='fuel-summary'),
    path('fuel/<int:pk>/', views.fuel_detail, name='fuel-detail'),

    # Inventory
    path('inventory/', views.inventory_list_create, name='inventory-list-create'),
    path('inventory/summary/', views.inventory_summary, name='inventory-summary'),
    path('inventory/<int:pk>/', views.inventory_detail, name='inventory-detail'),

    # Safety incidents
    path('safety-incidents/', views.safety_list_create, name='safety-list-create'),
    path('safety-incidents/summary/', views.safety_summary, name='safety-summary'),
    path('safety-incidents/<int:pk>/', views.safety_detail, name='safety-detail'),
    path('safety-incidents/<int:pk>/status/', views.safety_status_change, name='safety-status-change'),
    path('safety-incidents/<int:pk>/images/', views.safety_image_upload, name='safety-image-upload'),
]
