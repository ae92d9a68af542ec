from django.urls import path
from . import views

urlpatterns = [
    # Drilling
    path('drilling/', views.drilling_list_create, name='drilling-list-create'),
    path('drilling/summary/', views.drilling_summary, name='drilling-summary'),
    path('drilling/<int:pk>/', views.drilling_detail, name='drilling-detail'),

    # Blasting
    path('blasting/', views.blasting_list_create, name='blasting-list-create'),
    path('blasting/summary/', views.blasting_summary, name='blasting-summary'),
    path('blasting/<int:pk>/', views.blasting_detail, name='blasting-detail'),

    # Breaking/Loading
    path('loading/', views.loading_list_create, name='loading-list-create'),
    path('loading/summary/', views.loading_summary, name='loading-summary'),
    path('loading/<int:pk>/', views.loading_detail, name='loading-detail'),

    # Transport
    path('transport/', views.transport_list_create, name='transport-list-create'),
    path('transport/summary/', views.transport_summary, name='transport-summary'),
    path('transport/<int:pk>/', views.transport_detail, name='transport-detail'),

    # JCB operations
    path('jcb-operations/', views.jcb_list_create, name='jcb-list-create'),
    path('jcb-operations/summary/', views.jcb_summary, name='jcb-summary'),
    path('jcb-operations/<int:pk>/', views.jcb_detail, name='jcb-detail'),

    # Attendance
    path('workers/', views.worker_list_create, name='worker-list-create'),
    path('attendance/', views.attendance_list_create, name='attendance-list-create'),
    path('attendance/summary/', views.attendance_summary, name='attendance-summary'),
    path('attendance/<int:pk>/', views.attendance_detail, name='attendance-detail'),

    # Media
    path('media-records/', views.media_list_create, name='media-list-create'),
    path('media-records/summary/', views.media_summary, name='media-summary'),
    path('media-records/<int:pk>/', views.media_detail, name='media-detail'),
]
