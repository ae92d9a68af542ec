"""
URL configuration for the quarry project.

Every app mounts its routes under /api/v1/.
"""
from django.contrib import admin
from django.urls import path, include, re_path
from django.conf import settings
from django.views.static import serve

admin.site.site_header = "Quarry Operations Admin Panel"
admin.site.site_title = "Quarry Operations Admin Portal"
admin.site.index_title = "Welcome to the Quarry Operations Admin Portal"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('quarry.core.urls')),
    path('api/v1/', include('quarry.operations.urls')),
    path('api/v1/', include('quarry.resources.urls')),
    path('api/v1/', include('quarry.crusher.urls')),
    path('api/v1/', include('quarry.stock.urls')),
    path('api/v1/', include('quarry.parties.urls')),
    path('api/v1/', include('quarry.sales.urls')),
    path('api/v1/', include('quarry.permits.urls')),
    path('api/v1/', include('quarry.approvals.urls')),
    path('api/v1/', include('quarry.reports.urls')),
    re_path(r'^media/(?P<path>.*)$', serve, {'document_root': settings.MEDIA_ROOT}),
    re_path(r'^static/(?P<path>.*)$', serve, {'document_root': settings.STATIC_ROOT}),
]
