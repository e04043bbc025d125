"""
Main URL configuration for smarthome_panel project
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/auth/', include('accounts.urls')),
    path('api/homes/', include('homes.urls')),
    path('api/remote/', include('remote_control.urls')),
    path('api/assistant/', include('assistant.urls')),
]
