"""
Django admin for accounts app
"""
from django.contrib import admin
from .models import PanelUser


@admin.register(PanelUser)
class PanelUserAdmin(admin.ModelAdmin):
    """Admin for PanelUser model."""
    list_display = ('id', 'email', 'name', 'role', 'is_active', 'last_login', 'date_joined')
    list_filter = ('role', 'is_active')
    search_fields = ('email', 'name')
    readonly_fields = ('id', 'password', 'last_login', 'date_joined')
    ordering = ('id',)
