"""
Django admin for homes app
"""
from django.contrib import admin
from django.db import transaction

from .models import Automation, Device, Room, Scene
from .state import HomeStateService, automation_status, derive_status


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin for Room model. Light counters are derived."""
    list_display = ('id', 'name', 'temperature', 'lights_on', 'lights_total')
    search_fields = ('name',)
    readonly_fields = ('lights_on', 'lights_total', 'created_at', 'updated_at')
    ordering = ('id',)


@admin.register(Device)
class DeviceAdmin(admin.ModelAdmin):
    """Admin for Device model. Status fields are derived."""
    list_display = ('name', 'room', 'category', 'active', 'status', 'last_changed')
    list_filter = ('category', 'active', 'room')
    search_fields = ('id', 'name', 'room__name')
    readonly_fields = ('id', 'active', 'status', 'status_variant', 'last_changed', 'created_at')
    ordering = ('created_at',)

    # Keep derived fields in step when devices are edited here
    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            obj.status, obj.status_variant = derive_status(obj.category, obj.active, (obj.status, obj.status_variant))
            super().save_model(request, obj, form, change)
            HomeStateService(publish=False).recalculate_rooms([obj.room_id, form.initial.get('room')])

    def delete_model(self, request, obj):
        room_id = obj.room_id
        with transaction.atomic():
            super().delete_model(request, obj)
            HomeStateService(publish=False).recalculate_rooms([room_id])


@admin.register(Scene)
class SceneAdmin(admin.ModelAdmin):
    list_display = ('name', 'description', 'icon_name')
    search_fields = ('name',)


@admin.register(Automation)
class AutomationAdmin(admin.ModelAdmin):
    list_display = ('name', 'trigger', 'action', 'status', 'last_run')
    list_filter = ('active',)
    search_fields = ('name',)
    readonly_fields = ('id', 'status', 'created_at')

    def save_model(self, request, obj, form, change):
        obj.status = automation_status(obj.active)
        super().save_model(request, obj, form, change)
