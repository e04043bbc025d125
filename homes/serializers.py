from datetime import timedelta

from django.utils import timezone
from django.utils.timesince import timesince
from rest_framework import serializers
from .models import Device, Room, Scene, Automation, DeviceCategory


def time_label(moment):
    """Human label for when something last changed ("Just now", "5 minutes ago")."""
    if moment is None:
        return ''
    if timezone.now() - moment < timedelta(minutes=1):
        return 'Just now'
    return f"{timesince(moment, depth=1)} ago"


class DeviceSerializer(serializers.ModelSerializer):
    """Device as the UI sees it; location is the owning room's name."""
    location = serializers.SlugRelatedField(
        source='room',
        slug_field='name',
        queryset=Room.objects.all(),
        allow_null=True,
        required=False,
    )
    category = serializers.ChoiceField(choices=DeviceCategory.choices)
    time = serializers.SerializerMethodField()

    class Meta:
        model = Device
        fields = (
            'id', 'name', 'location', 'category', 'icon_name',
            'active', 'status', 'status_variant', 'time', 'last_changed',
        )
        read_only_fields = ('id', 'active', 'status', 'status_variant', 'last_changed')

    def get_time(self, obj):
        return time_label(obj.last_changed)


class RoomSerializer(serializers.ModelSerializer):
    """Room with its derived light counters."""
    devices = serializers.SerializerMethodField()

    class Meta:
        model = Room
        fields = ('id', 'name', 'temperature', 'lights_on', 'lights_total', 'devices')
        read_only_fields = ('id', 'lights_on', 'lights_total', 'devices')

    def get_devices(self, obj):
        return [
            {'id': str(d.id), 'name': d.name, 'category': d.category, 'active': d.active}
            for d in obj.devices.all()
        ]


class SceneSerializer(serializers.ModelSerializer):
    class Meta:
        model = Scene
        fields = ('id', 'name', 'description', 'icon_name')
        read_only_fields = ('id',)


class AutomationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Automation
        fields = (
            'id', 'name', 'description', 'trigger', 'action', 'icon_name',
            'active', 'status', 'last_run',
        )
        read_only_fields = ('id', 'status')
