"""
Home models: devices, rooms, scenes and automations
"""
import uuid
from django.db import models
from django.utils.timezone import now


class DeviceCategory(models.TextChoices):
    LIGHT = 'light', 'Light'
    LOCK = 'lock', 'Lock'
    CAMERA = 'camera', 'Camera'
    AC = 'ac', 'AC'
    SECURITY = 'security', 'Security'
    OTHER = 'other', 'Other'


class StatusVariant(models.TextChoices):
    DEFAULT = 'default', 'Default'
    SECONDARY = 'secondary', 'Secondary'
    DESTRUCTIVE = 'destructive', 'Destructive'


class Room(models.Model):
    """
    A room in the home.

    lights_on / lights_total are materialized from the room's light
    devices and are only ever written by the state service.
    """
    name = models.CharField(max_length=255, unique=True)
    temperature = models.FloatField(default=21.0)

    # Derived from member devices
    lights_on = models.IntegerField(default=0)
    lights_total = models.IntegerField(default=0)

    created_at = models.DateTimeField(default=now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rooms'
        ordering = ['id']

    def __str__(self):
        return f"{self.name} ({self.lights_on}/{self.lights_total} lights on)"


class Device(models.Model):
    """
    A controllable device. status / status_variant are derived from
    (category, active) and never set directly.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    room = models.ForeignKey(
        Room,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='devices'
    )
    category = models.CharField(max_length=20, choices=DeviceCategory.choices, default=DeviceCategory.OTHER)
    icon_name = models.CharField(max_length=50, blank=True)

    active = models.BooleanField(default=False)
    status = models.CharField(max_length=50, default='Off')
    status_variant = models.CharField(max_length=20, choices=StatusVariant.choices, default=StatusVariant.SECONDARY)

    last_changed = models.DateTimeField(default=now)
    created_at = models.DateTimeField(default=now)

    class Meta:
        db_table = 'devices'
        ordering = ['created_at', 'name']
        indexes = [
            models.Index(fields=['room', 'category'], name='devices_room_category_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.category}: {self.status})"

    @property
    def location(self):
        return self.room.name if self.room_id else None


class Scene(models.Model):
    """A named preset; what it does is keyed by name in homes.scenes."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    icon_name = models.CharField(max_length=50, default='Sparkles')

    created_at = models.DateTimeField(default=now)

    class Meta:
        db_table = 'scenes'
        ordering = ['created_at', 'name']

    def __str__(self):
        return self.name


class Automation(models.Model):
    """
    A user-toggleable rule. trigger and action are descriptive text only;
    nothing evaluates them.
    """
    STATUS_ACTIVE = 'Active'
    STATUS_PAUSED = 'Paused'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    trigger = models.CharField(max_length=255)
    action = models.CharField(max_length=255)
    icon_name = models.CharField(max_length=50, default='Zap')

    active = models.BooleanField(default=True)
    status = models.CharField(max_length=10, default=STATUS_ACTIVE)
    last_run = models.CharField(max_length=100, default='Never')

    created_at = models.DateTimeField(default=now)

    class Meta:
        db_table = 'automations'
        ordering = ['created_at', 'name']

    def __str__(self):
        return f"{self.name} ({self.status})"
