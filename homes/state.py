"""
Home State Service

Entity store, derived-state recalculation and the scene/automation
executor for the control panel. Every mutation runs in one transaction
together with the room-counter recalculation it causes, so readers never
see devices and room counters out of step. Row locks are taken room
first, then devices, and are released before live updates go out.
"""
import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Count, Q
from django.utils.timezone import now

from accounts.auth import resolve_role
from accounts.serializers import UserAdminSerializer, UserRegistrationSerializer
from smarthome_panel.errors import AuthorizationError, NotFoundError, ValidationError
from .broadcast import publish_state_change
from .models import Automation, Device, DeviceCategory, Room, Scene
from .scenes import SceneId, target_for
from .serializers import AutomationSerializer, DeviceSerializer, RoomSerializer, SceneSerializer

logger = logging.getLogger('homes')

KINDS = ('device', 'room', 'scene', 'automation', 'user')

# category -> ((status, variant) when active, (status, variant) when inactive)
STATUS_TABLE = {
    'light': (('On', 'default'), ('Off', 'secondary')),
    'lock': (('Locked', 'default'), ('Unlocked', 'destructive')),
    'camera': (('Recording', 'default'), ('Off', 'secondary')),
    'ac': (('Cooling', 'default'), ('Off', 'secondary')),
}

NEW_DEVICE_STATUS = ('Off', 'secondary')


def derive_status(category, active, current=None):
    """
    Return (status, status_variant) for a device.

    Categories without an entry in STATUS_TABLE keep `current`.
    """
    entry = STATUS_TABLE.get(str(category))
    if entry is None:
        return current
    on, off = entry
    return on if active else off


def automation_status(active):
    return Automation.STATUS_ACTIVE if active else Automation.STATUS_PAUSED


class HomeStateService:
    """
    Authoritative CRUD over devices, rooms, scenes, automations and users,
    plus the bulk state transitions the panel exposes.

    Build one per request with the acting user. `actor=None` is the
    system context used by management commands and skips the role gate.
    """

    def __init__(self, actor=None, publish=True):
        self.actor = actor
        self.publish = publish

    @classmethod
    def for_request(cls, request):
        return cls(actor=request.user)

    # Entity store

    def get(self, kind):
        """All records of a kind, in display order."""
        if kind == 'device':
            return Device.objects.select_related('room')
        if kind == 'room':
            return Room.objects.prefetch_related('devices')
        if kind == 'scene':
            return Scene.objects.all()
        if kind == 'automation':
            return Automation.objects.all()
        if kind == 'user':
            return get_user_model().objects.all()
        raise ValueError(f"Unknown entity kind: {kind}")

    def get_by_id(self, kind, key):
        """Record with the given id (rooms: name), or None."""
        lookup = {'name': key} if kind == 'room' else {'pk': key}
        try:
            return self.get(kind).filter(**lookup).first()
        except (ValueError, TypeError, DjangoValidationError):
            return None

    def require(self, kind, key):
        obj = self.get_by_id(kind, key)
        if obj is None:
            raise NotFoundError(f"{kind.capitalize()} '{key}' not found.")
        return obj

    def create(self, kind, data):
        """Validate, apply the kind's defaults and store a new record."""
        self._require_admin()

        if kind == 'user':
            serializer = UserRegistrationSerializer(data=data)
            if not serializer.is_valid():
                raise ValidationError(serializer.errors)
            user = serializer.save()
            self._notify('user', [user.pk])
            return user

        validated = self._validate(kind, data)

        with transaction.atomic():
            if kind == 'device':
                obj = Device(**validated)
                if not obj.icon_name:
                    obj.icon_name = obj.category
                obj.active = False
                obj.status, obj.status_variant = derive_status(obj.category, False, NEW_DEVICE_STATUS)
                obj.last_changed = now()
                obj.save()
                self.recalculate_rooms([obj.room_id])
            elif kind == 'room':
                obj = Room(**validated)
                obj.save()
                self.recalculate_rooms([obj.id])
                obj.refresh_from_db()
            elif kind == 'scene':
                obj = Scene.objects.create(**validated)
            else:
                obj = Automation(**validated)
                obj.status = automation_status(obj.active)
                obj.save()

        logger.info(f"✨ Created {kind} {obj.pk} ({obj.name})")
        self._notify(kind, [obj.pk])
        return obj

    def update(self, kind, key, partial):
        """Merge `partial` into an existing record. Derived fields are ignored."""
        self._require_admin()

        with transaction.atomic():
            if kind == 'device':
                obj = self._lock_device(key)
            else:
                obj = self._lock(kind, key)

            if kind == 'user':
                serializer = UserAdminSerializer(obj, data=partial, partial=True)
                if not serializer.is_valid():
                    raise ValidationError(serializer.errors)
                validated = serializer.validated_data
            else:
                validated = self._validate(kind, partial, instance=obj)

            old_room_id = getattr(obj, 'room_id', None)
            for field, value in validated.items():
                setattr(obj, field, value)

            if kind == 'device' and 'category' in validated:
                obj.status, obj.status_variant = derive_status(
                    obj.category, obj.active, (obj.status, obj.status_variant)
                )
            if kind == 'automation':
                obj.status = automation_status(obj.active)

            obj.save()

            if kind == 'device':
                self.recalculate_rooms([old_room_id, obj.room_id])

        logger.info(f"✏️  Updated {kind} {obj.pk}: {', '.join(validated) or 'no changes'}")
        self._notify(kind, [obj.pk])
        return obj

    def delete(self, kind, key):
        """Remove a record. Deleting a room detaches its devices."""
        self._require_admin()

        with transaction.atomic():
            if kind == 'device':
                obj = self._lock_device(key)
                room_id = obj.room_id
                pk = obj.pk
                obj.delete()
                self.recalculate_rooms([room_id])
            else:
                obj = self._lock(kind, key)
                if kind == 'user' and self.actor is not None and obj.pk == self.actor.pk:
                    raise ValidationError("You cannot delete your own account.")
                pk = obj.pk
                obj.delete()

        logger.info(f"🗑️  Deleted {kind} {pk}")
        self._notify(kind, [pk])

    # Derived-state recalculation

    def recalculate_rooms(self, room_ids):
        """
        Recompute lights_on / lights_total for the given rooms in one
        aggregate query. Returns the updated rooms ordered by id.
        """
        ids = sorted({room_id for room_id in room_ids if room_id is not None})
        if not ids:
            return []

        with transaction.atomic():
            rooms = list(Room.objects.select_for_update().filter(id__in=ids).order_by('id'))
            counts = {
                row['room_id']: row
                for row in Device.objects.filter(room_id__in=ids, category=DeviceCategory.LIGHT)
                .order_by()
                .values('room_id')
                .annotate(lights_total=Count('id'), lights_on=Count('id', filter=Q(active=True)))
            }
            for room in rooms:
                row = counts.get(room.id)
                room.lights_total = row['lights_total'] if row else 0
                room.lights_on = row['lights_on'] if row else 0
            Room.objects.bulk_update(rooms, ['lights_on', 'lights_total'])

        return rooms

    def recalculate_all_rooms(self):
        return self.recalculate_rooms(Room.objects.values_list('id', flat=True))

    # Scene / automation executor

    def toggle_device(self, device_id):
        """Flip a device on/off and refresh its room's counters."""
        with transaction.atomic():
            device = self._lock_device(device_id)
            self._set_active(device, not device.active)
            device.save(update_fields=['active', 'status', 'status_variant', 'last_changed'])
            self.recalculate_rooms([device.room_id])

        logger.info(f"💡 {device.name} -> {device.status}")
        self._notify('device', [device.pk])
        return device

    def set_all_lights(self, room_name, turn_on):
        """Switch every light in a room in one batch. All or nothing."""
        with transaction.atomic():
            room = Room.objects.select_for_update().filter(name=room_name).first()
            if room is None:
                raise NotFoundError(f"Room '{room_name}' not found.")

            status, variant = derive_status(DeviceCategory.LIGHT, turn_on)
            lights = Device.objects.select_for_update().filter(room=room, category=DeviceCategory.LIGHT)
            changed = lights.exclude(active=turn_on)
            ids = list(changed.values_list('id', flat=True))
            changed.update(active=turn_on, status=status, status_variant=variant, last_changed=now())
            lights.filter(active=turn_on).update(status=status, status_variant=variant)

            room = self.recalculate_rooms([room.id])[0]

        logger.info(f"💡 All lights in {room_name} turned {'on' if turn_on else 'off'} ({len(ids)} device(s))")
        self._notify('device', ids)
        self._notify('room', [room.id])
        return room

    def activate_scene(self, name):
        """
        Apply a scene preset as one batch and recompute every touched room.

        Unknown scene names change nothing and still succeed.
        """
        scene_id = SceneId.from_name(name)
        if scene_id is None:
            logger.warning(f"🎬 Unknown scene '{name}', nothing to apply")
            return []

        with transaction.atomic():
            targets = {}
            room_ids = set()
            for device in Device.objects.order_by():
                target = target_for(scene_id, device)
                if target is not None:
                    targets[device.pk] = target
                    room_ids.add(device.room_id)

            list(Room.objects.select_for_update().filter(id__in=[i for i in room_ids if i]).order_by('id'))
            devices = list(Device.objects.select_for_update().filter(pk__in=list(targets)))
            for device in devices:
                self._set_active(device, targets[device.pk])
                room_ids.add(device.room_id)
            Device.objects.bulk_update(devices, ['active', 'status', 'status_variant', 'last_changed'])

            self.recalculate_rooms(room_ids)

        logger.info(f"🎬 Scene '{scene_id.value}' applied to {len(devices)} device(s)")
        self._notify('device', [d.pk for d in devices])
        return devices

    def toggle_automation(self, automation_id, force_state=None):
        """
        Set an automation's active flag, or flip it when no state is forced.
        Automations are never run by the panel itself.
        """
        with transaction.atomic():
            automation = self._lock('automation', automation_id)
            automation.active = (not automation.active) if force_state is None else bool(force_state)
            automation.status = automation_status(automation.active)
            automation.save(update_fields=['active', 'status'])

        logger.info(f"⚙️  Automation {automation.name} -> {automation.status}")
        self._notify('automation', [automation.pk])
        return automation

    # Helpers

    def _require_admin(self):
        if self.actor is None:
            return
        if not (self.actor.is_authenticated and resolve_role(self.actor) == 'admin'):
            raise AuthorizationError("Only admins can change this.")

    def _validate(self, kind, data, instance=None):
        serializer_class = {
            'device': DeviceSerializer,
            'room': RoomSerializer,
            'scene': SceneSerializer,
            'automation': AutomationSerializer,
        }[kind]
        serializer = serializer_class(instance, data=data, partial=instance is not None)
        if not serializer.is_valid():
            raise ValidationError(serializer.errors)
        return serializer.validated_data

    def _lock(self, kind, key):
        obj = self.require(kind, key)
        return type(obj).objects.select_for_update().get(pk=obj.pk)

    def _lock_device(self, device_id):
        """
        Lock a device and the room it belongs to, room first.

        The room is read before the device row is locked, so a concurrent
        move can leave us holding the wrong room. Retry until the locked
        device still points at the locked room.
        """
        room_id = self.require('device', device_id).room_id
        while True:
            if room_id:
                list(Room.objects.select_for_update().filter(id=room_id))
            device = Device.objects.select_for_update().filter(pk=device_id).first()
            if device is None:
                raise NotFoundError(f"Device '{device_id}' not found.")
            if device.room_id == room_id:
                return device
            room_id = device.room_id

    def _set_active(self, device, active):
        if device.active != active:
            device.last_changed = now()
        device.active = active
        device.status, device.status_variant = derive_status(
            device.category, active, (device.status, device.status_variant)
        )

    def _notify(self, kind, ids):
        if not self.publish or not ids:
            return
        ids = list(ids)
        transaction.on_commit(lambda: publish_state_change(kind, ids))
