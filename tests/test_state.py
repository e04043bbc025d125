import uuid
from unittest import mock

import pytest

from homes.models import Automation, Device, Room, Scene
from homes.state import HomeStateService, derive_status
from smarthome_panel.errors import AuthorizationError, NotFoundError, ValidationError

pytestmark = pytest.mark.django_db


@pytest.fixture
def service(admin_user):
    return HomeStateService(actor=admin_user, publish=False)


@pytest.fixture
def kitchen(db):
    """Kitchen with two lights (one on) and a camera."""
    room = Room.objects.create(name='Kitchen', temperature=24)
    Device.objects.create(name='Kitchen Lights', room=room, category='light', active=True,
                          status='On', status_variant='default')
    Device.objects.create(name='Pantry Light', room=room, category='light', active=False)
    Device.objects.create(name='Kitchen Camera', room=room, category='camera', active=True,
                          status='Recording', status_variant='default')
    HomeStateService(publish=False).recalculate_rooms([room.id])
    room.refresh_from_db()
    return room


def assert_counters_consistent():
    for room in Room.objects.all():
        lights = Device.objects.filter(room=room, category='light')
        assert room.lights_total == lights.count(), room.name
        assert room.lights_on == lights.filter(active=True).count(), room.name


class TestDeriveStatus:

    @pytest.mark.parametrize('category,active,expected', [
        ('light', True, ('On', 'default')),
        ('light', False, ('Off', 'secondary')),
        ('lock', True, ('Locked', 'default')),
        ('lock', False, ('Unlocked', 'destructive')),
        ('camera', True, ('Recording', 'default')),
        ('ac', False, ('Off', 'secondary')),
    ])
    def test_table(self, category, active, expected):
        assert derive_status(category, active) == expected

    def test_other_categories_keep_current(self):
        assert derive_status('security', False, ('Online', 'default')) == ('Online', 'default')


class TestRecalculate:

    def test_counts_lights_only(self, kitchen):
        assert kitchen.lights_total == 2
        assert kitchen.lights_on == 1

    def test_room_without_lights(self, service):
        room = service.create('room', {'name': 'Garage', 'temperature': 18})
        assert room.lights_total == 0
        assert room.lights_on == 0

    def test_all_rooms_match_seed(self, home):
        assert_counters_consistent()
        living = Room.objects.get(name='Living Room')
        assert (living.lights_on, living.lights_total) == (1, 1)


class TestToggleDevice:

    def test_light_toggle_updates_room(self, service, kitchen):
        light = Device.objects.get(name='Pantry Light')
        device = service.toggle_device(light.pk)

        assert device.active is True
        assert (device.status, device.status_variant) == ('On', 'default')
        kitchen.refresh_from_db()
        assert kitchen.lights_on == 2

    def test_lock_toggle_off_is_unlocked(self, service, home):
        # Front Door Lock starts locked
        lock = Device.objects.get(name='Front Door Lock')
        device = service.toggle_device(lock.pk)

        assert device.active is False
        assert device.status == 'Unlocked'
        assert device.status_variant == 'destructive'

    def test_toggle_stamps_last_changed(self, service, kitchen):
        light = Device.objects.get(name='Pantry Light')
        before = light.last_changed
        device = service.toggle_device(light.pk)
        assert device.last_changed > before

    def test_toggle_follows_device_moved_after_lookup(self, service, kitchen):
        hall = Room.objects.create(name='Hall')
        light = Device.objects.get(name='Pantry Light')
        stale = Device.objects.get(pk=light.pk)
        Device.objects.filter(pk=light.pk).update(room=hall)
        service.recalculate_rooms([kitchen.id, hall.id])

        locks = mock.patch.object(Room.objects, 'select_for_update', wraps=Room.objects.select_for_update)
        with mock.patch.object(service, 'require', return_value=stale), locks as select_for_update:
            device = service.toggle_device(light.pk)

        assert device.room_id == hall.id
        # stale room, current room, then the recalculation
        assert select_for_update.call_count == 3
        hall.refresh_from_db()
        assert (hall.lights_on, hall.lights_total) == (1, 1)
        assert_counters_consistent()

    def test_double_toggle_restores_state(self, service, kitchen):
        light = Device.objects.get(name='Kitchen Lights')
        service.toggle_device(light.pk)
        device = service.toggle_device(light.pk)

        assert device.active is True
        assert device.status == 'On'
        kitchen.refresh_from_db()
        assert kitchen.lights_on == 1

    def test_unknown_device(self, service):
        with pytest.raises(NotFoundError):
            service.toggle_device(uuid.uuid4())

    def test_any_signed_in_user_may_toggle(self, regular_user, kitchen):
        light = Device.objects.get(name='Pantry Light')
        device = HomeStateService(actor=regular_user, publish=False).toggle_device(light.pk)
        assert device.active is True


class TestSetAllLights:

    def test_turn_all_on(self, service, kitchen):
        room = service.set_all_lights('Kitchen', True)

        assert (room.lights_on, room.lights_total) == (2, 2)
        for light in Device.objects.filter(room=kitchen, category='light'):
            assert light.active is True
            assert light.status == 'On'

    def test_leaves_other_categories(self, service, kitchen):
        service.set_all_lights('Kitchen', False)
        camera = Device.objects.get(name='Kitchen Camera')
        assert camera.active is True
        assert camera.status == 'Recording'

    def test_unknown_room(self, service, kitchen):
        with pytest.raises(NotFoundError):
            service.set_all_lights('Attic', True)

    def test_lights_already_in_target_state_keep_last_changed(self, service, kitchen):
        already_on = Device.objects.get(name='Kitchen Lights')
        switched = Device.objects.get(name='Pantry Light')

        service.set_all_lights('Kitchen', True)

        assert Device.objects.get(pk=already_on.pk).last_changed == already_on.last_changed
        assert Device.objects.get(pk=switched.pk).last_changed > switched.last_changed

    def test_room_without_lights(self, service):
        Room.objects.create(name='Hall')
        room = service.set_all_lights('Hall', True)
        assert (room.lights_on, room.lights_total) == (0, 0)


class TestActivateScene:

    def test_good_night(self, service, home):
        service.activate_scene('Good Night')

        for light in Device.objects.filter(category='light'):
            assert (light.active, light.status, light.status_variant) == (False, 'Off', 'secondary')
        for lock in Device.objects.filter(category='lock'):
            assert (lock.active, lock.status, lock.status_variant) == (True, 'Locked', 'default')
        assert_counters_consistent()

    def test_good_morning(self, service, home):
        service.activate_scene('Good Morning')

        assert Device.objects.get(name='Living Room Lights').active is True
        assert Device.objects.get(name='Bedroom Lights').active is True
        front = Device.objects.get(name='Front Door Lock')
        assert (front.active, front.status) == (False, 'Unlocked')
        # Devices the scene does not name are untouched
        assert Device.objects.get(name='Kitchen Lights').active is False
        assert_counters_consistent()

    def test_movie_night(self, service, home):
        service.activate_scene('Movie Night')

        assert Device.objects.get(name='Kitchen Lights').active is False
        assert Device.objects.get(name='Bedroom Lights').active is False
        assert Device.objects.get(name='Living Room Lights').active is True
        assert_counters_consistent()

    def test_focus_time(self, service, home):
        service.activate_scene('Focus Time')

        assert all(Device.objects.filter(category='light').values_list('active', flat=True))
        assert_counters_consistent()

    def test_name_is_case_insensitive(self, service, home):
        service.activate_scene('good night')
        assert not Device.objects.filter(category='light', active=True).exists()

    def test_unknown_scene_changes_nothing(self, service, home):
        before = list(Device.objects.order_by('name').values_list('active', 'status'))
        assert service.activate_scene('Party Mode') == []
        after = list(Device.objects.order_by('name').values_list('active', 'status'))
        assert before == after

    def test_already_matching_devices_keep_last_changed(self, service, home):
        service.activate_scene('Good Night')
        stamp = Device.objects.get(name='Kitchen Lights').last_changed
        service.activate_scene('Good Night')
        assert Device.objects.get(name='Kitchen Lights').last_changed == stamp


class TestToggleAutomation:

    def test_flip(self, service, home):
        automation = Automation.objects.get(name='Security Mode')
        result = service.toggle_automation(automation.pk)
        assert (result.active, result.status) == (True, 'Active')

    def test_force_state(self, service, home):
        automation = Automation.objects.get(name='Morning Routine')
        result = service.toggle_automation(automation.pk, False)
        assert (result.active, result.status) == (False, 'Paused')
        result = service.toggle_automation(automation.pk, False)
        assert (result.active, result.status) == (False, 'Paused')

    def test_force_on_twice_stays_active(self, service, home):
        automation = Automation.objects.get(name='Security Mode')
        assert automation.active is False

        result = service.toggle_automation(automation.pk, True)
        assert (result.active, result.status) == (True, 'Active')
        result = service.toggle_automation(automation.pk, True)
        assert (result.active, result.status) == (True, 'Active')
        stored = Automation.objects.get(pk=automation.pk)
        assert (stored.active, stored.status) == (True, 'Active')

    def test_unknown(self, service):
        with pytest.raises(NotFoundError):
            service.toggle_automation(uuid.uuid4())


class TestEntityStore:

    @pytest.mark.parametrize('kind,data,defaults', [
        ('device',
         {'name': 'Island Light', 'location': 'Kitchen', 'category': 'light', 'icon_name': 'Lamp'},
         {'active': False, 'status': 'Off', 'status_variant': 'secondary'}),
        ('room',
         {'name': 'Garage', 'temperature': 18.5},
         {'lights_on': 0, 'lights_total': 0}),
        ('scene',
         {'name': 'Reading', 'description': 'Warm light for reading.'},
         {'icon_name': 'Sparkles'}),
        ('automation',
         {'name': 'Porch', 'description': 'Porch light at dusk', 'trigger': 'Sunset',
          'action': 'Turn on porch light'},
         {'active': True, 'status': 'Active', 'last_run': 'Never', 'icon_name': 'Zap'}),
    ])
    def test_create_then_read_back(self, service, kitchen, kind, data, defaults):
        created = service.create(kind, data)
        key = created.name if kind == 'room' else created.pk

        stored = service.get_by_id(kind, key)

        assert stored is not None
        assert stored.pk == created.pk
        for field, value in {**data, **defaults}.items():
            assert getattr(stored, field) == value, field

    def test_create_device_defaults(self, service, kitchen):
        device = service.create('device', {'name': 'Island Light', 'location': 'Kitchen', 'category': 'light'})

        assert device.active is False
        assert (device.status, device.status_variant) == ('Off', 'secondary')
        kitchen.refresh_from_db()
        assert kitchen.lights_total == 3

    def test_create_lock_starts_unlocked(self, service, kitchen):
        device = service.create('device', {'name': 'Side Lock', 'location': 'Kitchen', 'category': 'lock'})
        assert (device.status, device.status_variant) == ('Unlocked', 'destructive')

    def test_create_device_unknown_room(self, service, kitchen):
        with pytest.raises(ValidationError):
            service.create('device', {'name': 'Lost', 'location': 'Attic', 'category': 'light'})
        assert not Device.objects.filter(name='Lost').exists()

    def test_create_device_bad_category(self, service, kitchen):
        with pytest.raises(ValidationError):
            service.create('device', {'name': 'Toaster', 'location': 'Kitchen', 'category': 'toaster'})

    def test_update_ignores_derived_fields(self, service, kitchen):
        light = Device.objects.get(name='Pantry Light')
        device = service.update('device', light.pk, {'name': 'Pantry Lamp', 'active': True, 'status': 'On'})

        assert device.name == 'Pantry Lamp'
        assert device.active is False
        assert device.status == 'Off'

    def test_move_device_recounts_both_rooms(self, service, kitchen):
        hall = Room.objects.create(name='Hall')
        light = Device.objects.get(name='Kitchen Lights')
        service.update('device', light.pk, {'location': 'Hall'})

        kitchen.refresh_from_db()
        hall.refresh_from_db()
        assert (kitchen.lights_on, kitchen.lights_total) == (0, 1)
        assert (hall.lights_on, hall.lights_total) == (1, 1)

    def test_delete_device_recounts_room(self, service, kitchen):
        light = Device.objects.get(name='Kitchen Lights')
        service.delete('device', light.pk)

        kitchen.refresh_from_db()
        assert (kitchen.lights_on, kitchen.lights_total) == (0, 1)

    def test_delete_room_detaches_devices(self, service, kitchen):
        service.delete('room', 'Kitchen')
        assert Device.objects.filter(room__isnull=True).count() == 3

    def test_rooms_are_addressed_by_name(self, service, kitchen):
        assert service.get_by_id('room', 'Kitchen').pk == kitchen.pk
        assert service.get_by_id('room', 'Attic') is None

    def test_get_by_id_with_malformed_uuid(self, service):
        assert service.get_by_id('device', 'not-a-uuid') is None

    def test_automation_status_follows_active(self, service):
        automation = service.create('automation', {
            'name': 'Porch', 'description': 'Porch light at dusk',
            'trigger': 'Sunset', 'action': 'Turn on porch light', 'active': False,
        })
        assert automation.status == 'Paused'
        automation = service.update('automation', automation.pk, {'active': True})
        assert automation.status == 'Active'

    def test_scene_crud(self, service):
        scene = service.create('scene', {'name': 'Reading', 'description': 'Warm light'})
        assert scene.icon_name == 'Sparkles'
        service.update('scene', scene.pk, {'description': 'Soft light'})
        assert Scene.objects.get(pk=scene.pk).description == 'Soft light'
        service.delete('scene', scene.pk)
        assert not Scene.objects.filter(pk=scene.pk).exists()

    def test_system_context_skips_role_gate(self, kitchen):
        device = HomeStateService().create('device', {'name': 'Fan', 'location': 'Kitchen', 'category': 'other'})
        assert device.pk is not None


class TestRoleGate:

    def test_non_admin_cannot_delete_device(self, regular_user, home):
        device = Device.objects.get(name='Kitchen Lights')
        with pytest.raises(AuthorizationError):
            HomeStateService(actor=regular_user, publish=False).delete('device', device.pk)
        assert Device.objects.filter(pk=device.pk).exists()

    @pytest.mark.parametrize('kind,data', [
        ('room', {'name': 'Attic'}),
        ('scene', {'name': 'Party', 'description': 'Loud'}),
        ('automation', {'name': 'Noon', 'trigger': '12:00', 'action': 'Chime'}),
    ])
    def test_non_admin_cannot_create(self, regular_user, kind, data):
        with pytest.raises(AuthorizationError):
            HomeStateService(actor=regular_user, publish=False).create(kind, data)

    def test_non_admin_cannot_update_user(self, regular_user, admin_user):
        with pytest.raises(AuthorizationError):
            HomeStateService(actor=regular_user, publish=False).update('user', admin_user.pk, {'role': 'user'})
        admin_user.refresh_from_db()
        assert admin_user.role == 'admin'
