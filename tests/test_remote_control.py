import uuid

import pytest

from homes.models import Automation, Device, Room

pytestmark = pytest.mark.django_db


def test_toggle_requires_auth(home, anon_client):
    device = Device.objects.get(name='Kitchen Lights')
    assert anon_client.post(f'/api/remote/devices/{device.pk}/toggle').status_code == 401
    assert Device.objects.get(pk=device.pk).active is False


def test_toggle_light_updates_room(home, user_client):
    device = Device.objects.get(name='Kitchen Lights')

    response = user_client.post(f'/api/remote/devices/{device.pk}/toggle')

    assert response.status_code == 200
    assert response.data['status'] == 'success'
    assert response.data['message'] == 'Kitchen Lights is now On'
    assert Room.objects.get(name='Kitchen').lights_on == 1


def test_toggle_unknown_device(user_client):
    response = user_client.post(f'/api/remote/devices/{uuid.uuid4()}/toggle')
    assert response.status_code == 404
    assert 'not found' in response.data['error']


def test_room_lights_off(home, user_client):
    response = user_client.post('/api/remote/rooms/Living%20Room/lights', {'on': False}, format='json')

    assert response.status_code == 200
    assert response.data['message'] == 'All lights in Living Room turned off.'
    assert Device.objects.get(name='Living Room Lights').active is False
    # Non-light devices in the room are left alone
    assert Device.objects.get(name='Security Camera 1').active is True


def test_room_lights_requires_flag(home, user_client):
    response = user_client.post('/api/remote/rooms/Kitchen/lights', {}, format='json')
    assert response.status_code == 400
    assert 'on' in response.data['fields']


def test_room_lights_unknown_room(home, user_client):
    response = user_client.post('/api/remote/rooms/Attic/lights', {'on': True}, format='json')
    assert response.status_code == 404


def test_activate_scene(home, user_client):
    response = user_client.post('/api/remote/scenes/activate', {'name': 'Focus Time'}, format='json')

    assert response.status_code == 200
    assert response.data['message'] == 'Scene Activated'
    assert len(response.data['devices']) == 3
    assert not Device.objects.filter(category='light', active=False).exists()


def test_activate_unknown_scene_succeeds_without_changes(home, user_client):
    response = user_client.post('/api/remote/scenes/activate', {'name': 'Disco'}, format='json')

    assert response.status_code == 200
    assert response.data['devices'] == []


def test_activate_scene_requires_name(user_client):
    response = user_client.post('/api/remote/scenes/activate', {}, format='json')
    assert response.status_code == 400


def test_toggle_automation_flips(home, user_client):
    automation = Automation.objects.get(name='Climate Control')

    response = user_client.post(f'/api/remote/automations/{automation.pk}/toggle', {}, format='json')

    assert response.status_code == 200
    assert response.data['automation']['active'] is False
    assert response.data['automation']['status'] == 'Paused'


def test_toggle_automation_forced_state(home, user_client):
    automation = Automation.objects.get(name='Security Mode')

    response = user_client.post(f'/api/remote/automations/{automation.pk}/toggle', {'state': True}, format='json')

    assert response.status_code == 200
    assert response.data['message'] == 'Automation Active'
    assert Automation.objects.get(pk=automation.pk).active is True
