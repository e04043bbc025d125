from unittest import mock

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from accounts.jwt_utils import generate_access_token, generate_refresh_token
from homes.broadcast import PANEL_GROUP, publish_state_change
from homes.consumers import PanelConsumer
from homes.models import Device
from homes.state import HomeStateService
from smarthome_panel.errors import NotFoundError


def test_mutation_publishes_after_commit(home, regular_user, django_capture_on_commit_callbacks):
    device = Device.objects.get(name='Kitchen Lights')

    with mock.patch('homes.state.publish_state_change') as publish:
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            HomeStateService(actor=regular_user).toggle_device(device.pk)
            # Nothing goes out while the transaction is open
            publish.assert_not_called()

    assert len(callbacks) == 1
    publish.assert_called_once_with('device', [device.pk])


def test_failed_mutation_publishes_nothing(home, regular_user, django_capture_on_commit_callbacks):
    with mock.patch('homes.state.publish_state_change') as publish:
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            with pytest.raises(NotFoundError):
                HomeStateService(actor=regular_user).set_all_lights('Attic', True)

    assert callbacks == []
    publish.assert_not_called()


def test_publish_reaches_group():
    channel_layer = get_channel_layer()

    async def scenario():
        channel = await channel_layer.new_channel()
        await channel_layer.group_add(PANEL_GROUP, channel)
        return channel

    channel = async_to_sync(scenario)()
    assert publish_state_change('room', [3]) is True

    message = async_to_sync(channel_layer.receive)(channel)
    assert message['type'] == 'state.changed'
    assert message['data'] == {'type': 'state_changed', 'kind': 'room', 'ids': ['3']}
    async_to_sync(channel_layer.group_discard)(PANEL_GROUP, channel)


@pytest.mark.django_db(transaction=True)
class TestPanelConsumer:

    def test_rejects_missing_token(self):
        async def scenario():
            communicator = WebsocketCommunicator(PanelConsumer.as_asgi(), '/ws/panel/')
            connected, code = await communicator.connect()
            await communicator.disconnect()
            return connected, code

        connected, code = async_to_sync(scenario)()
        assert connected is False
        assert code == 4000

    def test_rejects_refresh_token(self, regular_user):
        token = generate_refresh_token(regular_user)

        async def scenario():
            communicator = WebsocketCommunicator(PanelConsumer.as_asgi(), f'/ws/panel/?token={token}')
            connected, code = await communicator.connect()
            await communicator.disconnect()
            return connected, code

        connected, code = async_to_sync(scenario)()
        assert connected is False
        assert code == 4001

    def test_receives_state_changes(self, regular_user):
        token = generate_access_token(regular_user)

        async def scenario():
            communicator = WebsocketCommunicator(PanelConsumer.as_asgi(), f'/ws/panel/?token={token}')
            connected, _ = await communicator.connect()
            assert connected

            await communicator.send_json_to({'type': 'ping'})
            pong = await communicator.receive_json_from()

            await get_channel_layer().group_send(PANEL_GROUP, {
                'type': 'state.changed',
                'data': {'type': 'state_changed', 'kind': 'device', 'ids': ['abc']},
            })
            event = await communicator.receive_json_from()
            await communicator.disconnect()
            return pong, event

        pong, event = async_to_sync(scenario)()
        assert pong == {'type': 'pong'}
        assert event == {'type': 'state_changed', 'kind': 'device', 'ids': ['abc']}

    def test_non_object_frames_are_ignored(self, regular_user):
        token = generate_access_token(regular_user)

        async def scenario():
            communicator = WebsocketCommunicator(PanelConsumer.as_asgi(), f'/ws/panel/?token={token}')
            connected, _ = await communicator.connect()
            assert connected

            for frame in ('[]', '"ping"', '42', 'null', 'not json'):
                await communicator.send_to(text_data=frame)
            await communicator.send_json_to({'type': 'ping'})
            pong = await communicator.receive_json_from()
            await communicator.disconnect()
            return pong

        assert async_to_sync(scenario)() == {'type': 'pong'}
