"""
WebSocket Consumer for the control panel
Pushes state-change events to every connected panel
"""
import json
import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from accounts.authentication import user_from_access_token
from smarthome_panel.errors import AuthError
from .broadcast import PANEL_GROUP

logger = logging.getLogger('homes')


class PanelConsumer(AsyncWebsocketConsumer):
    """
    Handles WebSocket connections from panel UIs.

    Clients connect with `?token=<access token>` and receive
    `state_changed` events after every committed mutation.
    """

    async def connect(self):
        query = parse_qs(self.scope.get('query_string', b'').decode())
        token = query.get('token', [None])[0]

        if not token:
            await self.close(code=4000)  # No token provided
            return

        user = await self.get_user(token)
        if user is None:
            await self.close(code=4001)  # Token invalid or expired
            return

        self.scope['user'] = user

        await self.channel_layer.group_add(PANEL_GROUP, self.channel_name)
        await self.accept()
        logger.info(f"✅ Panel connected (user: {user.email})")

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(PANEL_GROUP, self.channel_name)
        logger.info(f"❌ Panel disconnected ({close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        """Only keep-alive pings are accepted from panels"""
        try:
            data = json.loads(text_data or '{}')
        except json.JSONDecodeError:
            return
        if not isinstance(data, dict):
            return

        if data.get('type') == 'ping':
            await self.send(text_data=json.dumps({'type': 'pong'}))

    async def state_changed(self, event):
        """Forward a committed state change to the panel"""
        await self.send(text_data=json.dumps(event['data']))

    @database_sync_to_async
    def get_user(self, token):
        try:
            return user_from_access_token(token)
        except AuthError as e:
            logger.warning(f"🔒 Panel connection refused: {e.detail}")
            return None
