"""
Live state updates pushed to connected panels over Channels.
"""
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger('homes')

PANEL_GROUP = 'panel_state'


def publish_state_change(kind, ids):
    """
    Tell every connected panel that records of `kind` changed.
    Called after the transaction commits, never while rows are locked.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False

    try:
        async_to_sync(channel_layer.group_send)(
            PANEL_GROUP,
            {
                "type": "state.changed",
                "data": {
                    "type": "state_changed",
                    "kind": kind,
                    "ids": [str(i) for i in ids],
                }
            }
        )
        logger.debug(f"📡 Published {kind} change for {len(ids)} record(s)")
        return True
    except Exception as e:
        # Live updates are best effort; the write has already committed
        logger.error(f"📡 Failed to publish {kind} change: {e}")
        return False
