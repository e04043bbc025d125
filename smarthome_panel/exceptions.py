"""
REST framework exception handler.

Flattens every error into {"error": "<message>"} so the UI can show it
as a toast. Field errors are kept under "fields".
"""
import logging

from rest_framework.views import exception_handler

logger = logging.getLogger('smarthome_panel')


def _first_message(data):
    if isinstance(data, dict):
        if 'detail' in data:
            return _first_message(data['detail'])
        for value in data.values():
            return _first_message(value)
        return ''
    if isinstance(data, (list, tuple)):
        return _first_message(data[0]) if data else ''
    return str(data)


def panel_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    body = {'error': _first_message(data)}
    if isinstance(data, dict) and 'detail' not in data:
        body['fields'] = data

    view = context.get('view')
    logger.warning(
        f"{view.__class__.__name__ if view else 'request'} failed "
        f"({response.status_code}): {body['error']}"
    )

    response.data = body
    return response
