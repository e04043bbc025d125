"""
Remote Control API Views

REST endpoints the panel uses to switch devices, rooms, scenes and
automations. Every call goes through HomeStateService, so room counters
are recomputed in the same transaction and panels get a live update.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from homes.serializers import AutomationSerializer, DeviceSerializer, RoomSerializer
from homes.state import HomeStateService
from smarthome_panel.errors import ValidationError
from .serializers import AutomationToggleSerializer, RoomLightsSerializer, SceneActivationSerializer

logger = logging.getLogger('remote_control')


def _validated(serializer_class, request):
    serializer = serializer_class(data=request.data)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.validated_data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def toggle_device(request, device_id):
    """
    Flip a device on or off.

    POST /api/remote/devices/{device_id}/toggle

    Response:
    {
        "status": "success",
        "message": "Living Room Lights is now Off",
        "device": {...}
    }
    """
    device = HomeStateService.for_request(request).toggle_device(device_id)
    return Response({
        "status": "success",
        "message": f"{device.name} is now {device.status}",
        "device": DeviceSerializer(device).data,
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def set_room_lights(request, room_name):
    """
    Switch every light in a room.

    POST /api/remote/rooms/{room_name}/lights

    Request body:
    {
        "on": true | false
    }
    """
    turn_on = _validated(RoomLightsSerializer, request)['on']
    room = HomeStateService.for_request(request).set_all_lights(room_name, turn_on)
    return Response({
        "status": "success",
        "message": f"All lights in {room.name} turned {'on' if turn_on else 'off'}.",
        "room": RoomSerializer(room).data,
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def activate_scene(request):
    """
    Apply a scene preset to the home.

    POST /api/remote/scenes/activate

    Request body:
    {
        "name": "Good Night"
    }

    Unknown scene names change nothing but still answer success.
    """
    name = _validated(SceneActivationSerializer, request)['name']
    devices = HomeStateService.for_request(request).activate_scene(name)
    return Response({
        "status": "success",
        "message": "Scene Activated",
        "description": f'The "{name}" scene has been activated.',
        "devices": DeviceSerializer(devices, many=True).data,
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def toggle_automation(request, automation_id):
    """
    Enable or pause an automation.

    POST /api/remote/automations/{automation_id}/toggle

    Request body (optional):
    {
        "state": true | false
    }
    """
    force_state = _validated(AutomationToggleSerializer, request)['state']
    automation = HomeStateService.for_request(request).toggle_automation(automation_id, force_state)
    return Response({
        "status": "success",
        "message": f"Automation {automation.status}",
        "automation": AutomationSerializer(automation).data,
    }, status=status.HTTP_200_OK)
