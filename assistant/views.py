"""
Assistant API Views

Voice commands, text-to-speech and the model-backed insights shown on the
system and security pages.
"""
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from homes.state import HomeStateService
from smarthome_panel.errors import ValidationError
from . import flows
from .dispatch import execute_voice_command
from .serializers import (
    SecurityEventRequestSerializer,
    SuggestScenesRequestSerializer,
    SystemStatusRequestSerializer,
    TextToSpeechRequestSerializer,
    VoiceCommandRequestSerializer,
)


def _validated(serializer_class, request):
    serializer = serializer_class(data=request.data)
    if not serializer.is_valid():
        raise ValidationError(serializer.errors)
    return serializer.validated_data


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def voice_command(request):
    """
    Parse a spoken command, carry it out and speak the answer.

    POST /api/assistant/voice-command

    Request body:
    {
        "command": "turn off the kitchen lights"
    }

    Response:
    {
        "status": "success",
        "message": "Command Executed" | "Command Failed",
        "result": {...parsed command...},
        "speech": "...",
        "navigate_to": "/rooms" | null,
        "audioDataUri": "data:audio/wav;base64,..."
    }
    """
    command = _validated(VoiceCommandRequestSerializer, request)['command']
    service = HomeStateService.for_request(request)

    parsed = flows.parse_voice_command(
        command,
        devices=[d.name for d in service.get('device')],
        scenes=[s.name for s in service.get('scene')],
        automations=[a.name for a in service.get('automation')],
    )
    outcome = execute_voice_command(service, parsed)
    speech = flows.text_to_speech(outcome['speech'])

    return Response({
        "status": "success",
        "message": "Command Executed" if outcome['executed'] else "Command Failed",
        "result": parsed,
        "speech": outcome['speech'],
        "navigate_to": outcome['navigate_to'],
        "audioDataUri": speech['audioDataUri'],
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def text_to_speech(request):
    """POST /api/assistant/tts  {"text": "..."} -> {"audioDataUri": "..."}"""
    text = _validated(TextToSpeechRequestSerializer, request)['text']
    return Response(flows.text_to_speech(text), status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def system_status(request):
    """POST /api/assistant/system-status  {"systemMetrics": "<json>"}"""
    metrics = _validated(SystemStatusRequestSerializer, request)['systemMetrics']
    return Response(flows.analyze_system_status(metrics), status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def security_event(request):
    """POST /api/assistant/security-event  {"eventType": "smoke", "location": "Kitchen"}"""
    data = _validated(SecurityEventRequestSerializer, request)
    alert = flows.process_security_event(data['eventType'], data['location'])
    return Response(alert, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def suggest_scenes(request):
    """POST /api/assistant/suggest-scenes  {"pastActions": ["..."]}"""
    past_actions = _validated(SuggestScenesRequestSerializer, request)['pastActions']
    return Response(flows.suggest_scenes(past_actions), status=status.HTTP_200_OK)
