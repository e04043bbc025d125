"""
Serializers for assistant requests and for the model's JSON replies.
"""
from rest_framework import serializers

VOICE_ACTIONS = ('device', 'scene', 'automation', 'navigation', 'unknown')
SECURITY_EVENTS = ('smoke', 'intrusion', 'gas_leak')


# Request bodies

class VoiceCommandRequestSerializer(serializers.Serializer):
    command = serializers.CharField(max_length=500)


class TextToSpeechRequestSerializer(serializers.Serializer):
    text = serializers.CharField(max_length=4000)


class SystemStatusRequestSerializer(serializers.Serializer):
    """`systemMetrics` is a JSON document passed through as text."""
    systemMetrics = serializers.CharField()


class SecurityEventRequestSerializer(serializers.Serializer):
    eventType = serializers.ChoiceField(choices=SECURITY_EVENTS)
    location = serializers.CharField(max_length=100)


class SuggestScenesRequestSerializer(serializers.Serializer):
    pastActions = serializers.ListField(child=serializers.CharField(max_length=500), allow_empty=True)


# Model replies

class VoiceCommandResultSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=VOICE_ACTIONS)
    target = serializers.CharField(allow_blank=True, default='')
    value = serializers.BooleanField(required=False, allow_null=True)
    speechResponse = serializers.CharField(allow_blank=True, default='')


class SystemStatusResultSerializer(serializers.Serializer):
    hasAnomalies = serializers.BooleanField()
    anomalyExplanation = serializers.CharField(allow_blank=True)
    recommendations = serializers.CharField(allow_blank=True)


class SecurityAlertResultSerializer(serializers.Serializer):
    alertTitle = serializers.CharField()
    alertDescription = serializers.CharField()
    recommendations = serializers.ListField(child=serializers.CharField())
    speechResponse = serializers.CharField()


class SuggestedScenesResultSerializer(serializers.Serializer):
    suggestedScenes = serializers.ListField(child=serializers.CharField(), allow_empty=True)
