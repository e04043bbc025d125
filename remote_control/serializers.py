from rest_framework import serializers


class RoomLightsSerializer(serializers.Serializer):
    on = serializers.BooleanField()


class SceneActivationSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)


class AutomationToggleSerializer(serializers.Serializer):
    """Omit `state` (or send null) to flip the current value."""
    state = serializers.BooleanField(required=False, allow_null=True, default=None)
