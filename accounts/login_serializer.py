"""
Login serializer with JWT response
"""
from rest_framework import serializers
from .auth import login


class LoginSerializer(serializers.Serializer):
    """Login with email/password"""
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, data):
        # Raises AuthError (401) on mismatch; no session is created
        data['user'] = login(data['email'], data['password'])
        return data


class RefreshSerializer(serializers.Serializer):
    """Exchange a refresh token for a new access token"""
    refresh = serializers.CharField()

