"""
Serializers for authentication and user management
"""
from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password

User = get_user_model()


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user signup."""
    name = serializers.CharField(max_length=255, required=True, allow_blank=False)
    email = serializers.EmailField(
        required=True,
        validators=[UniqueValidator(queryset=User.objects.all(), message='Email already exists', lookup='iexact')]
    )
    password = serializers.CharField(write_only=True, required=True, trim_whitespace=False, validators=[validate_password])
    password2 = serializers.CharField(write_only=True, required=True, trim_whitespace=False, label='Confirm Password')

    class Meta:
        model = User
        fields = ('name', 'email', 'password', 'password2')

    def validate(self, attrs):
        """Ensure passwords match."""
        if attrs['password'] != attrs['password2']:
            raise serializers.ValidationError({"password": "Password fields didn't match."})
        return attrs

    def create(self, validated_data):
        """Create and return a new user with the default role."""
        validated_data.pop('password2')
        return User.objects.create_user(
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'],
        )


class UserSerializer(serializers.ModelSerializer):
    """Serializer for user details."""
    email = serializers.EmailField(
        max_length=255,
        validators=[UniqueValidator(queryset=User.objects.all(), message='Email already exists', lookup='iexact')]
    )

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role', 'date_joined', 'last_login')
        read_only_fields = ('id', 'role', 'date_joined', 'last_login')


class UserAdminSerializer(serializers.ModelSerializer):
    """Serializer used by the admin console; role is writable here."""
    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role', 'date_joined', 'last_login')
        read_only_fields = ('id', 'email', 'date_joined', 'last_login')


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for password change."""
    old_password = serializers.CharField(required=True, trim_whitespace=False)
    new_password = serializers.CharField(required=True, trim_whitespace=False, validators=[validate_password])
    new_password2 = serializers.CharField(required=True, trim_whitespace=False, label='Confirm New Password')

    def validate(self, attrs):
        """Ensure new passwords match."""
        if attrs['new_password'] != attrs['new_password2']:
            raise serializers.ValidationError({"new_password": "Password fields didn't match."})
        return attrs
