"""
Authentication views for signup, login and the admin user console
"""
import logging

import jwt
from rest_framework import status, generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView
from django.contrib.auth import get_user_model

from homes.state import HomeStateService
from smarthome_panel.errors import AuthError
from .serializers import (
    UserRegistrationSerializer,
    UserSerializer,
    UserAdminSerializer,
    ChangePasswordSerializer,
)
from .login_serializer import LoginSerializer, RefreshSerializer
from .jwt_utils import generate_access_token, generate_refresh_token, refresh_access_token
from .permissions import IsPanelAdmin

User = get_user_model()
logger = logging.getLogger('accounts')


class LoginView(APIView):
    """
    Login endpoint.

    POST /api/auth/login/
    Body: { "email": "user@example.com", "password": "pass" }
    Response: {
        "access": "jwt_token",
        "refresh": "refresh_token",
        "user": {...}
    }
    """
    permission_classes = (permissions.AllowAny,)

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']

        return Response({
            'access': generate_access_token(user),
            'refresh': generate_refresh_token(user),
            'user': UserSerializer(user).data,
            'message': f"Welcome back, {user.name or user.email}!",
        }, status=status.HTTP_200_OK)


class RefreshView(APIView):
    """
    Exchange a refresh token for a new access token.

    POST /api/auth/refresh/
    Body: { "refresh": "refresh_token_string" }
    """
    permission_classes = (permissions.AllowAny,)

    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            access = refresh_access_token(serializer.validated_data['refresh'])
        except jwt.ExpiredSignatureError:
            raise AuthError('Refresh token has expired')
        except jwt.InvalidTokenError as e:
            raise AuthError(f'Invalid token: {str(e)}')
        return Response({'access': access}, status=status.HTTP_200_OK)


class RegisterView(generics.CreateAPIView):
    """
    User signup endpoint.

    POST /api/auth/register/
    Body: { "name", "email", "password", "password2" }
    """
    queryset = User.objects.all()
    permission_classes = (permissions.AllowAny,)
    serializer_class = UserRegistrationSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"👤 New account {user.email}")

        return Response({
            'user': UserSerializer(user).data,
            'access': generate_access_token(user),
            'refresh': generate_refresh_token(user),
            'message': 'Account created successfully'
        }, status=status.HTTP_201_CREATED)


class LogoutView(APIView):
    """
    Logout endpoint.

    Tokens are stateless; the client discards them.
    POST /api/auth/logout/
    """

    def post(self, request):
        logger.info(f"👋 {request.user.email} logged out")
        return Response(
            {"status": "success", "message": "You have been successfully logged out."},
            status=status.HTTP_200_OK
        )


class UserProfileView(generics.RetrieveUpdateAPIView):
    """
    Get or update current user profile.

    GET /api/auth/profile/
    PATCH /api/auth/profile/
    """
    serializer_class = UserSerializer

    def get_object(self):
        return self.request.user


class ChangePasswordView(APIView):
    """
    Change password endpoint.

    POST /api/auth/change-password/
    Body: { "old_password", "new_password", "new_password2" }
    """

    def post(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if not request.user.check_password(serializer.validated_data["old_password"]):
            return Response(
                {"error": "Wrong password.", "fields": {"old_password": ["Wrong password."]}},
                status=status.HTTP_400_BAD_REQUEST
            )

        request.user.set_password(serializer.validated_data["new_password"])
        request.user.save(update_fields=['password'])

        return Response(
            {"status": "success", "message": "Password changed successfully"},
            status=status.HTTP_200_OK
        )


class UserListView(generics.ListAPIView):
    """
    Admin console: list all users.

    GET /api/auth/users/
    """
    serializer_class = UserAdminSerializer
    permission_classes = (IsPanelAdmin,)

    def get_queryset(self):
        return HomeStateService.for_request(self.request).get('user')


class UserDetailView(APIView):
    """
    Admin console: inspect, update the role of, or delete a user.

    GET /api/auth/users/{id}/
    PATCH /api/auth/users/{id}/   Body: { "role": "admin|user", "name": "..." }
    DELETE /api/auth/users/{id}/
    """
    permission_classes = (IsPanelAdmin,)

    def get(self, request, pk):
        user = HomeStateService.for_request(request).require('user', pk)
        return Response(UserAdminSerializer(user).data)

    def patch(self, request, pk):
        service = HomeStateService.for_request(request)
        user = service.update('user', pk, request.data)
        return Response({
            "status": "success",
            "message": "User Updated",
            "user": UserAdminSerializer(user).data,
        })

    def delete(self, request, pk):
        HomeStateService.for_request(request).delete('user', pk)
        return Response({"status": "success", "message": "User Deleted"})
