"""
Custom JWT Authentication for DRF views
"""
from rest_framework import authentication
from django.contrib.auth import get_user_model
from smarthome_panel.errors import AuthError
from .jwt_utils import validate_token
import jwt

User = get_user_model()


def user_from_access_token(token):
    """
    Resolve an access token to an active user.

    Raises AuthError when the token is expired, malformed or points to
    a missing or inactive user.
    """
    try:
        payload = validate_token(token, expected_type='access')
    except jwt.ExpiredSignatureError:
        raise AuthError('Token has expired')
    except jwt.InvalidTokenError as e:
        raise AuthError(f'Invalid token: {str(e)}')

    user_id = payload.get('user_id')
    if not user_id:
        raise AuthError('Invalid token payload')

    try:
        user = User.objects.get(id=user_id)
    except User.DoesNotExist:
        raise AuthError('User not found')

    if not user.is_active:
        raise AuthError('User is inactive')

    return user


class JWTAuthentication(authentication.BaseAuthentication):
    """
    Custom JWT authentication for API views.

    Validates tokens created by our custom JWT utilities.
    """

    def authenticate(self, request):
        auth_header = request.META.get('HTTP_AUTHORIZATION', '')

        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header.replace('Bearer ', '', 1).strip()

        # DRF expects a (user, auth) tuple
        return (user_from_access_token(token), None)

    def authenticate_header(self, request):
        """
        Return WWW-Authenticate header for failed auth.
        """
        return 'Bearer realm="api"'
