"""
JWT Utilities

Access and refresh tokens carry the user's role so clients can tell
whether the admin console is available without another round trip.
"""
import jwt
from datetime import timedelta
from django.conf import settings
from django.contrib.auth import get_user_model
from django.utils.timezone import now as django_now


def _encode(payload):
    return jwt.encode(payload, settings.SECRET_KEY, algorithm='HS256')


def generate_access_token(user, expiry_minutes=None):
    """
    Generate JWT access token with custom claims.

    Claims include:
    - user_id: User's ID
    - email: User's email
    - role: 'admin' or 'user'
    - exp: Expiration timestamp
    - iat: Issued at timestamp

    Args:
        user: PanelUser instance
        expiry_minutes: Token validity duration (default JWT_ACCESS_MINUTES)

    Returns:
        JWT token string
    """
    if expiry_minutes is None:
        expiry_minutes = settings.JWT_ACCESS_MINUTES
    now = django_now()
    expiration = now + timedelta(minutes=expiry_minutes)

    payload = {
        'user_id': user.id,
        'email': user.email,
        'role': user.role,
        'iat': int(now.timestamp()),
        'exp': int(expiration.timestamp()),
        'token_type': 'access'
    }
    return _encode(payload)


def generate_refresh_token(user, expiry_days=None):
    """
    Generate JWT refresh token.

    Refresh tokens are longer-lived and used to get new access tokens.
    """
    if expiry_days is None:
        expiry_days = settings.JWT_REFRESH_DAYS
    now = django_now()
    expiration = now + timedelta(days=expiry_days)

    payload = {
        'user_id': user.id,
        'email': user.email,
        'iat': int(now.timestamp()),
        'exp': int(expiration.timestamp()),
        'token_type': 'refresh'
    }
    return _encode(payload)


def validate_token(token, expected_type='access'):
    """
    Validate and decode a JWT token.

    Args:
        token: JWT token string
        expected_type: Expected token type ('access' or 'refresh')

    Returns:
        Decoded payload dict

    Raises:
        jwt.ExpiredSignatureError: If token is expired
        jwt.InvalidTokenError: If token is malformed or of the wrong type
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=['HS256'])

    if expected_type and payload.get('token_type') != expected_type:
        raise jwt.InvalidTokenError(f'Expected {expected_type} token')

    return payload


def refresh_access_token(refresh_token):
    """
    Generate a new access token using a valid refresh token.

    Raises:
        jwt.ExpiredSignatureError: If refresh token is expired
        jwt.InvalidTokenError: If refresh token is malformed or the user is gone
    """
    payload = validate_token(refresh_token, expected_type='refresh')

    User = get_user_model()
    try:
        user = User.objects.get(id=payload['user_id'], is_active=True)
    except User.DoesNotExist:
        raise jwt.InvalidTokenError('User not found')

    return generate_access_token(user)

