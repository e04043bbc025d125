"""
Session/role gate: credential check and role projection.
"""
import logging

from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import update_last_login

from smarthome_panel.errors import AuthError

logger = logging.getLogger('accounts')

# Burn a hash comparison for unknown emails so they take as long as wrong passwords
_UNKNOWN_USER_HASH = None


def _dummy_hash():
    global _UNKNOWN_USER_HASH
    if _UNKNOWN_USER_HASH is None:
        _UNKNOWN_USER_HASH = make_password('unknown-user-password')
    return _UNKNOWN_USER_HASH


def login(email, password):
    """
    Resolve an email/password pair to a user.

    The password is only ever compared against the stored salted hash.
    On success the user's last_login is stamped; on failure nothing is
    written and AuthError is raised.
    """
    User = get_user_model()
    email = User.objects.normalize_email(email or '')

    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        check_password(password or '', _dummy_hash())
        logger.info(f"🔒 Login failed for unknown email {email}")
        raise AuthError('Invalid email or password.')

    if not user.check_password(password or ''):
        logger.info(f"🔒 Login failed for {email}")
        raise AuthError('Invalid email or password.')

    if not user.is_active:
        raise AuthError('User account is disabled')

    update_last_login(None, user)
    logger.info(f"🔓 {email} logged in as {user.role}")
    return user


def resolve_role(user):
    """Return 'admin' or 'user' for the given user."""
    return user.role
