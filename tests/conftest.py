from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from rest_framework.test import APIClient

from accounts.jwt_utils import generate_access_token

ADMIN_PASSWORD = 'adminpass123'
USER_PASSWORD = 'userpass123'


@pytest.fixture
def admin_user(db):
    return get_user_model().objects.create_user(
        email='admin@example.com', password=ADMIN_PASSWORD, name='Admin User', role='admin',
    )


@pytest.fixture
def regular_user(db):
    return get_user_model().objects.create_user(
        email='jane.doe@example.com', password=USER_PASSWORD, name='Jane Doe', role='user',
    )


def _client_for(user):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {generate_access_token(user)}')
    return client


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def user_client(regular_user):
    return _client_for(regular_user)


@pytest.fixture
def home(db, admin_user, regular_user):
    """The demo home: 5 rooms, 10 devices, 4 scenes, 4 automations."""
    call_command('seed_home', stdout=StringIO())


@pytest.fixture
def assistant_settings(settings):
    settings.ASSISTANT = {
        'API_BASE': 'https://llm.test/v1',
        'API_KEY': 'test-key',
        'MODEL': 'test-model',
        'TTS_MODEL': 'test-tts',
        'TTS_VOICE': 'alloy',
        'TIMEOUT_SECONDS': 5,
    }
    return settings.ASSISTANT
