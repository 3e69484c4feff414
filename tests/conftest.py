from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from memorials.access import build_access
from memorials.models import AccessLevel, Invitation, Memorial, Participant


def make_user(username, **extra):
    extra.setdefault('email', f'{username}@example.com')
    return get_user_model().objects.create_user(username=username, password='pass', **extra)


@pytest.fixture
def owner(db):
    return make_user('owner', first_name='Olive', last_name='Owner')


@pytest.fixture
def contributor(db):
    return make_user('contributor')


@pytest.fixture
def visitor(db):
    return make_user('visitor')


@pytest.fixture
def stranger(db):
    return make_user('stranger')


@pytest.fixture
def memorial(owner, contributor, visitor):
    memorial = Memorial.objects.create(name='Grandma Rose', owner=owner)
    now = timezone.now()
    Participant.objects.create(
        memorial=memorial, user=contributor, access_level=AccessLevel.CONTRIBUTOR,
        invited_by=owner, accepted_at=now,
    )
    Participant.objects.create(
        memorial=memorial, user=visitor, access_level=AccessLevel.VISITOR,
        invited_by=owner, accepted_at=now,
    )
    return memorial


@pytest.fixture
def access(memorial):
    """Build the ``MemorialAccess`` of a given user on the memorial fixture."""
    def _access(user):
        return build_access(Memorial.objects.get(pk=memorial.pk), user)
    return _access


@pytest.fixture
def invitation(memorial, owner):
    return Invitation.objects.create(
        memorial=memorial,
        access_level=AccessLevel.CONTRIBUTOR,
        invited_by=owner,
        expires_at=timezone.now() + timedelta(days=30),
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """APIClient authenticated as the given user."""
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def user_factory(db):
    return make_user
