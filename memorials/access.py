"""
Access resolution for memorials.

A user's authority over a memorial is derived from two facts only:
``Memorial.owner`` and the user's accepted ``Participant`` row. Every
service call receives a ``MemorialAccess`` describing who is acting, so
nothing here reads request or thread state.

Usage:
    access = get_memorial_access(memorial_id, request.user)
    access.require(Action.ADD_MEDIA)
"""

import enum
from dataclasses import dataclass

from django.db import models

from .exceptions import AccessDenied, MemorialNotFound
from .models import AccessLevel, Memorial, Participant


class Action(enum.Enum):
    VIEW = 'view'
    SUBMIT_MILESTONE = 'submit_milestone'
    REVIEW_MILESTONE = 'review_milestone'
    ADD_MEDIA = 'add_media'
    # Guestbook entries and rituals
    ADD_TRIBUTE = 'add_tribute'
    MANAGE_PARTICIPANTS = 'manage_participants'
    INVITE = 'invite'
    MANAGE_MEMORIAL = 'manage_memorial'


_EVERYONE = frozenset({AccessLevel.OWNER, AccessLevel.CONTRIBUTOR, AccessLevel.VISITOR})
_CONTRIBUTORS = frozenset({AccessLevel.OWNER, AccessLevel.CONTRIBUTOR})
_OWNER = frozenset({AccessLevel.OWNER})

PERMISSIONS = {
    Action.VIEW: _EVERYONE,
    Action.SUBMIT_MILESTONE: _CONTRIBUTORS,
    Action.REVIEW_MILESTONE: _OWNER,
    Action.ADD_MEDIA: _CONTRIBUTORS,
    Action.ADD_TRIBUTE: _EVERYONE,
    Action.MANAGE_PARTICIPANTS: _OWNER,
    Action.INVITE: _OWNER,
    Action.MANAGE_MEMORIAL: _OWNER,
}


def resolve_access(memorial, user_id, participant=None):
    """Effective access level of ``user_id`` on ``memorial``.

    ``participant`` is the user's participant row for this memorial, if any.
    Performs no queries.
    """
    if user_id is not None and memorial.owner_id == user_id:
        return AccessLevel.OWNER
    if (
        participant is not None
        and user_id is not None
        and participant.memorial_id == memorial.pk
        and participant.user_id == user_id
        and participant.accepted_at is not None
    ):
        return AccessLevel(participant.access_level)
    return AccessLevel.NONE


def is_permitted(level, action):
    return level in PERMISSIONS[action]


@dataclass(frozen=True)
class MemorialAccess:
    """The acting user together with their resolved level on one memorial."""
    memorial: Memorial
    user: models.Model
    level: AccessLevel

    @property
    def user_id(self):
        return self.user.pk

    @property
    def is_owner(self):
        return self.level == AccessLevel.OWNER

    def permits(self, action):
        return is_permitted(self.level, action)

    def require(self, action):
        if not self.permits(action):
            raise AccessDenied()

    def can_modify(self, action, author_id):
        """Edit/delete rule for authored content.

        The owner may change anything. Others may change only what they
        authored, and only while they still hold the right to create it.
        """
        if self.is_owner:
            return True
        return self.permits(action) and author_id is not None and author_id == self.user_id

    def require_modify(self, action, author_id):
        if not self.can_modify(action, author_id):
            raise AccessDenied()


def access_for(memorial, user):
    """Load the user's participant row and resolve their level."""
    if user is None or not user.is_authenticated:
        return AccessLevel.NONE
    participant = None
    if memorial.owner_id != user.pk:
        participant = Participant.objects.filter(memorial=memorial, user=user).first()
    return resolve_access(memorial, user.pk, participant)


def fetch_memorial(memorial_id, user):
    """Return the memorial if ``user`` may see it.

    Missing memorials and memorials without access raise the same
    ``MemorialNotFound`` so callers cannot probe for existence.
    """
    memorial = Memorial.objects.visible_to(user).filter(pk=memorial_id).first()
    if memorial is None:
        raise MemorialNotFound()
    return memorial


def get_memorial_access(memorial_id, user):
    memorial = fetch_memorial(memorial_id, user)
    return build_access(memorial, user)


def build_access(memorial, user):
    level = access_for(memorial, user)
    if level == AccessLevel.NONE:
        raise MemorialNotFound()
    return MemorialAccess(memorial=memorial, user=user, level=level)
