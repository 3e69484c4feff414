"""Tests for access resolution and the memorial retrieval gate."""

import uuid

import pytest
from django.contrib.auth.models import AnonymousUser
from django.utils import timezone

from memorials.access import (
    Action,
    MemorialAccess,
    PERMISSIONS,
    build_access,
    fetch_memorial,
    is_permitted,
    resolve_access,
)
from memorials.exceptions import AccessDenied, MemorialNotFound
from memorials.models import AccessLevel, Memorial, Participant


def memorial_owned_by(user_id):
    return Memorial(id=uuid.uuid4(), name='M', owner_id=user_id)


class TestResolveAccess:
    """Pure resolution, no database."""

    def test_owner_is_owner_without_participant_row(self):
        memorial = memorial_owned_by(1)
        assert resolve_access(memorial, 1) == AccessLevel.OWNER

    def test_owner_wins_over_participant_row(self):
        memorial = memorial_owned_by(1)
        row = Participant(memorial=memorial, user_id=1, access_level='visitor', accepted_at=timezone.now())
        assert resolve_access(memorial, 1, row) == AccessLevel.OWNER

    def test_accepted_participant_gets_row_level(self):
        memorial = memorial_owned_by(1)
        row = Participant(memorial=memorial, user_id=2, access_level='contributor', accepted_at=timezone.now())
        assert resolve_access(memorial, 2, row) == AccessLevel.CONTRIBUTOR

    def test_pending_participant_has_no_access(self):
        memorial = memorial_owned_by(1)
        row = Participant(memorial=memorial, user_id=2, access_level='contributor')
        assert resolve_access(memorial, 2, row) == AccessLevel.NONE

    def test_row_of_other_user_is_ignored(self):
        memorial = memorial_owned_by(1)
        row = Participant(memorial=memorial, user_id=3, access_level='visitor', accepted_at=timezone.now())
        assert resolve_access(memorial, 2, row) == AccessLevel.NONE

    def test_row_of_other_memorial_is_ignored(self):
        memorial = memorial_owned_by(1)
        other = memorial_owned_by(1)
        row = Participant(memorial=other, user_id=2, access_level='visitor', accepted_at=timezone.now())
        assert resolve_access(memorial, 2, row) == AccessLevel.NONE

    def test_anonymous_has_no_access(self):
        assert resolve_access(memorial_owned_by(1), None) == AccessLevel.NONE


class TestPermissionTable:

    @pytest.mark.parametrize('action', list(Action))
    def test_owner_may_do_everything(self, action):
        assert is_permitted(AccessLevel.OWNER, action)

    @pytest.mark.parametrize('action', list(Action))
    def test_none_may_do_nothing(self, action):
        assert not is_permitted(AccessLevel.NONE, action)

    def test_contributor(self):
        allowed = {a for a in Action if is_permitted(AccessLevel.CONTRIBUTOR, a)}
        assert allowed == {Action.VIEW, Action.SUBMIT_MILESTONE, Action.ADD_MEDIA, Action.ADD_TRIBUTE}

    def test_visitor(self):
        allowed = {a for a in Action if is_permitted(AccessLevel.VISITOR, a)}
        assert allowed == {Action.VIEW, Action.ADD_TRIBUTE}

    def test_every_action_is_mapped(self):
        assert set(PERMISSIONS) == set(Action)


class TestMemorialAccess:

    def make(self, level, user_id=5):
        user = type('U', (), {'pk': user_id})()
        return MemorialAccess(memorial=memorial_owned_by(1), user=user, level=level)

    def test_require_raises_access_denied(self):
        with pytest.raises(AccessDenied):
            self.make(AccessLevel.VISITOR).require(Action.ADD_MEDIA)

    def test_contributor_modifies_own_item_only(self):
        access = self.make(AccessLevel.CONTRIBUTOR, user_id=5)
        assert access.can_modify(Action.ADD_MEDIA, 5)
        assert not access.can_modify(Action.ADD_MEDIA, 6)

    def test_visitor_cannot_modify_own_media(self):
        access = self.make(AccessLevel.VISITOR, user_id=5)
        assert not access.can_modify(Action.ADD_MEDIA, 5)

    def test_visitor_modifies_own_tribute(self):
        access = self.make(AccessLevel.VISITOR, user_id=5)
        assert access.can_modify(Action.ADD_TRIBUTE, 5)
        assert not access.can_modify(Action.ADD_TRIBUTE, None)

    def test_owner_modifies_anything(self):
        access = self.make(AccessLevel.OWNER, user_id=1)
        assert access.can_modify(Action.ADD_MEDIA, 99)


@pytest.mark.django_db
class TestRetrievalGate:

    def test_owner_and_participants_see_memorial(self, memorial, owner, contributor, visitor):
        for user in (owner, contributor, visitor):
            assert fetch_memorial(memorial.pk, user) == memorial

    def test_stranger_gets_not_found(self, memorial, stranger):
        with pytest.raises(MemorialNotFound):
            fetch_memorial(memorial.pk, stranger)

    def test_missing_and_hidden_are_indistinguishable(self, memorial, stranger):
        with pytest.raises(MemorialNotFound) as hidden:
            fetch_memorial(memorial.pk, stranger)
        with pytest.raises(MemorialNotFound) as missing:
            fetch_memorial(uuid.uuid4(), stranger)
        assert hidden.value.message == missing.value.message

    def test_anonymous_gets_not_found(self, memorial):
        with pytest.raises(MemorialNotFound):
            fetch_memorial(memorial.pk, AnonymousUser())

    def test_pending_participant_gets_not_found(self, memorial, owner, stranger):
        Participant.objects.create(memorial=memorial, user=stranger, access_level='visitor', invited_by=owner)
        with pytest.raises(MemorialNotFound):
            fetch_memorial(memorial.pk, stranger)

    def test_build_access_levels(self, memorial, owner, contributor, visitor):
        assert build_access(memorial, owner).level == AccessLevel.OWNER
        assert build_access(memorial, contributor).level == AccessLevel.CONTRIBUTOR
        assert build_access(memorial, visitor).level == AccessLevel.VISITOR

    def test_visible_to_lists_only_reachable_memorials(self, memorial, owner, stranger):
        own = Memorial.objects.create(name='Stranger Dad', owner=stranger)
        assert list(Memorial.objects.visible_to(stranger)) == [own]
        assert memorial in Memorial.objects.visible_to(owner)
