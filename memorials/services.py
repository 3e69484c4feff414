"""Memorial and participant service layer.

All writes that depend on a caller's access level go through these
functions; each takes the caller's ``MemorialAccess``.

Functions:
- create_memorial(): new memorial owned by the creator
- update_memorial(): owner-only settings change
- delete_memorial(): owner-only, removes every child row in one transaction
- list_participants(): owner entry (derived from Memorial.owner) plus rows
- add_participant() / change_participant_level() / remove_participant()
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from audits.manager import AuditManager

from .access import Action
from .exceptions import ContentNotFound, InvalidAccessLevel, InvalidTransition
from .models import AccessLevel, GRANTABLE_LEVELS, Memorial, Participant

logger = logging.getLogger(__name__)

MEMORIAL_SETTINGS_FIELDS = ('name', 'birth_date', 'passing_date', 'bio', 'cover_image', 'theme_color')


def create_memorial(user, **fields):
    memorial = Memorial.objects.create(owner=user, **fields)
    AuditManager.log_action('create_memorial', 'memorial', memorial.pk, actor=user, name=memorial.name)
    logger.info("Memorial %s created by user %s", memorial.pk, user.pk)
    return memorial


def update_memorial(access, **fields):
    access.require(Action.MANAGE_MEMORIAL)
    memorial = access.memorial
    changed = [name for name in fields if name in MEMORIAL_SETTINGS_FIELDS]
    for name in changed:
        setattr(memorial, name, fields[name])
    if changed:
        memorial.save(update_fields=changed + ['updated_at'])
        AuditManager.log_action(
            'update_memorial', 'memorial', memorial.pk, actor=access.user, fields=changed,
        )
    return memorial


def delete_memorial(access):
    """Delete the memorial and its content, children before parent."""
    from assets.models import MediaItem
    from timeline.models import Milestone
    from tributes.models import GuestbookEntry, Ritual

    access.require(Action.MANAGE_MEMORIAL)
    memorial = access.memorial
    memorial_id = memorial.pk
    with transaction.atomic():
        counts = {
            'rituals': Ritual.objects.filter(memorial=memorial).delete()[0],
            'guestbook_entries': GuestbookEntry.objects.filter(memorial=memorial).delete()[0],
            'media_items': MediaItem.objects.filter(memorial=memorial).delete()[0],
            'milestones': Milestone.objects.filter(memorial=memorial).delete()[0],
            'participants': Participant.objects.filter(memorial=memorial).delete()[0],
            'invitations': memorial.invitations.all().delete()[0],
        }
        memorial.delete()
        AuditManager.log_action(
            'delete_memorial', 'memorial', memorial_id, actor=access.user, deleted=counts,
        )
    logger.info("Memorial %s deleted with %s", memorial_id, counts)
    return counts


def owner_entry(memorial):
    owner = memorial.owner
    return {
        'id': None,
        'user_id': owner.pk,
        'name': owner.get_full_name() or owner.get_username(),
        'email': owner.email,
        'access_level': AccessLevel.OWNER.value,
        'invited_at': memorial.created_at,
        'accepted_at': memorial.created_at,
        'is_owner': True,
    }


def participant_entry(participant):
    user = participant.user
    if user is not None:
        name = user.get_full_name() or user.get_username()
        email = user.email
    else:
        name = participant.guest_name or participant.guest_email
        email = participant.guest_email
    return {
        'id': participant.pk,
        'user_id': participant.user_id,
        'name': name,
        'email': email,
        'access_level': participant.access_level,
        'invited_at': participant.invited_at,
        'accepted_at': participant.accepted_at,
        'is_owner': False,
    }


def list_participants(access):
    access.require(Action.VIEW)
    memorial = access.memorial
    rows = (
        Participant.objects.filter(memorial=memorial)
        .exclude(user_id=memorial.owner_id)
        .select_related('user')
    )
    return [owner_entry(memorial)] + [participant_entry(p) for p in rows]


def get_participant(access, participant_id):
    participant = Participant.objects.filter(memorial=access.memorial, pk=participant_id).first()
    if participant is None:
        raise ContentNotFound('Participant not found.')
    return participant


def add_participant(access, email, access_level, guest_name=''):
    """Grant access directly.

    A registered user is added as an accepted participant. An unknown
    email becomes a pending guest row that the guest claims when they
    accept an invitation with an account using that address.
    """
    access.require(Action.MANAGE_PARTICIPANTS)
    if access_level not in GRANTABLE_LEVELS:
        raise InvalidAccessLevel(f"Cannot grant access level {access_level!r}.")
    memorial = access.memorial
    User = get_user_model()
    user = User.objects.filter(email__iexact=email).first()

    if user is not None:
        if user.pk == memorial.owner_id:
            raise InvalidTransition('The owner already has full access.')
        participant, created = Participant.objects.get_or_create(
            memorial=memorial,
            user=user,
            defaults={
                'access_level': access_level,
                'invited_by': access.user,
                'accepted_at': timezone.now(),
            },
        )
        if not created:
            raise InvalidTransition('This person is already a participant.')
    else:
        if Participant.objects.filter(
            memorial=memorial, user__isnull=True, guest_email__iexact=email
        ).exists():
            raise InvalidTransition('This person is already a participant.')
        participant = Participant.objects.create(
            memorial=memorial,
            guest_email=email,
            guest_name=guest_name,
            access_level=access_level,
            invited_by=access.user,
        )

    AuditManager.log_action(
        'add_participant', 'participant', participant.pk, actor=access.user,
        memorial_id=memorial.pk, access_level=access_level,
    )
    return participant


def change_participant_level(access, participant_id, access_level):
    access.require(Action.MANAGE_PARTICIPANTS)
    if access_level not in GRANTABLE_LEVELS:
        raise InvalidAccessLevel(f"Cannot grant access level {access_level!r}.")
    participant = get_participant(access, participant_id)
    if participant.user_id == access.memorial.owner_id:
        raise InvalidTransition('The owner access level cannot be changed.')
    old_level = participant.access_level
    participant.access_level = access_level
    participant.save(update_fields=['access_level'])
    AuditManager.log_action(
        'change_participant_level', 'participant', participant.pk, actor=access.user,
        memorial_id=access.memorial.pk, old_level=old_level, new_level=access_level,
    )
    return participant


def remove_participant(access, participant_id):
    access.require(Action.MANAGE_PARTICIPANTS)
    participant = get_participant(access, participant_id)
    if participant.user_id == access.memorial.owner_id:
        raise InvalidTransition('The owner cannot be removed.')
    participant.delete()
    AuditManager.log_action(
        'remove_participant', 'participant', participant_id, actor=access.user,
        memorial_id=access.memorial.pk,
    )
