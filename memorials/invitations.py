"""
Invitation lifecycle: create, preview, accept, revoke.

States:
    pending  -> accepted   (first acceptance sets accepted_at)
    pending  -> expired    (now > expires_at, permanent)
    pending  -> (deleted)  (revoked by the owner)

The shareable link carries the invitation's opaque UUID. The short
access code is a fallback identifier that resolves to the same row.
"""

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from audits.manager import AuditManager
from remembrance.celery import dispatch

from .access import Action
from .exceptions import InvalidAccessLevel, InvalidTransition, InvitationExpired, InvitationNotFound
from .models import GRANTABLE_LEVELS, Invitation, Participant
from .tasks import send_invitation_email

logger = logging.getLogger(__name__)

INVITATION_TTL = timedelta(days=30)


def create_invitation(access, access_level, email='', phone=''):
    """Create an invitation on ``access.memorial``. Owner only."""
    access.require(Action.INVITE)
    if access_level not in GRANTABLE_LEVELS:
        raise InvalidAccessLevel(f"Cannot invite with access level {access_level!r}.")

    invitation = Invitation.objects.create(
        memorial=access.memorial,
        email=email or '',
        phone=phone or '',
        access_level=access_level,
        invited_by=access.user,
        expires_at=timezone.now() + INVITATION_TTL,
    )
    AuditManager.log_action(
        'create_invitation', 'invitation', invitation.id, actor=access.user,
        memorial_id=access.memorial.pk, access_level=invitation.access_level,
    )
    if invitation.email:
        # Mail only once the row is committed so the worker can load it
        transaction.on_commit(lambda: dispatch(send_invitation_email, str(invitation.id)))
    logger.info("Invitation %s created for memorial %s", invitation.id, access.memorial.pk)
    return invitation


def get_invitation(invitation_id):
    invitation = (
        Invitation.objects.select_related('memorial', 'invited_by')
        .filter(pk=invitation_id)
        .first()
    )
    if invitation is None:
        raise InvitationNotFound()
    return invitation


def accept_invitation(invitation_id, user):
    """Redeem an invitation for ``user``.

    Returns the invitation's memorial. Accepting twice is harmless: the
    (memorial, user) uniqueness constraint plus ``get_or_create`` keep
    exactly one participant row.
    """
    now = timezone.now()
    with transaction.atomic():
        invitation = (
            Invitation.objects.select_for_update()
            .select_related('memorial')
            .filter(pk=invitation_id)
            .first()
        )
        if invitation is None:
            raise InvitationNotFound()
        if invitation.is_expired(now):
            raise InvitationExpired()

        memorial = invitation.memorial
        if memorial.owner_id == user.pk:
            return memorial

        participant = _claim_guest_row(invitation, user, now)
        if participant is None:
            participant, created = Participant.objects.get_or_create(
                memorial=memorial,
                user=user,
                defaults={
                    'access_level': invitation.access_level,
                    'invited_by_id': invitation.invited_by_id,
                    'accepted_at': now,
                },
            )
            if not created and participant.accepted_at is None:
                participant.accepted_at = now
                participant.save(update_fields=['accepted_at'])

        if invitation.accepted_at is None:
            invitation.accepted_at = now
            invitation.save(update_fields=['accepted_at'])

    AuditManager.log_action(
        'accept_invitation', 'invitation', invitation.id, actor=user,
        memorial_id=memorial.pk, participant_id=participant.pk,
        access_level=participant.access_level,
    )
    return memorial


def accept_invitation_by_code(access_code, user):
    code = (access_code or '').strip().upper()
    invitation = Invitation.objects.filter(access_code=code).order_by('-created_at').first()
    if invitation is None:
        raise InvitationNotFound()
    return accept_invitation(invitation.pk, user)


def _claim_guest_row(invitation, user, now):
    """Attach a pending guest row that was added for this user's email."""
    if not user.email or Participant.objects.filter(memorial=invitation.memorial, user=user).exists():
        return None
    guest = (
        Participant.objects.select_for_update()
        .filter(
            memorial=invitation.memorial,
            user__isnull=True,
            guest_email__iexact=user.email,
        )
        .first()
    )
    if guest is None:
        return None
    guest.user = user
    guest.accepted_at = now
    guest.save(update_fields=['user', 'accepted_at'])
    return guest


def revoke_invitation(access, invitation):
    access.require(Action.INVITE)
    if invitation.accepted_at is not None:
        raise InvalidTransition('Accepted invitations cannot be revoked.')
    invitation_id = invitation.pk
    invitation.delete()
    AuditManager.log_action(
        'revoke_invitation', 'invitation', invitation_id, actor=access.user,
        memorial_id=access.memorial.pk,
    )
