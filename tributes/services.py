"""Guestbook entries and rituals.

Every member may leave a tribute. Authors may change or remove their
own tributes; the owner may change or remove any.
"""

import logging

from memorials.access import Action

from .models import GuestbookEntry, Ritual, RitualType
from .utils import display_name

logger = logging.getLogger(__name__)

GUESTBOOK_EDITABLE_FIELDS = ('message', 'relationship')
RITUAL_EDITABLE_FIELDS = ('message',)


def _apply(obj, fields, editable):
    changed = [name for name in fields if name in editable]
    for name in changed:
        setattr(obj, name, fields[name])
    if changed:
        obj.save(update_fields=changed)
    return obj


def list_guestbook(access):
    access.require(Action.VIEW)
    return GuestbookEntry.objects.filter(memorial=access.memorial).order_by('-created_at', '-id')


def sign_guestbook(access, message, author_name='', relationship=''):
    access.require(Action.ADD_TRIBUTE)
    entry = GuestbookEntry.objects.create(
        memorial=access.memorial,
        author=access.user,
        author_name=author_name or display_name(access.user),
        message=message,
        relationship=relationship,
    )
    logger.info("Guestbook entry %s added to memorial %s", entry.pk, access.memorial.pk)
    return entry


def update_guestbook_entry(access, entry, **fields):
    access.require_modify(Action.ADD_TRIBUTE, entry.author_id)
    return _apply(entry, fields, GUESTBOOK_EDITABLE_FIELDS)


def delete_guestbook_entry(access, entry):
    access.require_modify(Action.ADD_TRIBUTE, entry.author_id)
    entry.delete()


def list_rituals(access):
    access.require(Action.VIEW)
    return Ritual.objects.filter(memorial=access.memorial).active().order_by('-created_at', '-id')


def add_ritual(access, ritual_type=RitualType.CANDLE, message='', guest_name='', expires_at=None):
    access.require(Action.ADD_TRIBUTE)
    ritual = Ritual.objects.create(
        memorial=access.memorial,
        user=access.user,
        ritual_type=ritual_type,
        guest_name=guest_name or display_name(access.user),
        message=message,
        expires_at=expires_at,
    )
    logger.info("Ritual %s (%s) added to memorial %s", ritual.pk, ritual_type, access.memorial.pk)
    return ritual


def update_ritual(access, ritual, **fields):
    access.require_modify(Action.ADD_TRIBUTE, ritual.user_id)
    return _apply(ritual, fields, RITUAL_EDITABLE_FIELDS)


def delete_ritual(access, ritual):
    access.require_modify(Action.ADD_TRIBUTE, ritual.user_id)
    ritual.delete()
