"""Gallery operations.

Contributors and the owner add media. Contributors may change or remove
only their own items; the owner may change or remove any item.
"""

import logging

from memorials.access import Action

from .models import MediaItem

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('caption', 'tags', 'captured_at')


def list_media(access):
    access.require(Action.VIEW)
    return MediaItem.objects.filter(memorial=access.memorial).order_by('-created_at', '-id')


def add_media(access, url, **fields):
    access.require(Action.ADD_MEDIA)
    item = MediaItem.objects.create(memorial=access.memorial, uploaded_by=access.user, url=url, **fields)
    logger.info("Media item %s added to memorial %s", item.pk, access.memorial.pk)
    return item


def update_media(access, item, **fields):
    access.require_modify(Action.ADD_MEDIA, item.uploaded_by_id)
    changed = [name for name in fields if name in EDITABLE_FIELDS]
    for name in changed:
        setattr(item, name, fields[name])
    if changed:
        item.save(update_fields=changed)
    return item


def delete_media(access, item):
    access.require_modify(Action.ADD_MEDIA, item.uploaded_by_id)
    item.delete()
