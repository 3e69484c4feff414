"""Milestone submission and approval.

Owner submissions are published immediately; contributor submissions
wait in ``pending`` until the owner approves or rejects them.
"""

import logging

from django.db import transaction

from audits.manager import AuditManager
from memorials.access import Action
from memorials.exceptions import AccessDenied, ContentNotFound

from .models import ApprovalStatus, Milestone

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('title', 'description', 'event_date', 'location', 'image_urls')


def list_timeline(access):
    access.require(Action.VIEW)
    return Milestone.objects.visible_to(access).chronological()


def list_pending(access):
    access.require(Action.REVIEW_MILESTONE)
    return Milestone.objects.filter(memorial=access.memorial, status=ApprovalStatus.PENDING).order_by('created_at')


def get_milestone(access, milestone_id):
    milestone = Milestone.objects.visible_to(access).filter(pk=milestone_id).first()
    if milestone is None:
        raise ContentNotFound('Milestone not found.')
    return milestone


def submit_milestone(access, title, **fields):
    access.require(Action.SUBMIT_MILESTONE)
    status = ApprovalStatus.APPROVED if access.is_owner else ApprovalStatus.PENDING
    milestone = Milestone.objects.create(
        memorial=access.memorial,
        submitted_by=access.user,
        title=title,
        status=status,
        **{name: value for name, value in fields.items() if name in EDITABLE_FIELDS},
    )
    logger.info("Milestone %s submitted to %s as %s", milestone.pk, access.memorial.pk, status)
    return milestone


def _require_edit(access, milestone):
    # The submitter keeps control only until the owner has reviewed it
    if access.is_owner:
        return
    if not milestone.is_pending:
        raise AccessDenied()
    access.require_modify(Action.SUBMIT_MILESTONE, milestone.submitted_by_id)


def update_milestone(access, milestone, **fields):
    _require_edit(access, milestone)
    changed = [name for name in fields if name in EDITABLE_FIELDS]
    for name in changed:
        setattr(milestone, name, fields[name])
    if changed:
        milestone.save(update_fields=changed + ['updated_at'])
    return milestone


def delete_milestone(access, milestone):
    _require_edit(access, milestone)
    milestone.delete()


def review_milestone(access, milestone_id, approve):
    access.require(Action.REVIEW_MILESTONE)
    with transaction.atomic():
        milestone = (
            Milestone.objects.select_for_update()
            .filter(memorial=access.memorial, pk=milestone_id)
            .first()
        )
        if milestone is None:
            raise ContentNotFound('Milestone not found.')
        if approve:
            milestone.approve(access.user)
        else:
            milestone.reject(access.user)
        AuditManager.log_action(
            'review_milestone', 'milestone', milestone.pk, actor=access.user,
            memorial_id=access.memorial.pk, new_status=milestone.status,
            submitted_by=milestone.submitted_by_id,
        )
    return milestone
