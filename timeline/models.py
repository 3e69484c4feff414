from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from memorials.exceptions import InvalidTransition


class ApprovalStatus(models.TextChoices):
    PENDING = 'pending', _('Pending approval')
    APPROVED = 'approved', _('Approved')
    REJECTED = 'rejected', _('Rejected')


class MilestoneQuerySet(models.QuerySet):

    def visible_to(self, access):
        """Timeline rows the caller may see.

        The owner sees every milestone, everyone else sees approved
        milestones plus their own submissions in any state.
        """
        qs = self.filter(memorial=access.memorial)
        if not access.is_owner:
            qs = qs.filter(Q(status=ApprovalStatus.APPROVED) | Q(submitted_by=access.user))
        return qs

    def chronological(self):
        return self.order_by(F('event_date').asc(nulls_last=True), 'created_at', 'id')


class Milestone(models.Model):
    memorial = models.ForeignKey('memorials.Memorial', on_delete=models.CASCADE, related_name='milestones')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    event_date = models.DateField(null=True, blank=True)
    location = models.CharField(max_length=200, blank=True)
    submitted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='submitted_milestones',
        editable=False,
    )
    status = models.CharField(
        max_length=10,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.PENDING,
    )
    image_urls = models.JSONField(default=list, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='+',
        editable=False,
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MilestoneQuerySet.as_manager()

    class Meta:
        indexes = [models.Index(fields=['memorial', 'status', 'event_date'])]
        verbose_name = 'Milestone'
        verbose_name_plural = 'Milestones'

    def __str__(self):
        return f"{self.title} ({self.status})"

    @property
    def is_pending(self):
        return self.status == ApprovalStatus.PENDING

    def approve(self, reviewer):
        self._review(ApprovalStatus.APPROVED, reviewer)

    def reject(self, reviewer):
        self._review(ApprovalStatus.REJECTED, reviewer)

    def _review(self, status, reviewer):
        # approved and rejected are terminal
        if not self.is_pending:
            raise InvalidTransition(f'Milestone is already {self.status}.')
        self.status = status
        self.reviewed_by = reviewer
        self.reviewed_at = timezone.now()
        self.save(update_fields=['status', 'reviewed_by', 'reviewed_at', 'updated_at'])
