import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Exists, OuterRef, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .exceptions import InvalidTransition
from .utils import generate_access_code


class AccessLevel(models.TextChoices):
    OWNER = 'owner', _('Owner')
    CONTRIBUTOR = 'contributor', _('Contributor')
    VISITOR = 'visitor', _('Visitor')
    NONE = 'none', _('No access')


# Levels that can be stored on a participant row or offered by an invitation.
# Ownership lives on Memorial.owner only.
GRANTABLE_LEVELS = (AccessLevel.CONTRIBUTOR, AccessLevel.VISITOR)
GRANTABLE_CHOICES = [(level.value, level.label) for level in GRANTABLE_LEVELS]


class MemorialQuerySet(models.QuerySet):

    def visible_to(self, user):
        """Memorials the user owns or has an accepted participation in."""
        if user is None or not user.is_authenticated:
            return self.none()
        accepted = Participant.objects.filter(
            memorial=OuterRef('pk'),
            user=user,
            accepted_at__isnull=False,
        )
        return self.filter(Q(owner=user) | Q(Exists(accepted)))


class Memorial(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    birth_date = models.DateField(null=True, blank=True)
    passing_date = models.DateField(null=True, blank=True)
    bio = models.TextField(blank=True)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='owned_memorials',
    )
    cover_image = models.URLField(max_length=500, blank=True)
    theme_color = models.CharField(max_length=7, default='#b45309')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MemorialQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['owner', 'created_at']),
        ]

    def __str__(self):
        return self.name

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_owner_id = instance.__dict__.get('owner_id')
        return instance

    def save(self, *args, **kwargs):
        loaded_owner_id = getattr(self, '_loaded_owner_id', None)
        if loaded_owner_id is not None and self.owner_id != loaded_owner_id:
            raise InvalidTransition('Memorial ownership cannot be transferred.')
        super().save(*args, **kwargs)
        self._loaded_owner_id = self.owner_id


class Participant(models.Model):
    memorial = models.ForeignKey(Memorial, on_delete=models.CASCADE, related_name='participants')
    # Null until a guest accepts an invitation with an account
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name='memorial_participations',
    )
    guest_name = models.CharField(max_length=120, blank=True)
    guest_email = models.EmailField(blank=True)
    access_level = models.CharField(
        max_length=16,
        choices=GRANTABLE_CHOICES,
        default=AccessLevel.VISITOR,
    )
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
    )
    invited_at = models.DateTimeField(default=timezone.now)
    accepted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['invited_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['memorial', 'user'],
                condition=Q(user__isnull=False),
                name='unique_participant_per_memorial',
            ),
            models.CheckConstraint(
                condition=Q(access_level__in=[level.value for level in GRANTABLE_LEVELS]),
                name='participant_access_level_grantable',
            ),
        ]
        indexes = [
            models.Index(fields=['memorial', 'accepted_at']),
        ]

    def __str__(self):
        who = self.user if self.user_id else (self.guest_name or self.guest_email)
        return f"{who} ({self.access_level}) on {self.memorial_id}"

    def clean(self):
        super().clean()
        # Ownership lives on Memorial.owner only
        if self.user_id is not None and self.memorial_id is not None:
            if Memorial.objects.filter(pk=self.memorial_id, owner_id=self.user_id).exists():
                raise ValidationError({'user': _('The memorial owner cannot be added as a participant.')})

    @property
    def is_pending(self):
        return self.accepted_at is None


class Invitation(models.Model):
    STATE_PENDING = 'pending'
    STATE_ACCEPTED = 'accepted'
    STATE_EXPIRED = 'expired'

    # The opaque id is the token carried by the shareable link
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    memorial = models.ForeignKey(Memorial, on_delete=models.CASCADE, related_name='invitations')
    email = models.EmailField(blank=True)
    phone = models.CharField(max_length=32, blank=True)
    access_code = models.CharField(max_length=16, db_index=True, default=generate_access_code)
    access_level = models.CharField(
        max_length=16,
        choices=GRANTABLE_CHOICES,
        default=AccessLevel.VISITOR,
    )
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='sent_invitations',
    )
    expires_at = models.DateTimeField(null=True, blank=True)
    accepted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [models.Index(fields=['memorial', 'expires_at'])]

    def __str__(self):
        return f"Invitation {self.access_code} ({self.access_level}) for {self.memorial_id}"

    def is_expired(self, now=None):
        if self.expires_at is None:
            return False
        return self.expires_at < (now or timezone.now())

    @property
    def state(self):
        # Expiry wins: an expired link can never be redeemed again
        if self.is_expired():
            return self.STATE_EXPIRED
        if self.accepted_at is not None:
            return self.STATE_ACCEPTED
        return self.STATE_PENDING

    @property
    def link(self):
        return f"{settings.BASE_URL.rstrip('/')}/invite/{self.id}"
