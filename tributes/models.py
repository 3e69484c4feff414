from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class GuestbookEntry(models.Model):
    memorial = models.ForeignKey('memorials.Memorial', on_delete=models.CASCADE, related_name='guestbook_entries')
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='guestbook_entries',
        editable=False,
    )
    author_name = models.CharField(max_length=120)
    message = models.TextField()
    relationship = models.CharField(max_length=120, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [models.Index(fields=['memorial', 'created_at'])]
        verbose_name = 'Guestbook entry'
        verbose_name_plural = 'Guestbook entries'

    def __str__(self):
        return f"Entry from {self.author_name}"


class RitualType(models.TextChoices):
    CANDLE = 'candle', _('Candle')
    FLOWER = 'flower', _('Flower')
    HEART = 'heart', _('Heart')
    CUSTOM = 'custom', _('Custom')


class RitualQuerySet(models.QuerySet):

    def active(self, now=None):
        """Rituals without an expiry, or whose expiry is still ahead."""
        now = now or timezone.now()
        return self.filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))


class Ritual(models.Model):
    memorial = models.ForeignKey('memorials.Memorial', on_delete=models.CASCADE, related_name='rituals')
    ritual_type = models.CharField(max_length=8, choices=RitualType.choices, default=RitualType.CANDLE)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name='rituals',
        editable=False,
    )
    guest_name = models.CharField(max_length=120, blank=True)
    message = models.TextField(blank=True)
    # Null means permanent
    expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = RitualQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [models.Index(fields=['memorial', 'expires_at'])]

    def __str__(self):
        return f"{self.get_ritual_type_display()} from {self.guest_name or self.user_id}"

    def is_expired(self, now=None):
        return self.expires_at is not None and self.expires_at <= (now or timezone.now())
