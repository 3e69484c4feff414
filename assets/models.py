from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class MediaType(models.TextChoices):
    PHOTO = 'photo', _('Photo')
    VIDEO = 'video', _('Video')
    AUDIO = 'audio', _('Audio')


class MediaItem(models.Model):
    memorial = models.ForeignKey('memorials.Memorial', on_delete=models.CASCADE, related_name='media_items')
    media_type = models.CharField(max_length=8, choices=MediaType.choices, default=MediaType.PHOTO)
    # Files live in external storage, only their URLs are kept
    url = models.URLField(max_length=500)
    thumbnail_url = models.URLField(max_length=500, blank=True)
    caption = models.CharField(max_length=500, blank=True)
    captured_at = models.DateField(null=True, blank=True)
    tags = models.JSONField(default=list, blank=True)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='uploaded_media',
        editable=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['memorial', 'created_at']),
        ]

    def __str__(self):
        return self.caption or self.url
