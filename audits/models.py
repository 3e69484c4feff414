from django.contrib.auth import get_user_model
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models


class AuditLog(models.Model):
    actor_type = models.CharField(max_length=24)
    actor_id = models.BigIntegerField(null=True, blank=True)
    action = models.CharField(max_length=64)
    target_type = models.CharField(max_length=24)
    # Memorials and invitations use UUIDs, content rows use integers
    target_id = models.CharField(max_length=64)
    metadata = models.JSONField(default=dict, encoder=DjangoJSONEncoder)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['created_at']),
            models.Index(fields=['target_type', 'target_id']),
        ]

    def get_actor_display(self):
        """Readable actor for the admin."""
        if self.actor_type in ('user', 'admin') and self.actor_id is not None:
            User = get_user_model()
            user = User.objects.filter(pk=self.actor_id).first()
            if user is not None:
                return f"{user.get_username()} (User ID: {self.actor_id})"
        if self.actor_id is None:
            return self.actor_type
        return f"{self.actor_type} (ID: {self.actor_id})"

    def __str__(self):
        return f"{self.action} by {self.get_actor_display()} on {self.target_type}#{self.target_id}"
