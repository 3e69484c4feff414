from .models import AuditLog


class AuditManager:
    """Writes audit entries for actions whose actor is known to the caller."""

    @staticmethod
    def log_action(action, target_type, target_id, actor=None, **metadata):
        actor_type = 'system'
        actor_id = None

        if actor is not None and actor.is_authenticated:
            actor_type = 'admin' if actor.is_superuser else 'user'
            actor_id = actor.pk

        return AuditLog.objects.create(
            actor_type=actor_type,
            actor_id=actor_id,
            action=action,
            target_type=target_type,
            target_id=str(target_id),
            metadata=metadata,
        )

# Usage:
# from audits.manager import AuditManager
# AuditManager.log_action('accept_invitation', 'invitation', invitation.id, actor=user)
