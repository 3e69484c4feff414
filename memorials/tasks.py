import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


@shared_task
def send_invitation_email(invitation_id):
    """Mail the shareable link of an invitation to its recipient."""
    from .models import Invitation

    invitation = (
        Invitation.objects.select_related('memorial', 'invited_by')
        .filter(pk=invitation_id)
        .first()
    )
    if invitation is None or not invitation.email:
        logger.warning("Invitation %s vanished or has no email, nothing sent", invitation_id)
        return

    memorial = invitation.memorial
    inviter = invitation.invited_by.get_full_name() or invitation.invited_by.email
    if invitation.access_level == 'contributor':
        role = 'share photos, milestones and memories'
    else:
        role = 'view the memorial and leave a message in the guestbook'

    if invitation.expires_at:
        expiry = f"This invitation expires on {invitation.expires_at:%Y-%m-%d}."
    else:
        expiry = ""

    subject = f'You are invited to the memorial of {memorial.name}'
    message = f'''
{inviter} has invited you to honor and celebrate the life of {memorial.name}.

As a {invitation.access_level}, you will be able to {role}.

Accept the invitation here:
{invitation.link}

Access code: {invitation.access_code}
{expiry}
'''
    send_mail(
        subject=subject,
        message=message,
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[invitation.email],
    )
    logger.info("Invitation email sent for %s", invitation_id)
