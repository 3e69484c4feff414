import logging

from django.db import DatabaseError
from django.http import JsonResponse
from django.shortcuts import redirect

from remembrance.exceptions import sign_in_url
from .exceptions import InvitationExpired, InvitationNotFound
from .invitations import accept_invitation

logger = logging.getLogger(__name__)


def invite_landing(request, invitation_id):
    """Browser target of a shared invitation link."""
    if not request.user.is_authenticated:
        # Keep the invitation id so acceptance resumes after sign-in
        return redirect(sign_in_url(request.path))

    try:
        memorial = accept_invitation(invitation_id, request.user)
    except InvitationNotFound:
        return JsonResponse({
            'error': 'Invitation Not Found',
            'detail': 'This invitation may have expired or been cancelled. Please check with the memorial owner.',
        }, status=404)
    except InvitationExpired:
        return JsonResponse({
            'error': 'Invitation Expired',
            'detail': 'This invitation has expired. Please contact the memorial owner for a new invitation link.',
        }, status=410)
    except DatabaseError:
        logger.exception("Storage failure while accepting invitation %s", invitation_id)
        return JsonResponse({'detail': 'Failed to accept invitation.'}, status=503)

    logger.info("User %s joined memorial %s via invitation %s", request.user.pk, memorial.pk, invitation_id)
    return redirect(f'/memorials/{memorial.pk}')
