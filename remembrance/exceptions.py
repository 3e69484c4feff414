import logging
from urllib.parse import urlencode

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated
from rest_framework.response import Response
from rest_framework.views import exception_handler

from memorials.exceptions import (
    AccessDenied,
    ContentNotFound,
    InvalidAccessLevel,
    InvalidTransition,
    InvitationExpired,
    InvitationNotFound,
    MemorialError,
    MemorialNotFound,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    MemorialNotFound: status.HTTP_404_NOT_FOUND,
    ContentNotFound: status.HTTP_404_NOT_FOUND,
    InvitationNotFound: status.HTTP_404_NOT_FOUND,
    InvitationExpired: status.HTTP_410_GONE,
    AccessDenied: status.HTTP_403_FORBIDDEN,
    InvalidTransition: status.HTTP_409_CONFLICT,
    InvalidAccessLevel: status.HTTP_400_BAD_REQUEST,
}


def sign_in_url(path):
    return f"{settings.LOGIN_URL}?{urlencode({'redirect': path})}"


def api_exception_handler(exc, context):
    request = context.get('request')

    if isinstance(exc, NotAuthenticated) and request is not None:
        return Response(
            {'detail': str(exc.detail), 'sign_in_url': sign_in_url(request.get_full_path())},
            status=status.HTTP_401_UNAUTHORIZED,
        )

    if isinstance(exc, MemorialError):
        code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return Response({'detail': exc.message}, status=code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DatabaseError):
        view = context.get('view')
        action = getattr(view, 'failure_action', 'complete the request')
        if isinstance(action, dict):
            # Per-method wording, keyed by lowercase HTTP method
            action = action.get(request.method.lower(), 'complete the request')
        logger.exception("Storage failure while trying to %s", action)
        return Response(
            {'detail': f'Failed to {action}.'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return None
