import logging

from django.contrib.auth import login
from django.shortcuts import redirect

from .auth import InvalidSignInCode, safe_redirect, user_for_code

logger = logging.getLogger(__name__)


def auth_callback(request):
    """Exchange a mailed sign-in code for a session."""
    try:
        user = user_for_code(request.GET.get('code'))
    except InvalidSignInCode as e:
        logger.info("Rejected sign-in code: %s", e)
        return redirect('/sign-in')

    login(request, user, backend='django.contrib.auth.backends.ModelBackend')
    return redirect(safe_redirect(request, request.GET.get('redirect')))
