"""
Passwordless sign-in.

A sign-in code is a signed, timestamped payload naming the user and the
``last_login`` they had when the code was issued. Signing in moves
``last_login`` forward, so every code is good for one session only.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing
from django.utils.http import url_has_allowed_host_and_scheme

logger = logging.getLogger(__name__)

SIGN_IN_SALT = 'accounts.sign-in'


class InvalidSignInCode(Exception):
    pass


def _login_stamp(user):
    return user.last_login.isoformat() if user.last_login else ''


def make_sign_in_code(user):
    signer = signing.TimestampSigner(salt=SIGN_IN_SALT)
    return signer.sign_object({'uid': user.pk, 'll': _login_stamp(user)})


def user_for_code(code):
    """Return the active user a code was issued to.

    Raises ``InvalidSignInCode`` for tampered, expired or already used codes.
    """
    signer = signing.TimestampSigner(salt=SIGN_IN_SALT)
    try:
        payload = signer.unsign_object(code or '', max_age=settings.SIGN_IN_CODE_MAX_AGE)
    except signing.SignatureExpired:
        raise InvalidSignInCode('Sign-in link has expired.')
    except signing.BadSignature:
        raise InvalidSignInCode('Sign-in link is invalid.')

    User = get_user_model()
    user = User.objects.filter(pk=payload.get('uid'), is_active=True).first()
    if user is None or payload.get('ll') != _login_stamp(user):
        raise InvalidSignInCode('Sign-in link was already used.')
    return user


def get_or_create_user(email):
    """Find the account for ``email`` or register one on first use."""
    User = get_user_model()
    user = User.objects.filter(email__iexact=email).first()
    if user is None:
        user = User.objects.create_user(username=email.lower(), email=email.lower())
        logger.info("Registered user %s on first sign-in", user.pk)
    return user


def safe_redirect(request, target):
    """``target`` if it stays on this host, otherwise the default landing page."""
    if target and url_has_allowed_host_and_scheme(
        target,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return target
    return settings.LOGIN_REDIRECT_URL
