import logging
from urllib.parse import urlencode

from celery import shared_task
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail

from .auth import make_sign_in_code

logger = logging.getLogger(__name__)


@shared_task
def send_sign_in_link(user_id, redirect=''):
    user = get_user_model().objects.filter(pk=user_id, is_active=True).first()
    if user is None or not user.email:
        logger.warning("User %s not found or has no email, sign-in link not sent", user_id)
        return

    query = {'code': make_sign_in_code(user)}
    if redirect:
        query['redirect'] = redirect
    link = f"{settings.BASE_URL.rstrip('/')}/auth/callback?{urlencode(query)}"
    minutes = settings.SIGN_IN_CODE_MAX_AGE // 60

    send_mail(
        subject='Your sign-in link',
        message=f'''
Use the link below to sign in. It works once and expires in {minutes} minutes.

{link}

If you did not ask to sign in, you can ignore this email.
''',
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
    )
    logger.info("Sign-in link sent to user %s", user_id)
