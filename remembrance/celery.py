import logging
import os

from celery import Celery
from kombu.exceptions import OperationalError

logger = logging.getLogger(__name__)

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'remembrance.settings')

app = Celery('remembrance')

# Settings prefixed with CELERY_ in Django settings, including
# CELERY_TASK_ALWAYS_EAGER for synchronous execution
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()


def dispatch(task, *args):
    """Queue a task, running it inline when the broker is unreachable."""
    try:
        task.delay(*args)
        logger.info("Queued %s%r", task.name, args)
    except OperationalError as e:
        logger.error("Broker unavailable for %s, running inline: %s", task.name, e)
        task.apply(args=args)
