import logging

from django.core.cache import cache
from django.db import connection
from django.utils import timezone
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger(__name__)


class HealthCheckView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        checks = {
            'status': 'healthy',
            'timestamp': timezone.now().isoformat(),
        }

        # Database
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            checks['database'] = 'ok'
        except Exception as e:
            logger.error("Health check: database unavailable: %s", e)
            checks['database'] = f'error: {e}'
            checks['status'] = 'degraded'

        # Cache
        try:
            cache.set('health-check', 'ok', timeout=5)
            checks['cache'] = 'ok' if cache.get('health-check') == 'ok' else 'unavailable'
        except Exception as e:
            logger.error("Health check: cache unavailable: %s", e)
            checks['cache'] = f'error: {e}'
            checks['status'] = 'degraded'

        # Celery (only reports whether workers answer)
        try:
            from celery import current_app
            replies = current_app.control.inspect(timeout=0.5).ping()
            checks['celery'] = 'ok' if replies else 'no_workers'
        except Exception as e:
            checks['celery'] = f'error: {e}'

        return Response(checks)
