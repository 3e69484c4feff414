from django.contrib import admin
from django.urls import include, path

from .views import HealthCheckView

api_patterns = [
    path('', include('accounts.urls_api')),
    path('', include('memorials.urls_api')),
    path('', include('timeline.urls')),
    path('', include('assets.urls')),
    path('', include('tributes.urls')),
]

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include(api_patterns)),
    path('', include('accounts.urls')),
    path('', include('memorials.urls')),
    path('health/', HealthCheckView.as_view(), name='health'),
    path('', include('django_prometheus.urls')),
]
