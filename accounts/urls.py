from django.urls import path
from .views import auth_callback

urlpatterns = [
    path('auth/callback', auth_callback, name='auth-callback'),
]
