from django.urls import path
from .views import invite_landing

urlpatterns = [
    path('invite/<uuid:invitation_id>', invite_landing, name='invite-landing'),
]
