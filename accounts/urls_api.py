from django.urls import path
from .api import CurrentUser, SignInRequest, SignOut

urlpatterns = [
    path('auth/sign-in', SignInRequest.as_view(), name='sign-in'),
    path('auth/sign-out', SignOut.as_view(), name='sign-out'),
    path('auth/me', CurrentUser.as_view(), name='current-user'),
]
