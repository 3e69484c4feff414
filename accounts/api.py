import logging

from django.contrib.auth import logout
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from remembrance.celery import dispatch
from .auth import get_or_create_user
from .serializers import SignInSerializer, UserSerializer
from .tasks import send_sign_in_link

logger = logging.getLogger(__name__)


class SignInRequest(APIView):
    permission_classes = [AllowAny]
    failure_action = 'send sign-in link'

    def post(self, request):
        serializer = SignInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = get_or_create_user(serializer.validated_data['email'])
        if user.is_active:
            dispatch(send_sign_in_link, user.pk, serializer.validated_data['redirect'])
        # Same answer whether or not the account existed
        return Response({'detail': 'Check your email for a sign-in link.'}, status=status.HTTP_202_ACCEPTED)


class SignOut(APIView):
    failure_action = 'sign out'

    def post(self, request):
        logout(request)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CurrentUser(APIView):
    failure_action = 'load profile'

    def get(self, request):
        return Response(UserSerializer(request.user).data)
