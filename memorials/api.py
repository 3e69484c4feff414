from io import BytesIO

import segno
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from remembrance.permissions import IsMemorialMember
from . import invitations, services
from .access import Action, get_memorial_access
from .models import Memorial
from .serializers import (
    InvitationCreateSerializer,
    InvitationPreviewSerializer,
    InvitationRedeemSerializer,
    InvitationSerializer,
    MemorialSerializer,
    MemorialWriteSerializer,
    ParticipantCreateSerializer,
    ParticipantEntrySerializer,
    ParticipantUpdateSerializer,
)


def _accepted(memorial):
    return Response({
        'memorial_id': str(memorial.pk),
        'redirect': f'/memorials/{memorial.pk}',
    })


class MemorialListCreate(APIView):
    failure_action = {'get': 'load memorials', 'post': 'create memorial'}

    def get(self, request):
        # Only memorials this user owns or participates in
        memorials = Memorial.objects.visible_to(request.user).order_by('-created_at')
        return Response(MemorialSerializer(memorials, many=True, context={'request': request}).data)

    def post(self, request):
        serializer = MemorialWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        memorial = services.create_memorial(request.user, **serializer.validated_data)
        return Response(
            MemorialSerializer(memorial, context={'request': request}).data,
            status=status.HTTP_201_CREATED,
        )


class MemorialDetail(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load memorial', 'patch': 'update memorial', 'delete': 'delete memorial'}

    def get(self, request, memorial_id):
        memorial = request.memorial_access.memorial
        return Response(MemorialSerializer(memorial, context={'request': request}).data)

    def patch(self, request, memorial_id):
        access = request.memorial_access
        access.require(Action.MANAGE_MEMORIAL)
        serializer = MemorialWriteSerializer(access.memorial, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        memorial = services.update_memorial(access, **serializer.validated_data)
        return Response(MemorialSerializer(memorial, context={'request': request}).data)

    def delete(self, request, memorial_id):
        services.delete_memorial(request.memorial_access)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ParticipantListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load participants', 'post': 'add participant'}

    def get(self, request, memorial_id):
        entries = services.list_participants(request.memorial_access)
        return Response(ParticipantEntrySerializer(entries, many=True).data)

    def post(self, request, memorial_id):
        access = request.memorial_access
        access.require(Action.MANAGE_PARTICIPANTS)
        serializer = ParticipantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        participant = services.add_participant(
            access, data['email'], data['access_level'], guest_name=data['guest_name'],
        )
        return Response(
            ParticipantEntrySerializer(services.participant_entry(participant)).data,
            status=status.HTTP_201_CREATED,
        )


class ParticipantDetail(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'patch': 'update access level', 'delete': 'remove participant'}

    def patch(self, request, memorial_id, participant_id):
        access = request.memorial_access
        access.require(Action.MANAGE_PARTICIPANTS)
        serializer = ParticipantUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        participant = services.change_participant_level(
            access, participant_id, serializer.validated_data['access_level'],
        )
        return Response(ParticipantEntrySerializer(services.participant_entry(participant)).data)

    def delete(self, request, memorial_id, participant_id):
        services.remove_participant(request.memorial_access, participant_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class InvitationListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load invitations', 'post': 'generate invite link'}

    def get(self, request, memorial_id):
        access = request.memorial_access
        access.require(Action.INVITE)
        return Response(InvitationSerializer(access.memorial.invitations.all(), many=True).data)

    def post(self, request, memorial_id):
        access = request.memorial_access
        access.require(Action.INVITE)
        serializer = InvitationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        invitation = invitations.create_invitation(access, **serializer.validated_data)
        return Response(InvitationSerializer(invitation).data, status=status.HTTP_201_CREATED)


class InvitationDetail(APIView):
    failure_action = {'get': 'load invitation', 'delete': 'revoke invitation'}

    def get_permissions(self):
        # The preview is shown before the visitor has signed in
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, invitation_id):
        invitation = invitations.get_invitation(invitation_id)
        return Response(InvitationPreviewSerializer(invitation).data)

    def delete(self, request, invitation_id):
        invitation = invitations.get_invitation(invitation_id)
        access = get_memorial_access(invitation.memorial_id, request.user)
        invitations.revoke_invitation(access, invitation)
        return Response(status=status.HTTP_204_NO_CONTENT)


class InvitationAccept(APIView):
    failure_action = 'accept invitation'

    def post(self, request, invitation_id):
        return _accepted(invitations.accept_invitation(invitation_id, request.user))


class InvitationRedeem(APIView):
    failure_action = 'accept invitation'

    def post(self, request):
        serializer = InvitationRedeemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        memorial = invitations.accept_invitation_by_code(
            serializer.validated_data['access_code'], request.user,
        )
        return _accepted(memorial)


class InvitationQRCode(APIView):
    failure_action = 'generate QR code'

    def get(self, request, invitation_id):
        invitation = invitations.get_invitation(invitation_id)
        access = get_memorial_access(invitation.memorial_id, request.user)
        access.require(Action.INVITE)

        kind = request.query_params.get('kind', 'png')
        if kind not in ('png', 'svg'):
            return Response({'detail': 'kind must be png or svg'}, status=status.HTTP_400_BAD_REQUEST)

        qr = segno.make(invitation.link, error='h')
        buf = BytesIO()
        if kind == 'png':
            qr.save(buf, kind='png', scale=12, border=2)
            content_type = 'image/png'
        else:
            qr.save(buf, kind='svg', scale=12, border=2)
            content_type = 'image/svg+xml'
        response = HttpResponse(buf.getvalue(), content_type=content_type)
        response['Content-Disposition'] = f'inline; filename="invite-{invitation.access_code}.{kind}"'
        return response
