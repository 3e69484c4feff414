from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from remembrance.permissions import IsMemorialMember, child_access
from . import services
from .models import GuestbookEntry, Ritual
from .serializers import (
    GuestbookEntryCreateSerializer,
    GuestbookEntrySerializer,
    GuestbookEntryUpdateSerializer,
    RitualCreateSerializer,
    RitualSerializer,
    RitualUpdateSerializer,
)


class GuestbookListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load guestbook', 'post': 'sign guestbook'}

    def get(self, request, memorial_id):
        entries = services.list_guestbook(request.memorial_access)
        return Response(GuestbookEntrySerializer(entries, many=True).data)

    def post(self, request, memorial_id):
        serializer = GuestbookEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.sign_guestbook(request.memorial_access, **serializer.validated_data)
        return Response(GuestbookEntrySerializer(entry).data, status=status.HTTP_201_CREATED)


class GuestbookEntryDetail(APIView):
    failure_action = {'patch': 'update guestbook entry', 'delete': 'delete guestbook entry'}

    def patch(self, request, entry_id):
        access, entry = child_access(request, GuestbookEntry, entry_id)
        serializer = GuestbookEntryUpdateSerializer(entry, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = services.update_guestbook_entry(access, entry, **serializer.validated_data)
        return Response(GuestbookEntrySerializer(entry).data)

    def delete(self, request, entry_id):
        access, entry = child_access(request, GuestbookEntry, entry_id)
        services.delete_guestbook_entry(access, entry)
        return Response(status=status.HTTP_204_NO_CONTENT)


class RitualListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load rituals', 'post': 'create ritual'}

    def get(self, request, memorial_id):
        rituals = services.list_rituals(request.memorial_access)
        return Response(RitualSerializer(rituals, many=True).data)

    def post(self, request, memorial_id):
        serializer = RitualCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ritual = services.add_ritual(request.memorial_access, **serializer.validated_data)
        return Response(RitualSerializer(ritual).data, status=status.HTTP_201_CREATED)


class RitualDetail(APIView):
    failure_action = {'patch': 'update ritual', 'delete': 'delete ritual'}

    def patch(self, request, ritual_id):
        access, ritual = child_access(request, Ritual, ritual_id)
        serializer = RitualUpdateSerializer(ritual, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        ritual = services.update_ritual(access, ritual, **serializer.validated_data)
        return Response(RitualSerializer(ritual).data)

    def delete(self, request, ritual_id):
        access, ritual = child_access(request, Ritual, ritual_id)
        services.delete_ritual(access, ritual)
        return Response(status=status.HTTP_204_NO_CONTENT)
