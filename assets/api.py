from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from remembrance.permissions import IsMemorialMember, child_access
from . import services
from .models import MediaItem
from .serializers import MediaItemCreateSerializer, MediaItemSerializer, MediaItemUpdateSerializer


class MediaListCreate(APIView):
    permission_classes = [IsMemorialMember]
    failure_action = {'get': 'load gallery', 'post': 'add media'}

    def get(self, request, memorial_id):
        items = services.list_media(request.memorial_access)
        return Response(MediaItemSerializer(items, many=True).data)

    def post(self, request, memorial_id):
        serializer = MediaItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = services.add_media(request.memorial_access, **serializer.validated_data)
        return Response(MediaItemSerializer(item).data, status=status.HTTP_201_CREATED)


class MediaDetail(APIView):
    failure_action = {'patch': 'update media', 'delete': 'delete media'}

    def patch(self, request, item_id):
        access, item = child_access(request, MediaItem, item_id)
        serializer = MediaItemUpdateSerializer(item, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        item = services.update_media(access, item, **serializer.validated_data)
        return Response(MediaItemSerializer(item).data)

    def delete(self, request, item_id):
        access, item = child_access(request, MediaItem, item_id)
        services.delete_media(access, item)
        return Response(status=status.HTTP_204_NO_CONTENT)
