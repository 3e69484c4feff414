from rest_framework import serializers

from .models import MediaItem


class MediaItemSerializer(serializers.ModelSerializer):
    memorial_id = serializers.UUIDField(read_only=True)
    uploaded_by_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = MediaItem
        fields = ['id', 'memorial_id', 'media_type', 'url', 'thumbnail_url', 'caption', 'captured_at',
                  'tags', 'uploaded_by_id', 'created_at']


class MediaItemCreateSerializer(serializers.ModelSerializer):
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = MediaItem
        fields = ['media_type', 'url', 'thumbnail_url', 'caption', 'captured_at', 'tags']


class MediaItemUpdateSerializer(serializers.ModelSerializer):
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)

    class Meta:
        model = MediaItem
        fields = ['caption', 'captured_at', 'tags']
