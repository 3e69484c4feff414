from rest_framework import serializers

from .models import Milestone


class MilestoneSerializer(serializers.ModelSerializer):
    memorial_id = serializers.UUIDField(read_only=True)
    submitted_by_id = serializers.IntegerField(read_only=True)
    reviewed_by_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Milestone
        fields = ['id', 'memorial_id', 'title', 'description', 'event_date', 'location', 'image_urls',
                  'status', 'submitted_by_id', 'reviewed_by_id', 'reviewed_at', 'created_at', 'updated_at']
        read_only_fields = ['status', 'reviewed_at', 'created_at', 'updated_at']


class MilestoneWriteSerializer(serializers.ModelSerializer):
    image_urls = serializers.ListField(child=serializers.URLField(max_length=500), required=False)

    class Meta:
        model = Milestone
        fields = ['title', 'description', 'event_date', 'location', 'image_urls']
