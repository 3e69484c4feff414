from django.utils import timezone
from rest_framework import serializers

from .models import GuestbookEntry, Ritual


class GuestbookEntrySerializer(serializers.ModelSerializer):
    memorial_id = serializers.UUIDField(read_only=True)
    author_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = GuestbookEntry
        fields = ['id', 'memorial_id', 'author_id', 'author_name', 'message', 'relationship', 'created_at']
        read_only_fields = ['created_at']


class GuestbookEntryCreateSerializer(serializers.ModelSerializer):
    author_name = serializers.CharField(max_length=120, required=False, allow_blank=True, default='')

    class Meta:
        model = GuestbookEntry
        fields = ['author_name', 'message', 'relationship']


class GuestbookEntryUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = GuestbookEntry
        fields = ['message', 'relationship']


class RitualSerializer(serializers.ModelSerializer):
    memorial_id = serializers.UUIDField(read_only=True)
    user_id = serializers.IntegerField(read_only=True, allow_null=True)

    class Meta:
        model = Ritual
        fields = ['id', 'memorial_id', 'ritual_type', 'user_id', 'guest_name', 'message', 'expires_at', 'created_at']
        read_only_fields = ['created_at']


class RitualCreateSerializer(serializers.ModelSerializer):
    guest_name = serializers.CharField(max_length=120, required=False, allow_blank=True, default='')

    class Meta:
        model = Ritual
        fields = ['ritual_type', 'guest_name', 'message', 'expires_at']

    def validate_expires_at(self, value):
        if value is not None and value <= timezone.now():
            raise serializers.ValidationError('Expiry must be in the future.')
        return value


class RitualUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Ritual
        fields = ['message']
