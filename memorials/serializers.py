import re

from rest_framework import serializers

from .access import access_for
from .models import GRANTABLE_CHOICES, Invitation, Memorial

HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


class MemorialSerializer(serializers.ModelSerializer):
    owner_id = serializers.IntegerField(read_only=True)
    access_level = serializers.SerializerMethodField()

    class Meta:
        model = Memorial
        fields = ['id', 'name', 'birth_date', 'passing_date', 'bio', 'owner_id', 'cover_image',
                  'theme_color', 'access_level', 'created_at', 'updated_at']

    def get_access_level(self, obj):
        request = self.context.get('request')
        return access_for(obj, request.user if request else None).value


class MemorialWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Memorial
        fields = ['name', 'birth_date', 'passing_date', 'bio', 'cover_image', 'theme_color']

    def validate_theme_color(self, value):
        if not HEX_COLOR.match(value):
            raise serializers.ValidationError('Use a hex color such as #b45309.')
        return value

    def validate(self, attrs):
        birth = attrs.get('birth_date', getattr(self.instance, 'birth_date', None))
        passing = attrs.get('passing_date', getattr(self.instance, 'passing_date', None))
        if birth and passing and passing < birth:
            raise serializers.ValidationError({'passing_date': 'Passing date cannot precede birth date.'})
        return attrs


class ParticipantEntrySerializer(serializers.Serializer):
    id = serializers.IntegerField(allow_null=True)
    user_id = serializers.IntegerField(allow_null=True)
    name = serializers.CharField()
    email = serializers.EmailField(allow_blank=True)
    access_level = serializers.CharField()
    invited_at = serializers.DateTimeField()
    accepted_at = serializers.DateTimeField(allow_null=True)
    is_owner = serializers.BooleanField()


class ParticipantCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    guest_name = serializers.CharField(max_length=120, required=False, allow_blank=True, default='')
    access_level = serializers.ChoiceField(choices=GRANTABLE_CHOICES)


class ParticipantUpdateSerializer(serializers.Serializer):
    access_level = serializers.ChoiceField(choices=GRANTABLE_CHOICES)


class InvitationCreateSerializer(serializers.Serializer):
    access_level = serializers.ChoiceField(choices=GRANTABLE_CHOICES)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default='')


class InvitationSerializer(serializers.ModelSerializer):
    memorial_id = serializers.UUIDField(read_only=True)
    state = serializers.CharField(read_only=True)
    link = serializers.CharField(read_only=True)

    class Meta:
        model = Invitation
        fields = ['id', 'memorial_id', 'email', 'phone', 'access_code', 'access_level', 'state',
                  'link', 'expires_at', 'accepted_at', 'created_at']


class InvitationPreviewSerializer(serializers.ModelSerializer):
    memorial_name = serializers.CharField(source='memorial.name', read_only=True)
    state = serializers.CharField(read_only=True)

    class Meta:
        model = Invitation
        fields = ['id', 'memorial_name', 'access_level', 'state', 'expires_at']


class InvitationRedeemSerializer(serializers.Serializer):
    access_code = serializers.CharField(max_length=16)
