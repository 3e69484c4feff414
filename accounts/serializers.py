from django.contrib.auth import get_user_model
from rest_framework import serializers


class SignInSerializer(serializers.Serializer):
    # Doubles as the username, which is limited to 150 characters
    email = serializers.EmailField(max_length=150)
    redirect = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class UserSerializer(serializers.ModelSerializer):
    name = serializers.SerializerMethodField()

    class Meta:
        model = get_user_model()
        fields = ['id', 'email', 'name', 'first_name', 'last_name']

    def get_name(self, obj):
        return obj.get_full_name() or obj.email
