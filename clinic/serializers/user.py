from django.contrib.auth import password_validation
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from clinic.models import User
from ._clean import clean_text


class UserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=True, min_length=8)

    class Meta:
        model = User
        fields = [
            'id', 'username', 'email', 'first_name', 'last_name', 'password',
            'last_connected_at', 'date_joined', 'modified_at',
        ]
        read_only_fields = ['id', 'last_connected_at', 'date_joined', 'modified_at']

    def validate_first_name(self, v):
        return clean_text(v)

    def validate_last_name(self, v):
        return clean_text(v)

    def validate_password(self, v):
        try:
            password_validation.validate_password(v)
        except DjangoValidationError as e:
            raise serializers.ValidationError(e.messages)
        return v


class UserListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False, allow_blank=True)
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=200)
