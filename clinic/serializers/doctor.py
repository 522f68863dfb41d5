from rest_framework import serializers

from clinic.models import Doctor
from ._clean import clean_text


class DoctorSerializer(serializers.ModelSerializer):
    class Meta:
        model = Doctor
        fields = ['id', 'first_name', 'last_name', 'email', 'specialty', 'phone', 'created_at', 'modified_at']
        read_only_fields = ['id', 'created_at', 'modified_at']

    def validate_first_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('first_name cannot be blank')
        return v

    def validate_last_name(self, v):
        v = clean_text(v)
        if not v:
            raise serializers.ValidationError('last_name cannot be blank')
        return v

    def validate_specialty(self, v):
        return clean_text(v)


class DoctorListQuerySerializer(serializers.Serializer):
    q = serializers.CharField(max_length=64, required=False, allow_blank=True)
    specialty = serializers.CharField(max_length=255, required=False, allow_blank=True)
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=200)
