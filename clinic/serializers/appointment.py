from rest_framework import serializers

from clinic.models import Appointment, Doctor, Patient
from ._clean import clean_text


class AppointmentSerializer(serializers.ModelSerializer):
    doctorId = serializers.PrimaryKeyRelatedField(source='doctor', queryset=Doctor.objects.all())
    patientId = serializers.PrimaryKeyRelatedField(source='patient', queryset=Patient.objects.all())

    class Meta:
        model = Appointment
        fields = [
            'id', 'doctorId', 'patientId', 'scheduled_at', 'status', 'reason', 'notes',
            'created_at', 'modified_at',
        ]
        read_only_fields = ['id', 'created_at', 'modified_at']

    def validate_reason(self, v):
        return clean_text(v)

    def validate_notes(self, v):
        return clean_text(v)


class AppointmentListQuerySerializer(serializers.Serializer):
    doctorId = serializers.IntegerField(required=False, min_value=1)
    patientId = serializers.IntegerField(required=False, min_value=1)
    status = serializers.ChoiceField(choices=[c for c, _ in Appointment.STATUS_CHOICES], required=False)
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=200)
