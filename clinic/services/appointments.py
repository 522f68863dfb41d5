from clinic.models import Appointment
from clinic.serializers.appointment import AppointmentSerializer
from .crud import CrudService


class AppointmentService(CrudService):
    """Appointments go straight to the database; they are not cached."""
    serializer_class = AppointmentSerializer
    label = 'appointment'

    @staticmethod
    def list_filters(doctor_id=None, patient_id=None, status=None) -> dict:
        filters = {}
        if doctor_id:
            filters['doctor_id'] = doctor_id
        if patient_id:
            filters['patient_id'] = patient_id
        if status:
            filters['status'] = status
        return filters

    def cancel(self, pk) -> dict:
        return self.edit(pk, {'status': Appointment.STATUS_CANCELLED})
