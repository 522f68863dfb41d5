from django.db.models import Q

from clinic.cache import CachePrefix
from clinic.serializers.patient import PatientSerializer
from .crud import CrudService


class PatientService(CrudService):
    serializer_class = PatientSerializer
    entity_prefix = CachePrefix.PATIENT
    collection_prefix = CachePrefix.PATIENTS
    label = 'patient'

    @staticmethod
    def search_filters(q=None):
        if not q:
            return None
        return Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(email__icontains=q) | Q(phone__icontains=q)
