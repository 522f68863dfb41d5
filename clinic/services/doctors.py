from django.db.models import Q

from clinic.cache import CachePrefix
from clinic.serializers.doctor import DoctorSerializer
from .crud import CrudService


class DoctorService(CrudService):
    serializer_class = DoctorSerializer
    entity_prefix = CachePrefix.DOCTOR
    collection_prefix = CachePrefix.DOCTORS
    label = 'doctor'

    @staticmethod
    def search_filters(q=None, specialty=None):
        cond = Q()
        if q:
            cond &= Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(email__icontains=q)
        if specialty:
            cond &= Q(specialty__iexact=specialty)
        return cond or None
