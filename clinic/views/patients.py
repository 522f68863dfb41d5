"""
Patient management views.

Administrative staff register patients, look them up and keep their
contact details current.  Removing a patient also removes their
appointments.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.serializers.patient import PatientSerializer, PatientListQuerySerializer
from clinic.services import registry
from .common import ok, paginated


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def patients_list(request):
    service = registry.patient_service()
    if request.method == 'POST':
        s = PatientSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return ok(service.create(s.validated_data), status=status.HTTP_201_CREATED)

    q = PatientListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page') or 1
    page_size = q.validated_data.get('pageSize')
    items, total = service.get_all(service.search_filters(q.validated_data.get('q')),
                                   page=page, page_size=page_size)
    return paginated(items, total, page, page_size)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def patient_detail(request, pk: int):
    service = registry.patient_service()
    if request.method == 'GET':
        return ok(service.get(pk))
    if request.method == 'PATCH':
        s = PatientSerializer(service.get_instance(pk), data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(service.edit(pk, s.validated_data))
    service.delete(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
