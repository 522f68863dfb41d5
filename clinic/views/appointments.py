"""
Appointment views.

Appointments link a doctor and a patient at a point in time.  The list
endpoint filters by ``doctorId``, ``patientId`` and ``status``;
cancelling keeps the row and flips its status to ``cancelled``.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.serializers.appointment import AppointmentSerializer, AppointmentListQuerySerializer
from clinic.services import registry
from .common import ok, paginated


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def appointments_list(request):
    service = registry.appointment_service()
    if request.method == 'POST':
        s = AppointmentSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return ok(service.create(s.validated_data), status=status.HTTP_201_CREATED)

    q = AppointmentListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    page = vd.get('page') or 1
    page_size = vd.get('pageSize')
    filters = service.list_filters(
        doctor_id=vd.get('doctorId'), patient_id=vd.get('patientId'), status=vd.get('status'),
    )
    items, total = service.get_all(filters, page=page, page_size=page_size)
    return paginated(items, total, page, page_size)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def appointment_detail(request, pk: int):
    service = registry.appointment_service()
    if request.method == 'GET':
        return ok(service.get(pk))
    if request.method == 'PATCH':
        s = AppointmentSerializer(service.get_instance(pk), data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(service.edit(pk, s.validated_data))
    service.delete(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def appointment_cancel(request, pk: int):
    return ok(registry.appointment_service().cancel(pk))
