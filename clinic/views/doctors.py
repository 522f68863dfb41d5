from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.serializers.doctor import DoctorSerializer, DoctorListQuerySerializer
from clinic.services import registry
from .common import ok, paginated


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def doctors_list(request):
    """List doctors or register a new one.

    Query params (GET):
      - q: optional search on name/e-mail
      - specialty: exact specialty, case insensitive
      - page, pageSize: pagination (optional)
    """
    service = registry.doctor_service()
    if request.method == 'POST':
        s = DoctorSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return ok(service.create(s.validated_data), status=status.HTTP_201_CREATED)

    q = DoctorListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    page = vd.get('page') or 1
    page_size = vd.get('pageSize')
    filters = service.search_filters(q=vd.get('q'), specialty=vd.get('specialty'))
    items, total = service.get_all(filters, page=page, page_size=page_size)
    return paginated(items, total, page, page_size)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def doctor_detail(request, pk: int):
    service = registry.doctor_service()
    if request.method == 'GET':
        return ok(service.get(pk))
    if request.method == 'PATCH':
        s = DoctorSerializer(service.get_instance(pk), data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(service.edit(pk, s.validated_data))
    service.delete(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
