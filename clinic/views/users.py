"""
User endpoints.

Reads go through :class:`~clinic.services.users.UserService`, which
serves ``user:<id>`` and ``users`` from the cache store when present.
Registration is open; everything else requires authentication.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import NotAuthenticated
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework import status

from clinic.serializers.user import UserSerializer, UserListQuerySerializer
from clinic.services import registry
from .common import ok, paginated


@api_view(['GET', 'POST'])
@permission_classes([AllowAny])
def users_list(request):
    service = registry.user_service()
    if request.method == 'POST':
        s = UserSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        return ok(service.create(s.validated_data), status=status.HTTP_201_CREATED)

    if not (request.user and request.user.is_authenticated):
        raise NotAuthenticated()
    q = UserListQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    page = q.validated_data.get('page') or 1
    page_size = q.validated_data.get('pageSize')
    items, total = service.get_all(service.search_filters(q.validated_data.get('q')),
                                   page=page, page_size=page_size)
    return paginated(items, total, page, page_size)


@api_view(['GET', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def user_detail(request, pk: int):
    service = registry.user_service()
    if request.method == 'GET':
        return ok(service.get(pk))
    if request.method == 'PATCH':
        s = UserSerializer(service.get_instance(pk), data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        return ok(service.edit(pk, s.validated_data))
    service.delete(pk)
    return Response(status=status.HTTP_204_NO_CONTENT)
