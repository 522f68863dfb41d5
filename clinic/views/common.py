"""Response envelopes shared by the resource views."""
from rest_framework.response import Response


def ok(data, status=200):
    return Response({'ok': True, 'data': data}, status=status)


def paginated(items, total, page, page_size):
    return Response({
        'ok': True,
        'data': items,
        'pagination': {'total': total, 'page': page or 1, 'pageSize': page_size or total},
    })
