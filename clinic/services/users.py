import logging

from django.contrib.auth.hashers import make_password
from django.db.models import Q

from clinic.cache import CachePrefix, CacheUnavailable
from clinic.serializers.user import UserSerializer
from .crud import CrudService

logger = logging.getLogger(__name__)


class UserService(CrudService):
    """Users, read through the ``user:<id>``/``users`` cache keys."""
    serializer_class = UserSerializer
    entity_prefix = CachePrefix.USER
    collection_prefix = CachePrefix.USERS
    label = 'user'

    def prepare(self, data):
        fields = dict(data)
        if fields.get('password'):
            fields['password'] = make_password(fields['password'])
        else:
            fields.pop('password', None)
        return fields

    @staticmethod
    def search_filters(q):
        if not q:
            return None
        return Q(username__icontains=q) | Q(first_name__icontains=q) | Q(last_name__icontains=q) | Q(email__icontains=q)

    def record_connection(self, user) -> None:
        """Buffer the login time of ``user`` for the last-connected sync."""
        if self.cache is None:
            return
        try:
            self.cache.save_last_connected(user.pk)
        except CacheUnavailable as exc:
            logger.warning("last connection of user %s not recorded: %s", user.pk, exc)
