"""
Token authentication used by the REST framework configuration.

Kept in its own module so that ``REST_FRAMEWORK`` can reference it without
importing any view code while DRF initialises its authentication classes.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """DRF token authentication using the ``Token`` keyword.

    Clients send ``Authorization: Token <key>`` with the key returned by
    ``/api/auth/login``.
    """

    keyword = 'Token'
