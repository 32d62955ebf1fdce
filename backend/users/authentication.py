# backend/users/authentication.py
from rest_framework.authentication import TokenAuthentication


class BearerTokenAuthentication(TokenAuthentication):
    """Token DRF yang dikirim sebagai 'Authorization: Bearer <token>'."""
    keyword = 'Bearer'
