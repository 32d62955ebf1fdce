# backend/users/permissions.py
from rest_framework import permissions

from .policy import Denied, check


class RequireCapability(permissions.BasePermission):
    """
    Cek capability per action sebelum handler dijalankan.
    View mendefinisikan ``action_capabilities = {'list': KELOLA_BARANG, ...}``;
    action yang tidak terdaftar cukup butuh user login.
    """

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False

        capabilities = getattr(view, 'action_capabilities', {})
        capability = capabilities.get(getattr(view, 'action', None))
        if capability is None:
            return True

        decision = check(request.user, capability)
        if isinstance(decision, Denied):
            # Pesan ini yang dikirim ke client dalam respons 403
            self.message = decision.reason
            return False
        return True
