# backend/siap/exceptions.py
import logging

from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    """Operasi bertentangan dengan keadaan data saat ini (mis. stok kurang, sudah diverifikasi)."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('Permintaan bertentangan dengan keadaan data saat ini.')
    default_code = 'conflict'


# Status HTTP -> jenis error yang dikirim ke client
ERROR_KINDS = {
    status.HTTP_400_BAD_REQUEST: 'Validation',
    status.HTTP_401_UNAUTHORIZED: 'Unauthorized',
    status.HTTP_403_FORBIDDEN: 'Forbidden',
    status.HTTP_404_NOT_FOUND: 'NotFound',
    status.HTTP_409_CONFLICT: 'Conflict',
}


def first_message(detail):
    """Ambil satu pesan yang bisa dibaca manusia dari struktur detail DRF."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return first_message(detail['detail'])
        for key, value in detail.items():
            message = first_message(value)
            if key == 'non_field_errors':
                return message
            return f"{key}: {message}"
        return ''
    if isinstance(detail, (list, tuple)):
        return first_message(detail[0]) if detail else ''
    return str(detail)


def siap_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Bukan exception DRF, biarkan Django yang menangani (500)
        return None

    detail = response.data
    kind = ERROR_KINDS.get(response.status_code, 'Error')
    response.data = {
        'error': kind,
        'message': first_message(detail),
        'detail': detail,
    }

    view = context.get('view')
    logger.warning(
        "%s (%s) pada %s: %s",
        kind, response.status_code,
        type(view).__name__ if view else '-',
        response.data['message'],
    )
    return response
