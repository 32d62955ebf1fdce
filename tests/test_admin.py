import pytest
from django.contrib import admin
from django.test import RequestFactory

from barang.admin import BarangAdmin
from barang.models import Barang
from permintaan.admin import DetailPermintaanInline
from permintaan.models import Permintaan
from permintaan.services import verify_request

pytestmark = pytest.mark.django_db


@pytest.fixture
def superuser_request(django_user_model):
    request = RequestFactory().get('/admin/')
    request.user = django_user_model.objects.create_superuser(
        username='root', email='root@example.com', password='rahasia123', nama='Root',
    )
    return request


def test_barang_stok_is_readonly(superuser_request, make_barang):
    barang = make_barang(stok=10)
    model_admin = BarangAdmin(Barang, admin.site)
    assert 'stok' in model_admin.get_readonly_fields(superuser_request, barang)


class TestDetailInline:
    def _inline(self):
        return DetailPermintaanInline(Permintaan, admin.site)

    def test_pending_request_lines_editable(self, superuser_request, pegawai, make_barang, make_permintaan):
        permintaan = make_permintaan(pegawai, (make_barang(), 2))
        inline = self._inline()

        assert inline.has_change_permission(superuser_request, permintaan)
        assert 'jumlah_diminta' not in inline.get_readonly_fields(superuser_request, permintaan)

    def test_verified_request_lines_locked(self, superuser_request, admin_user, pegawai, make_barang, make_permintaan):
        permintaan = make_permintaan(pegawai, (make_barang(stok=10), 2))
        detail = permintaan.details.get()
        permintaan = verify_request(permintaan.pk, admin_user, 'setuju', [
            {'id_detail': detail.pk, 'jumlah_disetujui': 2},
        ])
        inline = self._inline()

        assert not inline.has_change_permission(superuser_request, permintaan)
        assert not inline.has_add_permission(superuser_request, permintaan)
        assert not inline.has_delete_permission(superuser_request, permintaan)
        assert set(inline.get_readonly_fields(superuser_request, permintaan)) == {
            'barang', 'jumlah_diminta', 'jumlah_disetujui',
        }
