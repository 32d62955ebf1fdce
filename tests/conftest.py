import itertools

import pytest
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from barang.models import Barang
from permintaan.services import create_request

_kode_counter = itertools.count(1)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(django_user_model):
    def _make_user(username, role='pegawai', password='rahasia123', **extra):
        extra.setdefault('nama', username.title())
        return django_user_model.objects.create_user(
            username=username, password=password, role=role, **extra
        )
    return _make_user


@pytest.fixture
def admin_user(make_user):
    return make_user('admin', role='admin', nama='Admin SIAP', unit_kerja='Sistem Administrator')


@pytest.fixture
def pegawai(make_user):
    return make_user('budi', role='pegawai', nama='Budi Setiawan', unit_kerja='Seksi Statistik Sosial')


@pytest.fixture
def pegawai_lain(make_user):
    return make_user('sari', role='pegawai', nama='Sari Indah', unit_kerja='Seksi Statistik Produksi')


@pytest.fixture
def make_barang(db):
    def _make_barang(nama='Pulpen', stok=100, ambang_batas_kritis=10, **extra):
        extra.setdefault('kode_barang', f"BRG{next(_kode_counter):03d}")
        extra.setdefault('satuan', 'pcs')
        return Barang.objects.create(
            nama_barang=nama, stok=stok, ambang_batas_kritis=ambang_batas_kritis, **extra
        )
    return _make_barang


@pytest.fixture
def make_permintaan():
    def _make_permintaan(pemohon, *lines, catatan=None):
        items = [{'id_barang': barang.pk, 'jumlah': jumlah} for barang, jumlah in lines]
        return create_request(pemohon, items, catatan=catatan)
    return _make_permintaan


def _client_for(user):
    client = APIClient()
    token, _ = Token.objects.get_or_create(user=user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token.key}')
    return client


@pytest.fixture
def admin_client(admin_user):
    return _client_for(admin_user)


@pytest.fixture
def pegawai_client(pegawai):
    return _client_for(pegawai)


@pytest.fixture
def pegawai_lain_client(pegawai_lain):
    return _client_for(pegawai_lain)
