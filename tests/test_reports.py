import datetime
from io import BytesIO

import pandas as pd
import pytest
from django.utils import timezone

from permintaan import reports
from permintaan.models import Permintaan
from permintaan.services import verify_request

pytestmark = pytest.mark.django_db


def _approve(permintaan, verifikator, *approved, keputusan='sebagian'):
    details = list(permintaan.details.order_by('id'))
    items = [{'id_detail': d.pk, 'jumlah_disetujui': q} for d, q in zip(details, approved)]
    return verify_request(permintaan.pk, verifikator, keputusan, items)


class TestDashboard:
    def test_statistik(self, admin_user, pegawai, make_user, make_barang, make_permintaan):
        barang = make_barang(stok=50, ambang_batas_kritis=5)
        make_barang(stok=2, ambang_batas_kritis=5)
        make_barang(stok=0, ambang_batas_kritis=5, status_aktif=False)
        make_user('pensiun', is_active=False)
        make_permintaan(pegawai, (barang, 1))
        selesai = make_permintaan(pegawai, (barang, 1))
        _approve(selesai, admin_user, 1)

        assert reports.dashboard_statistik() == {
            'totalBarang': 3,
            'totalPermintaanTertunda': 1,
            'totalBarangKritis': 1,
            'totalUser': 2,
        }

    def test_statistik_endpoint_admin_only(self, admin_client, pegawai_client):
        assert admin_client.get('/api/permintaan/dashboard/statistik').status_code == 200
        assert pegawai_client.get('/api/permintaan/dashboard/statistik').status_code == 403

    def test_tren_has_twelve_zero_filled_months(self, pegawai, make_barang, make_permintaan):
        barang = make_barang()
        today = timezone.localdate()
        make_permintaan(pegawai, (barang, 1))
        make_permintaan(pegawai, (barang, 1))
        lama = make_permintaan(pegawai, (barang, 1))
        # Di luar jendela 12 bulan
        Permintaan.objects.filter(pk=lama.pk).update(
            tanggal_permintaan=timezone.now() - datetime.timedelta(days=400)
        )

        tren = reports.tren_permintaan_bulanan(today)

        assert len(tren) == 12
        assert tren[-1] == {'bulan': today.strftime('%Y-%m'), 'jumlah': 2}
        assert sum(row['jumlah'] for row in tren) == 2
        assert [row['bulan'] for row in tren] == sorted(row['bulan'] for row in tren)

    def test_tren_crosses_year_boundary(self, db):
        tren = reports.tren_permintaan_bulanan(datetime.date(2025, 3, 15))
        assert tren[0]['bulan'] == '2024-04'
        assert tren[-1]['bulan'] == '2025-03'


class TestLaporanPenggunaan:
    @pytest.fixture
    def data(self, admin_user, pegawai, pegawai_lain, make_barang, make_permintaan):
        pulpen = make_barang(nama='Pulpen', stok=100, satuan='pcs', kode_barang='ATK001')
        kertas = make_barang(nama='Kertas', stok=100, satuan='rim', kode_barang='KTB001')

        p1 = make_permintaan(pegawai, (pulpen, 10), (kertas, 2))
        _approve(p1, admin_user, 10, 0)
        p2 = make_permintaan(pegawai, (pulpen, 5))
        _approve(p2, admin_user, 5)
        p3 = make_permintaan(pegawai_lain, (kertas, 3))
        _approve(p3, admin_user, 3)
        ditolak = make_permintaan(pegawai_lain, (pulpen, 7))
        _approve(ditolak, admin_user, 0, keputusan='tolak')
        make_permintaan(pegawai, (pulpen, 1))  # masih menunggu
        return {'pulpen': pulpen, 'kertas': kertas}

    def test_aggregates_by_barang_and_unit(self, data):
        today = timezone.localdate()

        rows = reports.laporan_penggunaan(today, today)

        simplified = [(r['nama_barang'], r['unit_kerja'], r['total_digunakan']) for r in rows]
        assert simplified == [
            ('Kertas', 'Seksi Statistik Produksi', 3),
            ('Pulpen', 'Seksi Statistik Sosial', 15),
        ]
        assert rows[1]['kode_barang'] == 'ATK001'
        assert rows[1]['satuan'] == 'pcs'

    def test_filter_unit_kerja(self, data):
        today = timezone.localdate()
        rows = reports.laporan_penggunaan(today, today, 'Seksi Statistik Produksi')
        assert [r['nama_barang'] for r in rows] == ['Kertas']

    def test_outside_range_is_empty(self, data):
        kemarin = timezone.localdate() - datetime.timedelta(days=1)
        assert reports.laporan_penggunaan(kemarin, kemarin) == []

    def test_endpoint_validates_dates(self, admin_client):
        response = admin_client.get('/api/barang/laporan-penggunaan', {'start': '2025-02-01', 'end': '2025-01-01'})
        assert response.status_code == 400
        response = admin_client.get('/api/barang/laporan-penggunaan', {'start': '01-01-2025', 'end': '2025-01-31'})
        assert response.status_code == 400

    def test_endpoint_returns_rows(self, admin_client, data):
        today = timezone.localdate().isoformat()
        response = admin_client.get('/api/barang/laporan-penggunaan', {'start': today, 'end': today})
        assert response.status_code == 200
        assert [r['total_digunakan'] for r in response.json()] == [3, 15]

    def test_export_xlsx(self, admin_client, data):
        today = timezone.localdate().isoformat()

        response = admin_client.get('/api/barang/laporan-penggunaan/export', {'start': today, 'end': today})

        assert response.status_code == 200
        assert response['Content-Type'] == reports.XLSX_CONTENT_TYPE
        df = pd.read_excel(BytesIO(response.content), engine='openpyxl', skiprows=4)
        assert list(df['Nama Barang']) == ['Kertas', 'Pulpen']
        assert list(df['Total Digunakan']) == [3, 15]

    def test_pegawai_cannot_see_report(self, pegawai_client):
        response = pegawai_client.get('/api/barang/laporan-penggunaan', {'start': '2025-01-01', 'end': '2025-01-31'})
        assert response.status_code == 403


def test_format_tanggal():
    assert reports.format_tanggal(datetime.date(2025, 8, 5)) == '5 Agustus 2025'
    assert reports.format_tanggal(None) == '-'
