import pytest

from barang.models import Barang, MutasiStok

pytestmark = pytest.mark.django_db

BARANG_BARU = {
    'kode_barang': 'ATK-001',
    'nama_barang': 'Pulpen Standard',
    'satuan': 'pcs',
    'stok': 50,
    'ambang_batas_kritis': 10,
    'kategori': 'ATK',
}


class TestCrud:
    def test_admin_creates_barang_with_initial_stock_journal(self, admin_client):
        response = admin_client.post('/api/barang', BARANG_BARU, format='json')

        assert response.status_code == 201, response.content
        barang = Barang.objects.get(pk=response.json()['id'])
        assert barang.stok == 50
        assert barang.status_aktif
        mutasi = MutasiStok.objects.get(barang=barang)
        assert (mutasi.jumlah, mutasi.jenis) == (50, MutasiStok.Jenis.MASUK)

    @pytest.mark.parametrize('field, value', [
        ('kode_barang', 'ATK 001'),
        ('kode_barang', 'A' * 21),
        ('nama_barang', 'x' * 101),
        ('satuan', 's' * 21),
        ('stok', -1),
        ('ambang_batas_kritis', -5),
    ])
    def test_create_validation(self, admin_client, field, value):
        payload = dict(BARANG_BARU, **{field: value})
        response = admin_client.post('/api/barang', payload, format='json')
        assert response.status_code == 400
        assert field in response.json()['detail']

    def test_duplicate_active_code_rejected(self, admin_client, make_barang):
        make_barang(kode_barang='ATK-001')
        response = admin_client.post('/api/barang', BARANG_BARU, format='json')
        assert response.status_code == 400
        assert 'kode_barang' in response.json()['detail']

    def test_code_of_inactive_barang_can_be_reused(self, admin_client, make_barang):
        make_barang(kode_barang='ATK-001', status_aktif=False)
        response = admin_client.post('/api/barang', BARANG_BARU, format='json')
        assert response.status_code == 201
        assert Barang.objects.filter(kode_barang='ATK-001').count() == 2

    def test_reactivating_with_taken_code_rejected(self, admin_client, make_barang):
        lama = make_barang(kode_barang='ATK-001', status_aktif=False)
        make_barang(kode_barang='ATK-001')

        response = admin_client.patch(f'/api/barang/{lama.pk}', {'status_aktif': True}, format='json')

        assert response.status_code == 400
        assert 'kode_barang' in response.json()['detail']
        lama.refresh_from_db()
        assert lama.status_aktif is False

    def test_reactivating_with_free_code(self, admin_client, make_barang):
        lama = make_barang(kode_barang='ATK-002', status_aktif=False)
        response = admin_client.patch(f'/api/barang/{lama.pk}', {'status_aktif': True}, format='json')
        assert response.status_code == 200
        lama.refresh_from_db()
        assert lama.status_aktif is True

    def test_pegawai_cannot_manage_barang(self, pegawai_client, make_barang):
        barang = make_barang()
        assert pegawai_client.get('/api/barang').status_code == 403
        assert pegawai_client.post('/api/barang', BARANG_BARU, format='json').status_code == 403
        assert pegawai_client.patch(f'/api/barang/{barang.pk}', {'stok': 1}, format='json').status_code == 403
        assert pegawai_client.delete(f'/api/barang/{barang.pk}').status_code == 403

    def test_update_stock_records_adjustment(self, admin_client, make_barang):
        barang = make_barang(stok=10)

        response = admin_client.patch(f'/api/barang/{barang.pk}', {'stok': 7, 'nama_barang': 'Pulpen Biru'}, format='json')

        assert response.status_code == 200
        barang.refresh_from_db()
        assert (barang.stok, barang.nama_barang) == (7, 'Pulpen Biru')
        mutasi = MutasiStok.objects.get(barang=barang)
        assert (mutasi.jumlah, mutasi.jenis, mutasi.stok_setelah) == (-3, MutasiStok.Jenis.PENYESUAIAN, 7)

    def test_update_negative_stock_rejected(self, admin_client, make_barang):
        barang = make_barang(stok=10)
        response = admin_client.patch(f'/api/barang/{barang.pk}', {'stok': -1}, format='json')
        assert response.status_code == 400

    def test_delete_is_soft(self, admin_client, make_barang):
        barang = make_barang()

        response = admin_client.delete(f'/api/barang/{barang.pk}')

        assert response.status_code == 204
        barang.refresh_from_db()
        assert barang.status_aktif is False

    def test_list_filters_and_pagination(self, admin_client, make_barang):
        make_barang(nama='Pulpen Hitam', stok=50)
        make_barang(nama='Pulpen Merah', stok=2, ambang_batas_kritis=5)
        make_barang(nama='Kertas', stok=50)
        make_barang(nama='Pulpen Lama', status_aktif=False)

        data = admin_client.get('/api/barang', {'q': 'pulpen'}).json()
        assert data['total'] == 3

        data = admin_client.get('/api/barang', {'q': 'pulpen', 'status_aktif': 'true'}).json()
        assert {b['nama_barang'] for b in data['data']} == {'Pulpen Hitam', 'Pulpen Merah'}

        data = admin_client.get('/api/barang', {'stok_kritis': 'true'}).json()
        assert [b['nama_barang'] for b in data['data']] == ['Pulpen Merah']

        data = admin_client.get('/api/barang', {'limit': 2, 'page': 2}).json()
        assert (data['total'], data['page'], len(data['data'])) == (4, 2, 2)

        data = admin_client.get('/api/barang', {'paginate': 'false'}).json()
        assert isinstance(data, list) and len(data) == 4


class TestStock:
    def test_tambah_stok(self, admin_client, make_barang):
        barang = make_barang(stok=5)

        response = admin_client.post(f'/api/barang/{barang.pk}/tambah-stok', {'jumlah': 20}, format='json')

        assert response.status_code == 200
        assert response.json()['stok'] == 25

    def test_tambah_stok_requires_positive(self, admin_client, make_barang):
        barang = make_barang(stok=5)
        response = admin_client.post(f'/api/barang/{barang.pk}/tambah-stok', {'jumlah': 0}, format='json')
        assert response.status_code == 400
        barang.refresh_from_db()
        assert barang.stok == 5

    def test_tambah_stok_inactive_rejected(self, admin_client, make_barang):
        barang = make_barang(stok=5, status_aktif=False)
        response = admin_client.post(f'/api/barang/{barang.pk}/tambah-stok', {'jumlah': 3}, format='json')
        assert response.status_code == 400

    def test_tambah_stok_missing_barang(self, admin_client):
        response = admin_client.post('/api/barang/999999/tambah-stok', {'jumlah': 3}, format='json')
        assert response.status_code == 404

    def test_mutasi_history(self, admin_client, make_barang):
        barang = make_barang(stok=5)
        admin_client.post(f'/api/barang/{barang.pk}/tambah-stok', {'jumlah': 3}, format='json')

        response = admin_client.get(f'/api/barang/{barang.pk}/mutasi')

        assert response.status_code == 200
        rows = response.json()['data']
        assert rows[0]['jumlah'] == 3
        assert rows[0]['stok_setelah'] == 8


class TestSharedLists:
    def test_available_lists_active_for_pegawai(self, pegawai_client, make_barang):
        aktif = make_barang(nama='Pulpen')
        make_barang(nama='Lama', status_aktif=False)

        response = pegawai_client.get('/api/barang/available')

        assert response.status_code == 200
        assert [b['id'] for b in response.json()] == [aktif.pk]

    def test_notifikasi_stok_kritis_sorted_by_stock(self, pegawai_client, make_barang):
        make_barang(nama='Map', stok=4, ambang_batas_kritis=5)
        make_barang(nama='Tinta', stok=1, ambang_batas_kritis=5)
        make_barang(nama='Pulpen', stok=50, ambang_batas_kritis=5)

        response = pegawai_client.get('/api/barang/dashboard/notifikasi-stok-kritis')

        assert response.status_code == 200
        assert [b['nama_barang'] for b in response.json()] == ['Tinta', 'Map']

    def test_stok_kritis_admin_only(self, admin_client, pegawai_client, make_barang):
        make_barang(nama='Tinta', stok=1, ambang_batas_kritis=5)
        assert pegawai_client.get('/api/barang/stok-kritis').status_code == 403
        response = admin_client.get('/api/barang/stok-kritis')
        assert response.status_code == 200
        assert response.json()[0]['is_stok_kritis'] is True
