import pytest
from django.contrib.auth.models import AnonymousUser

from users import policy
from users.policy import Allowed, Denied, check


@pytest.mark.django_db
class TestCheck:
    def test_admin_can_verify(self, admin_user):
        assert check(admin_user, policy.VERIFIKASI_PERMINTAAN) == Allowed()

    def test_pegawai_cannot_verify(self, pegawai):
        decision = check(pegawai, policy.VERIFIKASI_PERMINTAAN)
        assert isinstance(decision, Denied)
        assert 'verifikasi_permintaan' in decision.reason

    def test_only_pegawai_creates_requests(self, admin_user, pegawai):
        assert check(pegawai, policy.BUAT_PERMINTAAN) == Allowed()
        assert isinstance(check(admin_user, policy.BUAT_PERMINTAAN), Denied)

    @pytest.mark.parametrize('capability', [
        policy.LIHAT_PROFIL, policy.LIHAT_RIWAYAT, policy.LIHAT_BARANG_TERSEDIA,
    ])
    def test_shared_capabilities(self, admin_user, pegawai, capability):
        assert check(admin_user, capability) == Allowed()
        assert check(pegawai, capability) == Allowed()

    @pytest.mark.parametrize('capability', [
        policy.KELOLA_BARANG, policy.KELOLA_USER, policy.LIHAT_PERMINTAAN_MASUK, policy.LIHAT_LAPORAN,
    ])
    def test_admin_only_capabilities(self, admin_user, pegawai, capability):
        assert check(admin_user, capability) == Allowed()
        assert isinstance(check(pegawai, capability), Denied)

    def test_anonymous_denied(self):
        assert isinstance(check(AnonymousUser(), policy.LIHAT_PROFIL), Denied)

    def test_inactive_user_denied(self, pegawai):
        pegawai.is_active = False
        assert check(pegawai, policy.LIHAT_PROFIL) == Denied('Akun pengguna tidak aktif.')

    def test_superuser_treated_as_admin(self, make_user):
        root = make_user('root', role='pegawai', is_superuser=True)
        assert check(root, policy.KELOLA_BARANG) == Allowed()

    def test_unknown_capability_raises(self, pegawai):
        with pytest.raises(ValueError):
            check(pegawai, 'hapus_semua')
