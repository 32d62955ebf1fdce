# backend/users/policy.py
"""
Tabel hak akses SIAP.

Setiap user punya tepat satu role. Hak akses (capability) diperiksa lewat
``check(user, capability)`` yang mengembalikan ``Allowed()`` atau
``Denied(reason)``; tidak ada exception di sini, pemanggil yang memutuskan
cara menolak (lihat ``users.permissions.RequireCapability``).

Pembatasan kepemilikan data (pegawai hanya melihat permintaannya sendiri)
tidak diatur di tabel ini melainkan lewat filter queryset di view.
"""
from dataclasses import dataclass

from .models import User

# --- Daftar capability ---
KELOLA_BARANG = 'kelola_barang'
KELOLA_USER = 'kelola_user'
BUAT_PERMINTAAN = 'buat_permintaan'
VERIFIKASI_PERMINTAAN = 'verifikasi_permintaan'
LIHAT_PERMINTAAN_MASUK = 'lihat_permintaan_masuk'
LIHAT_LAPORAN = 'lihat_laporan'
LIHAT_PROFIL = 'lihat_profil'
LIHAT_RIWAYAT = 'lihat_riwayat'
LIHAT_BARANG_TERSEDIA = 'lihat_barang_tersedia'

ALL_CAPABILITIES = frozenset({
    KELOLA_BARANG, KELOLA_USER, BUAT_PERMINTAAN, VERIFIKASI_PERMINTAAN,
    LIHAT_PERMINTAAN_MASUK, LIHAT_LAPORAN, LIHAT_PROFIL, LIHAT_RIWAYAT,
    LIHAT_BARANG_TERSEDIA,
})

POLICY = {
    User.Role.ADMIN: frozenset({
        KELOLA_BARANG,
        KELOLA_USER,
        VERIFIKASI_PERMINTAAN,
        LIHAT_PERMINTAAN_MASUK,
        LIHAT_LAPORAN,
        LIHAT_PROFIL,
        LIHAT_RIWAYAT,
        LIHAT_BARANG_TERSEDIA,
    }),
    User.Role.PEGAWAI: frozenset({
        BUAT_PERMINTAAN,
        LIHAT_PROFIL,
        LIHAT_RIWAYAT,
        LIHAT_BARANG_TERSEDIA,
    }),
}


@dataclass(frozen=True)
class Allowed:
    pass


@dataclass(frozen=True)
class Denied:
    reason: str


def role_of(user):
    if user.is_superuser:
        return User.Role.ADMIN
    return user.role


def check(user, capability):
    if capability not in ALL_CAPABILITIES:
        raise ValueError(f"Capability tidak dikenal: {capability}")
    if user is None or not user.is_authenticated:
        return Denied('Autentikasi diperlukan.')
    if not user.is_active:
        return Denied('Akun pengguna tidak aktif.')

    role = role_of(user)
    if capability in POLICY.get(role, frozenset()):
        return Allowed()
    return Denied(f"Role '{role}' tidak memiliki akses '{capability}'.")
