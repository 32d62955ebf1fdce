# backend/barang/services.py
"""
Ledger stok barang.

Semua perubahan stok melewati fungsi di modul ini. Pengurangan stok dilakukan
dengan satu UPDATE bersyarat (``WHERE stok >= jumlah``) sehingga dua transaksi
yang berjalan bersamaan tidak bisa membuat stok negatif: salah satunya akan
mendapat 0 baris ter-update dan gagal dengan ``Conflict``.
"""
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from siap.exceptions import Conflict
from .models import Barang, MutasiStok

logger = logging.getLogger(__name__)


def _validate_jumlah(jumlah):
    if isinstance(jumlah, bool) or not isinstance(jumlah, int) or jumlah < 1:
        raise ValidationError({'jumlah': ['Jumlah harus bilangan bulat minimal 1.']})


def record_mutation(barang, jumlah, jenis, user=None, permintaan=None, catatan=None):
    return MutasiStok.objects.create(
        barang=barang,
        jumlah=jumlah,
        jenis=jenis,
        stok_setelah=barang.stok,
        user=user,
        permintaan=permintaan,
        catatan=catatan,
    )


@transaction.atomic
def decrement_stock(barang_id, jumlah, user=None, permintaan=None, catatan=None):
    """Kurangi stok barang; Conflict jika stok tidak mencukupi."""
    _validate_jumlah(jumlah)

    updated = Barang.objects.filter(pk=barang_id, stok__gte=jumlah).update(
        stok=F('stok') - jumlah,
        updated_at=timezone.now(),
    )
    if not updated:
        barang = Barang.objects.filter(pk=barang_id).first()
        if barang is None:
            raise NotFound(f"Barang dengan id {barang_id} tidak ditemukan.")
        raise Conflict(
            f"Stok {barang.nama_barang} tidak mencukupi. "
            f"Tersedia {barang.stok}, dibutuhkan {jumlah}."
        )

    barang = Barang.objects.get(pk=barang_id)
    record_mutation(barang, -jumlah, MutasiStok.Jenis.KELUAR, user=user, permintaan=permintaan, catatan=catatan)
    logger.info("Stok %s berkurang %s, sisa %s", barang.kode_barang, jumlah, barang.stok)
    return barang


@transaction.atomic
def increment_stock(barang_id, jumlah, user=None, catatan=None):
    """Tambah stok barang aktif."""
    _validate_jumlah(jumlah)

    barang = Barang.objects.select_for_update().filter(pk=barang_id).first()
    if barang is None:
        raise NotFound(f"Barang dengan id {barang_id} tidak ditemukan.")
    if not barang.status_aktif:
        raise ValidationError({'barang': ['Tidak dapat menambah stok barang yang tidak aktif.']})

    Barang.objects.filter(pk=barang_id).update(stok=F('stok') + jumlah, updated_at=timezone.now())
    barang.refresh_from_db()
    record_mutation(barang, jumlah, MutasiStok.Jenis.MASUK, user=user, catatan=catatan or 'Penambahan stok')
    logger.info("Stok %s bertambah %s, menjadi %s", barang.kode_barang, jumlah, barang.stok)
    return barang


@transaction.atomic
def save_barang(serializer, user=None):
    """
    Simpan create/update barang dari serializer.
    Perubahan nilai stok lewat form dicatat sebagai mutasi (stok awal atau penyesuaian).
    """
    if serializer.instance is None:
        barang = serializer.save()
        if barang.stok:
            record_mutation(barang, barang.stok, MutasiStok.Jenis.MASUK, user=user, catatan='Stok awal')
        return barang

    # Kunci baris dan pakai nilai stok terbaru agar update field lain tidak menimpa stok
    locked = Barang.objects.select_for_update().get(pk=serializer.instance.pk)
    stok_lama = locked.stok
    serializer.instance = locked
    barang = serializer.save()

    selisih = barang.stok - stok_lama
    if selisih:
        record_mutation(barang, selisih, MutasiStok.Jenis.PENYESUAIAN, user=user, catatan='Penyesuaian stok manual')
        logger.info("Penyesuaian stok %s: %s -> %s", barang.kode_barang, stok_lama, barang.stok)
    return barang


def deactivate_barang(barang):
    barang.status_aktif = False
    barang.save(update_fields=['status_aktif', 'updated_at'])
    logger.info("Barang %s dinonaktifkan", barang.kode_barang)
    return barang
