# backend/permintaan/services.py
"""
Alur permintaan barang: pengajuan oleh pegawai dan verifikasi oleh admin.

Verifikasi berjalan dalam satu ``transaction.atomic()``: baris permintaan
dikunci, jumlah disetujui ditulis, stok dikurangi lewat ledger barang, lalu
status akhir disimpan. Kegagalan di langkah mana pun membatalkan semuanya.
"""
import logging
from collections import defaultdict

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from barang.models import Barang
from barang.services import decrement_stock
from siap.exceptions import Conflict
from .models import Permintaan, DetailPermintaan

logger = logging.getLogger(__name__)

KEPUTUSAN_SETUJU = 'setuju'
KEPUTUSAN_SEBAGIAN = 'sebagian'
KEPUTUSAN_TOLAK = 'tolak'
KEPUTUSAN_CHOICES = (KEPUTUSAN_SETUJU, KEPUTUSAN_SEBAGIAN, KEPUTUSAN_TOLAK)


def _as_int(value):
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@transaction.atomic
def create_request(pemohon, items, catatan=None):
    """
    Buat permintaan baru berstatus Menunggu.
    Ketersediaan stok tidak dicek di sini, baru saat verifikasi.
    """
    if not items:
        raise ValidationError({'items': ['Permintaan harus berisi minimal satu barang.']})

    errors = []
    parsed = []
    for index, item in enumerate(items):
        id_barang = _as_int(item.get('id_barang'))
        jumlah = _as_int(item.get('jumlah'))
        if id_barang is None:
            errors.append(f"Item ke-{index + 1}: id_barang wajib diisi.")
        elif jumlah is None or jumlah < 1:
            errors.append(f"Item ke-{index + 1}: jumlah minimal 1.")
        else:
            parsed.append((id_barang, jumlah))

    barang_map = Barang.objects.in_bulk({id_barang for id_barang, jumlah in parsed})
    for id_barang, jumlah in parsed:
        barang = barang_map.get(id_barang)
        if barang is None:
            errors.append(f"Barang dengan id {id_barang} tidak ditemukan.")
        elif not barang.status_aktif:
            errors.append(f"Barang {barang.nama_barang} sudah tidak aktif.")

    if errors:
        raise ValidationError({'items': errors})

    permintaan = Permintaan.objects.create(pemohon=pemohon, catatan=catatan or None)
    DetailPermintaan.objects.bulk_create([
        DetailPermintaan(permintaan=permintaan, barang_id=id_barang, jumlah_diminta=jumlah, jumlah_disetujui=0)
        for id_barang, jumlah in parsed
    ])
    logger.info("Permintaan #%s dibuat oleh %s (%s baris)", permintaan.pk, pemohon.username, len(parsed))
    return permintaan


def derive_status(keputusan, lines):
    """
    Status akhir dari keputusan admin dan pasangan (jumlah_diminta, jumlah_disetujui)
    setiap baris. 'tolak' selalu Ditolak; 'sebagian' menjadi Disetujui hanya jika
    ternyata semua baris disetujui penuh.
    """
    if keputusan == KEPUTUSAN_TOLAK:
        return Permintaan.Status.DITOLAK
    if all(disetujui == diminta for diminta, disetujui in lines):
        return Permintaan.Status.DISETUJUI
    return Permintaan.Status.DISETUJUI_SEBAGIAN


def _approved_quantities(details, keputusan, items):
    """Petakan input verifikasi ke jumlah disetujui per id detail."""
    if not items:
        raise ValidationError({'items': ['Daftar item verifikasi tidak boleh kosong.']})

    by_id = {detail.pk: detail for detail in details}
    approved = {detail.pk: 0 for detail in details}
    seen = set()
    errors = []

    for item in items:
        id_detail = _as_int(item.get('id_detail'))
        jumlah = _as_int(item.get('jumlah_disetujui'))
        if id_detail is None or id_detail not in by_id:
            errors.append(f"Detail {item.get('id_detail')} bukan bagian dari permintaan ini.")
            continue
        if id_detail in seen:
            errors.append(f"Detail {id_detail} disebut lebih dari sekali.")
            continue
        seen.add(id_detail)
        if jumlah is None or jumlah < 0:
            errors.append(f"Jumlah disetujui untuk detail {id_detail} tidak boleh negatif.")
            continue
        if jumlah > by_id[id_detail].jumlah_diminta:
            errors.append(
                f"Jumlah disetujui untuk detail {id_detail} ({jumlah}) melebihi "
                f"jumlah diminta ({by_id[id_detail].jumlah_diminta})."
            )
            continue
        approved[id_detail] = jumlah

    if errors:
        raise ValidationError({'items': errors})

    if keputusan == KEPUTUSAN_TOLAK:
        return {id_detail: 0 for id_detail in approved}

    if keputusan == KEPUTUSAN_SETUJU:
        kurang = [d.pk for d in details if approved[d.pk] != d.jumlah_diminta]
        if kurang:
            raise ValidationError({
                'keputusan': [f"Keputusan 'setuju' mensyaratkan semua baris disetujui penuh (detail {kurang})."],
            })
    return approved


@transaction.atomic
def verify_request(permintaan_id, verifikator, keputusan, items, catatan_verifikasi=None):
    """
    Verifikasi permintaan Menunggu.

    NotFound jika permintaan tidak ada, Conflict jika sudah diverifikasi atau
    stok tidak cukup, ValidationError untuk input yang tidak sesuai. Semua
    perubahan dibatalkan bila salah satu langkah gagal.
    """
    if keputusan not in KEPUTUSAN_CHOICES:
        raise ValidationError({'keputusan': [f"Keputusan harus salah satu dari {', '.join(KEPUTUSAN_CHOICES)}."]})

    permintaan = Permintaan.objects.select_for_update().filter(pk=permintaan_id).first()
    if permintaan is None:
        raise NotFound(f"Permintaan dengan id {permintaan_id} tidak ditemukan.")
    if not permintaan.is_menunggu:
        raise Conflict(f"Permintaan #{permintaan.pk} sudah diverifikasi ({permintaan.status}).")

    details = list(permintaan.details.all())
    approved = _approved_quantities(details, keputusan, items)

    for detail in details:
        detail.jumlah_disetujui = approved[detail.pk]
    DetailPermintaan.objects.bulk_update(details, ['jumlah_disetujui'])

    # Kurangi stok per barang, urut id barang agar urutan lock konsisten
    per_barang = defaultdict(int)
    for detail in details:
        if detail.jumlah_disetujui > 0:
            per_barang[detail.barang_id] += detail.jumlah_disetujui
    for barang_id in sorted(per_barang):
        decrement_stock(
            barang_id,
            per_barang[barang_id],
            user=verifikator,
            permintaan=permintaan,
            catatan=f"Pengeluaran untuk permintaan #{permintaan.pk}",
        )

    permintaan.status = derive_status(keputusan, [(d.jumlah_diminta, d.jumlah_disetujui) for d in details])
    permintaan.verifikator = verifikator
    permintaan.tanggal_verifikasi = timezone.now()
    permintaan.catatan_verifikasi = catatan_verifikasi or None
    permintaan.save(update_fields=['status', 'verifikator', 'tanggal_verifikasi', 'catatan_verifikasi', 'updated_at'])

    logger.info(
        "Permintaan #%s diverifikasi oleh %s: %s (keputusan %s)",
        permintaan.pk, verifikator.username, permintaan.status, keputusan,
    )
    return permintaan
