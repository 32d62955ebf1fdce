# backend/permintaan/reports.py
import datetime
from io import BytesIO

import pandas as pd
from django.contrib.auth import get_user_model
from django.db.models import Count, F, Min, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from barang.models import Barang
from .models import Permintaan, DetailPermintaan

User = get_user_model()

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'

NAMA_BULAN = (
    'Januari', 'Februari', 'Maret', 'April', 'Mei', 'Juni',
    'Juli', 'Agustus', 'September', 'Oktober', 'November', 'Desember',
)


def format_tanggal(value, with_time=False):
    """Format tanggal gaya Indonesia, mis. '5 Agustus 2025 14:30'."""
    if value is None:
        return '-'
    if isinstance(value, datetime.datetime):
        value = timezone.localtime(value) if timezone.is_aware(value) else value
        text = f"{value.day} {NAMA_BULAN[value.month - 1]} {value.year}"
        if with_time:
            text += f" {value:%H:%M}"
        return text
    return f"{value.day} {NAMA_BULAN[value.month - 1]} {value.year}"


# --- Dashboard ---

def dashboard_statistik():
    return {
        'totalBarang': Barang.objects.count(),
        'totalPermintaanTertunda': Permintaan.objects.filter(status=Permintaan.Status.MENUNGGU).count(),
        'totalBarangKritis': Barang.objects.kritis().count(),
        'totalUser': User.objects.filter(is_active=True).count(),
    }


def _shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def tren_permintaan_bulanan(today=None):
    """Jumlah permintaan per bulan selama 12 bulan terakhir (termasuk bulan ini), bulan kosong diisi 0."""
    today = today or timezone.localdate()
    months = [_shift_month(today.year, today.month, offset) for offset in range(-11, 1)]

    start_year, start_month = months[0]
    start = timezone.make_aware(datetime.datetime(start_year, start_month, 1))
    rows = (
        Permintaan.objects
        .filter(tanggal_permintaan__gte=start)
        .annotate(bulan=TruncMonth('tanggal_permintaan'))
        .values('bulan')
        .annotate(jumlah=Count('id'))
    )
    counts = {}
    for row in rows:
        bulan = row['bulan']
        key = (bulan.year, bulan.month)
        counts[key] = counts.get(key, 0) + row['jumlah']

    return [
        {'bulan': f"{year:04d}-{month:02d}", 'jumlah': counts.get((year, month), 0)}
        for year, month in months
    ]


# --- Laporan penggunaan barang ---

def laporan_penggunaan(start, end, unit_kerja=None):
    """
    Rekap barang yang sudah dikeluarkan (jumlah disetujui > 0) dari permintaan
    Disetujui / Disetujui Sebagian dengan tanggal verifikasi di [start, end].
    """
    queryset = DetailPermintaan.objects.filter(
        permintaan__status__in=[Permintaan.Status.DISETUJUI, Permintaan.Status.DISETUJUI_SEBAGIAN],
        permintaan__tanggal_verifikasi__date__range=(start, end),
        jumlah_disetujui__gt=0,
    )
    if unit_kerja:
        queryset = queryset.filter(permintaan__pemohon__unit_kerja=unit_kerja)

    rows = (
        queryset
        .values(
            nama_barang=F('barang__nama_barang'),
            kode_barang=F('barang__kode_barang'),
            satuan=F('barang__satuan'),
            unit_kerja=F('permintaan__pemohon__unit_kerja'),
        )
        .annotate(
            total_digunakan=Sum('jumlah_disetujui'),
            tanggal_permintaan=Min('permintaan__tanggal_permintaan'),
        )
        .order_by('nama_barang', 'kode_barang', 'unit_kerja')
    )
    return list(rows)


# --- Export xlsx ---

def _to_xlsx(sheets):
    """sheets: list of (nama_sheet, DataFrame, startrow)."""
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
        for sheet_name, df, startrow in sheets:
            df.to_excel(writer, sheet_name=sheet_name, index=False, startrow=startrow)
    return buffer.getvalue()


def laporan_penggunaan_xlsx(start, end, unit_kerja=None):
    rows = laporan_penggunaan(start, end, unit_kerja)
    df = pd.DataFrame(
        [
            {
                'No': nomor,
                'Kode Barang': row['kode_barang'],
                'Nama Barang': row['nama_barang'],
                'Satuan': row['satuan'],
                'Unit Kerja': row['unit_kerja'] or '-',
                'Total Digunakan': row['total_digunakan'],
                'Tanggal Permintaan': format_tanggal(row['tanggal_permintaan']),
            }
            for nomor, row in enumerate(rows, start=1)
        ],
        columns=['No', 'Kode Barang', 'Nama Barang', 'Satuan', 'Unit Kerja', 'Total Digunakan', 'Tanggal Permintaan'],
    )
    periode = pd.DataFrame([
        {'Keterangan': 'Periode', 'Nilai': f"{format_tanggal(start)} s.d. {format_tanggal(end)}"},
        {'Keterangan': 'Unit Kerja', 'Nilai': unit_kerja or 'Semua'},
    ])
    return _to_xlsx([
        ('Laporan Penggunaan', periode, 0),
        ('Laporan Penggunaan', df, len(periode) + 2),
    ])


def bukti_permintaan_xlsx(permintaan):
    pemohon = permintaan.pemohon
    verifikator = permintaan.verifikator
    header = pd.DataFrame([
        {'Keterangan': 'Nomor Permintaan', 'Nilai': permintaan.pk},
        {'Keterangan': 'Tanggal Permintaan', 'Nilai': format_tanggal(permintaan.tanggal_permintaan, with_time=True)},
        {'Keterangan': 'Pemohon', 'Nilai': pemohon.nama},
        {'Keterangan': 'Unit Kerja', 'Nilai': pemohon.unit_kerja or '-'},
        {'Keterangan': 'Status', 'Nilai': permintaan.status},
        {'Keterangan': 'Catatan', 'Nilai': permintaan.catatan or '-'},
        {'Keterangan': 'Verifikator', 'Nilai': verifikator.nama if verifikator else '-'},
        {'Keterangan': 'Tanggal Verifikasi', 'Nilai': format_tanggal(permintaan.tanggal_verifikasi, with_time=True)},
        {'Keterangan': 'Catatan Verifikasi', 'Nilai': permintaan.catatan_verifikasi or '-'},
    ])
    items = pd.DataFrame(
        [
            {
                'No': nomor,
                'Kode Barang': detail.barang.kode_barang,
                'Nama Barang': detail.barang.nama_barang,
                'Satuan': detail.barang.satuan,
                'Jumlah Diminta': detail.jumlah_diminta,
                'Jumlah Disetujui': detail.jumlah_disetujui,
            }
            for nomor, detail in enumerate(permintaan.details.all(), start=1)
        ],
        columns=['No', 'Kode Barang', 'Nama Barang', 'Satuan', 'Jumlah Diminta', 'Jumlah Disetujui'],
    )
    return _to_xlsx([
        ('Bukti Permintaan', header, 0),
        ('Bukti Permintaan', items, len(header) + 2),
    ])
