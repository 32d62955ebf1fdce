# backend/barang/management/commands/import_barang.py
import logging
from pathlib import Path

import pandas as pd
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from rest_framework.exceptions import ValidationError

from barang.models import Barang, MutasiStok
from barang.serializers import BarangSerializer
from barang.services import increment_stock, record_mutation

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['Kode_Barang', 'Nama_Barang', 'Satuan', 'Stok', 'Ambang_Batas_Kritis']


def _cell(row, column):
    value = row.get(column)
    if value is None or pd.isna(value):
        return ''
    return str(value).strip()


def _cell_int(row, column):
    text = _cell(row, column)
    if not text:
        return 0
    number = float(text.replace(',', '.'))
    if not number.is_integer():
        raise ValueError(f"Kolom {column} harus bilangan bulat, didapat '{text}'.")
    return int(number)


class Command(BaseCommand):
    help = (
        'Impor barang dari file Excel (.xlsx) atau CSV. '
        'Kolom: Kode_Barang, Nama_Barang, Satuan, Stok, Ambang_Batas_Kritis, [Kategori], [Deskripsi]. '
        'Barang aktif dengan kode yang sama akan ditambah stoknya.'
    )

    def add_arguments(self, parser):
        parser.add_argument('filepath', type=str, help='Path file .xlsx atau .csv')
        parser.add_argument('--sep', default=';', help="Separator untuk file CSV (default ';')")

    def read_file(self, filepath, sep):
        try:
            if filepath.suffix.lower() in ('.xlsx', '.xlsm'):
                return pd.read_excel(filepath, engine='openpyxl', dtype=str)
            return pd.read_csv(filepath, sep=sep, dtype=str)
        except Exception as e:
            raise CommandError(f"Gagal membaca file {filepath.name}: {e}") from e

    @transaction.atomic
    def handle(self, *args, **options):
        filepath = Path(options['filepath'])
        if not filepath.is_file():
            raise CommandError(f"File tidak ditemukan: {filepath}")

        df = self.read_file(filepath, options['sep'])
        missing_cols = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing_cols:
            raise CommandError(f"Kolom berikut tidak ditemukan di file: {', '.join(missing_cols)}")

        self.stdout.write(f"Memproses {len(df)} baris dari {filepath.name}...")

        created_count = 0
        restocked_count = 0
        error_rows = []

        for index, row in df.iterrows():
            row_num = index + 2  # baris 1 adalah header
            try:
                kode = _cell(row, 'Kode_Barang')
                stok = _cell_int(row, 'Stok')

                existing = Barang.objects.aktif().filter(kode_barang=kode).first() if kode else None
                if existing is not None:
                    if stok < 0:
                        raise ValueError(f"Stok untuk kode {kode} tidak boleh negatif, didapat {stok}.")
                    if stok > 0:
                        increment_stock(existing.pk, stok, catatan=f"Impor dari {filepath.name}")
                        restocked_count += 1
                    continue

                serializer = BarangSerializer(data={
                    'kode_barang': kode,
                    'nama_barang': _cell(row, 'Nama_Barang'),
                    'satuan': _cell(row, 'Satuan'),
                    'stok': stok,
                    'ambang_batas_kritis': _cell_int(row, 'Ambang_Batas_Kritis'),
                    'kategori': _cell(row, 'Kategori') or None,
                    'deskripsi': _cell(row, 'Deskripsi') or None,
                })
                serializer.is_valid(raise_exception=True)
                barang = serializer.save()
                if barang.stok:
                    record_mutation(barang, barang.stok, MutasiStok.Jenis.MASUK, catatan=f"Stok awal impor {filepath.name}")
                created_count += 1
            except ValidationError as e:
                error_rows.append((row_num, e.detail))
            except ValueError as e:
                error_rows.append((row_num, str(e)))

        if error_rows:
            # Semua baris dibatalkan (transaction.atomic) jika ada satu saja yang gagal
            for row_num, error in error_rows:
                self.stderr.write(f"Baris {row_num}: {error}")
            raise CommandError(f"Gagal memproses {len(error_rows)} baris. Tidak ada data yang disimpan.")

        logger.info("Impor %s: %s barang baru, %s ditambah stok", filepath.name, created_count, restocked_count)
        self.stdout.write(self.style.SUCCESS(
            f"Berhasil: {created_count} barang baru, {restocked_count} barang ditambah stoknya."
        ))
