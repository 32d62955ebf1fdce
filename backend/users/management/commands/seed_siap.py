# backend/users/management/commands/seed_siap.py
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from barang.models import Barang, MutasiStok
from permintaan.models import Permintaan, DetailPermintaan

User = get_user_model()

SEED_USERS = [
    {'username': 'admin', 'password': 'admin123', 'nama': 'Admin SIAP', 'role': 'admin', 'unit_kerja': 'Sistem Administrator'},
    {'username': 'budi', 'password': 'budi123', 'nama': 'Budi Setiawan', 'role': 'pegawai', 'unit_kerja': 'Seksi Statistik Sosial'},
    {'username': 'sari', 'password': 'sari123', 'nama': 'Sari Indah', 'role': 'pegawai', 'unit_kerja': 'Seksi Statistik Produksi'},
]

SEED_BARANG = [
    ('ATK001', 'Pulpen Standard', 'ATK', 50, 'Pcs', 10),
    ('ATK002', 'Pensil 2B', 'ATK', 100, 'Pcs', 20),
    ('ATK003', 'Penghapus Karet', 'ATK', 30, 'Pcs', 5),
    ('ATK004', 'Spidol Whiteboard', 'ATK', 15, 'Pcs', 5),
    ('ATK005', 'Stapler', 'ATK', 8, 'Pcs', 2),
    ('KTB001', 'Kertas HVS A4 80gr', 'Kertas & Buku', 25, 'Rim', 5),
    ('KTB002', 'Kertas HVS F4 80gr', 'Kertas & Buku', 3, 'Rim', 5),
    ('KTB003', 'Buku Tulis 38 Lembar', 'Kertas & Buku', 40, 'Pcs', 10),
]


class Command(BaseCommand):
    help = 'Mengisi data awal SIAP: akun admin/pegawai dan daftar barang'

    def add_arguments(self, parser):
        parser.add_argument(
            '--flush',
            action='store_true',
            help='Hapus data permintaan, barang, dan user non-superuser sebelum seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['flush']:
            # Urutan mengikuti foreign key (PROTECT)
            MutasiStok.objects.all().delete()
            DetailPermintaan.objects.all().delete()
            Permintaan.objects.all().delete()
            Barang.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()
            self.stdout.write(self.style.WARNING("Data permintaan, barang, dan user dikosongkan."))

        users_created = 0
        for data in SEED_USERS:
            data = dict(data)
            password = data.pop('password')
            user, created = User.objects.get_or_create(username=data['username'], defaults=data)
            if created:
                user.set_password(password)
                user.save(update_fields=['password'])
                users_created += 1

        barang_created = 0
        for kode, nama, kategori, stok, satuan, ambang in SEED_BARANG:
            barang, created = Barang.objects.get_or_create(
                kode_barang=kode,
                status_aktif=True,
                defaults={
                    'nama_barang': nama,
                    'kategori': kategori,
                    'stok': stok,
                    'satuan': satuan,
                    'ambang_batas_kritis': ambang,
                },
            )
            if created:
                barang_created += 1
                if stok:
                    MutasiStok.objects.create(
                        barang=barang, jumlah=stok, jenis=MutasiStok.Jenis.MASUK,
                        stok_setelah=stok, catatan='Stok awal (seed)',
                    )

        self.stdout.write(self.style.SUCCESS(
            f"Seeding selesai: {users_created} user baru, {barang_created} barang baru."
        ))
