import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Barang',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kode_barang', models.CharField(db_index=True, max_length=20, verbose_name='kode barang')),
                ('nama_barang', models.CharField(max_length=100, verbose_name='nama barang')),
                ('deskripsi', models.CharField(blank=True, max_length=255, null=True, verbose_name='deskripsi')),
                ('satuan', models.CharField(help_text='Contoh: pcs, rim, box', max_length=20, verbose_name='satuan')),
                ('stok', models.PositiveIntegerField(default=0, verbose_name='stok')),
                ('ambang_batas_kritis', models.PositiveIntegerField(default=0, verbose_name='ambang batas kritis')),
                ('status_aktif', models.BooleanField(default=True, verbose_name='status aktif')),
                ('foto', models.FileField(blank=True, null=True, upload_to='barang/', verbose_name='foto')),
                ('kategori', models.CharField(blank=True, max_length=50, null=True, verbose_name='kategori')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='dibuat pada')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='diperbarui pada')),
            ],
            options={
                'verbose_name': 'Barang',
                'verbose_name_plural': 'Barang',
                'db_table': 'barang',
                'ordering': ['nama_barang', 'id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('stok__gte', 0)), name='barang_stok_tidak_negatif'),
                    models.CheckConstraint(condition=models.Q(('ambang_batas_kritis__gte', 0)), name='barang_ambang_tidak_negatif'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MutasiStok',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('jumlah', models.IntegerField(help_text='Positif untuk stok masuk, negatif untuk stok keluar', verbose_name='jumlah')),
                ('jenis', models.CharField(choices=[('MASUK', 'Masuk'), ('KELUAR', 'Keluar'), ('PENYESUAIAN', 'Penyesuaian')], max_length=12, verbose_name='jenis mutasi')),
                ('stok_setelah', models.PositiveIntegerField(verbose_name='stok setelah mutasi')),
                ('waktu', models.DateTimeField(default=django.utils.timezone.now, verbose_name='waktu')),
                ('catatan', models.TextField(blank=True, null=True, verbose_name='catatan')),
                ('barang', models.ForeignKey(db_column='id_barang', on_delete=django.db.models.deletion.PROTECT, related_name='mutasi', to='barang.barang', verbose_name='barang')),
                ('user', models.ForeignKey(blank=True, db_column='id_user', null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL, verbose_name='pengguna')),
            ],
            options={
                'verbose_name': 'Mutasi Stok',
                'verbose_name_plural': 'Mutasi Stok',
                'db_table': 'mutasi_stok',
                'ordering': ['-waktu', '-id'],
            },
        ),
    ]
