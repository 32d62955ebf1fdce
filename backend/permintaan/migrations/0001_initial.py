import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('barang', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Permintaan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tanggal_permintaan', models.DateTimeField(default=django.utils.timezone.now, verbose_name='tanggal permintaan')),
                ('status', models.CharField(choices=[('Menunggu', 'Menunggu'), ('Disetujui', 'Disetujui'), ('Disetujui Sebagian', 'Disetujui Sebagian'), ('Ditolak', 'Ditolak')], db_index=True, default='Menunggu', max_length=20, verbose_name='status')),
                ('catatan', models.TextField(blank=True, null=True, verbose_name='catatan pemohon')),
                ('tanggal_verifikasi', models.DateTimeField(blank=True, null=True, verbose_name='tanggal verifikasi')),
                ('catatan_verifikasi', models.TextField(blank=True, null=True, verbose_name='catatan verifikasi')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='dibuat pada')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='diperbarui pada')),
                ('pemohon', models.ForeignKey(db_column='id_user_pemohon', on_delete=django.db.models.deletion.PROTECT, related_name='permintaan_diajukan', to=settings.AUTH_USER_MODEL, verbose_name='pemohon')),
                ('verifikator', models.ForeignKey(blank=True, db_column='id_user_verifikator', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='permintaan_diverifikasi', to=settings.AUTH_USER_MODEL, verbose_name='verifikator')),
            ],
            options={
                'verbose_name': 'Permintaan Barang',
                'verbose_name_plural': 'Permintaan Barang',
                'db_table': 'permintaan',
                'ordering': ['-tanggal_permintaan', '-id'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(('status', 'Menunggu'), ('tanggal_verifikasi__isnull', True), ('verifikator__isnull', True)),
                            models.Q(models.Q(('status', 'Menunggu'), _negated=True), models.Q(('tanggal_verifikasi__isnull', False), ('verifikator__isnull', False))),
                            _connector='OR',
                        ),
                        name='permintaan_data_verifikasi_konsisten',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='DetailPermintaan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('jumlah_diminta', models.PositiveIntegerField(verbose_name='jumlah diminta')),
                ('jumlah_disetujui', models.PositiveIntegerField(default=0, verbose_name='jumlah disetujui')),
                ('barang', models.ForeignKey(db_column='id_barang', on_delete=django.db.models.deletion.PROTECT, related_name='detail_permintaan', to='barang.barang', verbose_name='barang')),
                ('permintaan', models.ForeignKey(db_column='id_permintaan', on_delete=django.db.models.deletion.CASCADE, related_name='details', to='permintaan.permintaan', verbose_name='permintaan')),
            ],
            options={
                'verbose_name': 'Detail Permintaan',
                'verbose_name_plural': 'Detail Permintaan',
                'db_table': 'detail_permintaan',
                'ordering': ['id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('jumlah_diminta__gt', 0)), name='detail_jumlah_diminta_positif'),
                    models.CheckConstraint(condition=models.Q(('jumlah_disetujui__gte', 0), ('jumlah_disetujui__lte', models.F('jumlah_diminta'))), name='detail_jumlah_disetujui_dalam_batas'),
                ],
            },
        ),
    ]
