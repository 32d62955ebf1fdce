# backend/permintaan/models.py
from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from barang.models import Barang


# --- MODEL PERMINTAAN ---
class Permintaan(models.Model):
    class Status(models.TextChoices):
        MENUNGGU = 'Menunggu', _('Menunggu')
        DISETUJUI = 'Disetujui', _('Disetujui')
        DISETUJUI_SEBAGIAN = 'Disetujui Sebagian', _('Disetujui Sebagian')
        DITOLAK = 'Ditolak', _('Ditolak')

    pemohon = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='permintaan_diajukan',
        on_delete=models.PROTECT,
        db_column='id_user_pemohon',
        verbose_name=_('pemohon'),
    )
    tanggal_permintaan = models.DateTimeField(_('tanggal permintaan'), default=timezone.now)
    status = models.CharField(
        _('status'),
        max_length=20,
        choices=Status.choices,
        default=Status.MENUNGGU,
        db_index=True,
    )
    catatan = models.TextField(_('catatan pemohon'), blank=True, null=True)
    verifikator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name='permintaan_diverifikasi',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        db_column='id_user_verifikator',
        verbose_name=_('verifikator'),
    )
    tanggal_verifikasi = models.DateTimeField(_('tanggal verifikasi'), null=True, blank=True)
    catatan_verifikasi = models.TextField(_('catatan verifikasi'), blank=True, null=True)
    created_at = models.DateTimeField(_('dibuat pada'), auto_now_add=True)
    updated_at = models.DateTimeField(_('diperbarui pada'), auto_now=True)

    class Meta:
        db_table = 'permintaan'
        verbose_name = _('Permintaan Barang')
        verbose_name_plural = _('Permintaan Barang')
        ordering = ['-tanggal_permintaan', '-id']
        constraints = [
            # Data verifikasi terisi jika dan hanya jika status sudah bukan Menunggu
            models.CheckConstraint(
                condition=(
                    Q(status='Menunggu', verifikator__isnull=True, tanggal_verifikasi__isnull=True)
                    | (~Q(status='Menunggu') & Q(verifikator__isnull=False, tanggal_verifikasi__isnull=False))
                ),
                name='permintaan_data_verifikasi_konsisten',
            ),
        ]

    def __str__(self):
        return f"Permintaan #{self.pk} - {self.status}"

    @property
    def is_menunggu(self):
        return self.status == self.Status.MENUNGGU


# --- MODEL DETAIL PERMINTAAN ---
class DetailPermintaan(models.Model):
    permintaan = models.ForeignKey(
        Permintaan,
        related_name='details',
        on_delete=models.CASCADE,
        db_column='id_permintaan',
        verbose_name=_('permintaan'),
    )
    barang = models.ForeignKey(
        Barang,
        related_name='detail_permintaan',
        on_delete=models.PROTECT,
        db_column='id_barang',
        verbose_name=_('barang'),
    )
    jumlah_diminta = models.PositiveIntegerField(_('jumlah diminta'))
    jumlah_disetujui = models.PositiveIntegerField(_('jumlah disetujui'), default=0)

    class Meta:
        db_table = 'detail_permintaan'
        verbose_name = _('Detail Permintaan')
        verbose_name_plural = _('Detail Permintaan')
        ordering = ['id']
        constraints = [
            models.CheckConstraint(condition=Q(jumlah_diminta__gt=0), name='detail_jumlah_diminta_positif'),
            models.CheckConstraint(
                condition=Q(jumlah_disetujui__gte=0) & Q(jumlah_disetujui__lte=F('jumlah_diminta')),
                name='detail_jumlah_disetujui_dalam_batas',
            ),
        ]

    def __str__(self):
        return f"{self.barang_id} x {self.jumlah_diminta} (disetujui {self.jumlah_disetujui})"
