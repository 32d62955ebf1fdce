# backend/barang/models.py
from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class BarangQuerySet(models.QuerySet):
    def aktif(self):
        return self.filter(status_aktif=True)

    def kritis(self):
        # Barang aktif dengan stok di bawah atau sama dengan ambang batas
        return self.aktif().filter(stok__lte=F('ambang_batas_kritis'))


# --- MODEL BARANG ---
class Barang(models.Model):
    # kode_barang sengaja tidak unique di level database; keunikan hanya dicek
    # terhadap barang aktif saat create (barang nonaktif boleh memakai kode yang sama)
    kode_barang = models.CharField(_('kode barang'), max_length=20, db_index=True)
    nama_barang = models.CharField(_('nama barang'), max_length=100)
    deskripsi = models.CharField(_('deskripsi'), max_length=255, blank=True, null=True)
    satuan = models.CharField(_('satuan'), max_length=20, help_text="Contoh: pcs, rim, box")
    stok = models.PositiveIntegerField(_('stok'), default=0)
    ambang_batas_kritis = models.PositiveIntegerField(_('ambang batas kritis'), default=0)
    status_aktif = models.BooleanField(_('status aktif'), default=True)
    foto = models.FileField(_('foto'), upload_to='barang/', blank=True, null=True)
    kategori = models.CharField(_('kategori'), max_length=50, blank=True, null=True)
    created_at = models.DateTimeField(_('dibuat pada'), auto_now_add=True)
    updated_at = models.DateTimeField(_('diperbarui pada'), auto_now=True)

    objects = BarangQuerySet.as_manager()

    class Meta:
        db_table = 'barang'
        verbose_name = _('Barang')
        verbose_name_plural = _('Barang')
        ordering = ['nama_barang', 'id']
        constraints = [
            models.CheckConstraint(condition=Q(stok__gte=0), name='barang_stok_tidak_negatif'),
            models.CheckConstraint(condition=Q(ambang_batas_kritis__gte=0), name='barang_ambang_tidak_negatif'),
        ]

    def __str__(self):
        return f"{self.kode_barang} - {self.nama_barang}"

    @property
    def is_stok_kritis(self):
        return self.stok <= self.ambang_batas_kritis


# --- MODEL MUTASI STOK ---
class MutasiStok(models.Model):
    """Jurnal setiap perubahan stok yang lewat ledger."""
    class Jenis(models.TextChoices):
        MASUK = 'MASUK', _('Masuk')
        KELUAR = 'KELUAR', _('Keluar')
        PENYESUAIAN = 'PENYESUAIAN', _('Penyesuaian')

    barang = models.ForeignKey(Barang, related_name='mutasi', on_delete=models.PROTECT, db_column='id_barang', verbose_name=_('barang'))
    jumlah = models.IntegerField(_('jumlah'), help_text="Positif untuk stok masuk, negatif untuk stok keluar")
    jenis = models.CharField(_('jenis mutasi'), max_length=12, choices=Jenis.choices)
    stok_setelah = models.PositiveIntegerField(_('stok setelah mutasi'))
    waktu = models.DateTimeField(_('waktu'), default=timezone.now)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL, db_column='id_user', verbose_name=_('pengguna'))
    permintaan = models.ForeignKey('permintaan.Permintaan', null=True, blank=True, on_delete=models.SET_NULL, db_column='id_permintaan', related_name='mutasi_stok', verbose_name=_('permintaan terkait'))
    catatan = models.TextField(_('catatan'), blank=True, null=True)

    class Meta:
        db_table = 'mutasi_stok'
        verbose_name = _('Mutasi Stok')
        verbose_name_plural = _('Mutasi Stok')
        ordering = ['-waktu', '-id']

    def __str__(self):
        direction = "+" if self.jumlah > 0 else ""
        return f"{self.waktu:%Y-%m-%d %H:%M} - {self.barang_id}: {direction}{self.jumlah} ({self.jenis})"
