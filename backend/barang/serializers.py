# backend/barang/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from users.serializers import BasicUserSerializer
from .models import Barang, MutasiStok

KODE_BARANG_PATTERN = r'^[A-Za-z0-9\-]+$'


class BarangSerializer(serializers.ModelSerializer):
    kode_barang = serializers.RegexField(
        KODE_BARANG_PATTERN,
        max_length=20,
        error_messages={'invalid': _('Kode barang hanya boleh berisi huruf, angka, dan tanda minus.')},
    )
    is_stok_kritis = serializers.BooleanField(read_only=True)

    class Meta:
        model = Barang
        fields = (
            'id', 'kode_barang', 'nama_barang', 'deskripsi', 'satuan',
            'stok', 'ambang_batas_kritis', 'is_stok_kritis',
            'status_aktif', 'foto', 'kategori',
            'created_at', 'updated_at',
        )
        read_only_fields = ('created_at', 'updated_at')

    def validate_kode_barang(self, value):
        # Kode hanya harus unik di antara barang yang masih aktif
        duplikat = Barang.objects.aktif().filter(kode_barang=value)
        if self.instance is not None:
            duplikat = duplikat.exclude(pk=self.instance.pk)
        if duplikat.exists():
            raise serializers.ValidationError(_('Kode barang sudah digunakan oleh barang aktif lain.'))
        return value

    def validate(self, attrs):
        # Mengaktifkan kembali barang lama juga tidak boleh membuat kode ganda
        if self.instance is not None and 'kode_barang' not in attrs:
            menjadi_aktif = attrs.get('status_aktif') is True and not self.instance.status_aktif
            if menjadi_aktif and Barang.objects.aktif().filter(
                kode_barang=self.instance.kode_barang,
            ).exclude(pk=self.instance.pk).exists():
                raise serializers.ValidationError({
                    'kode_barang': [_('Kode barang sudah digunakan oleh barang aktif lain.')],
                })
        return attrs


class BarangRingkasSerializer(serializers.ModelSerializer):
    """Info barang di relasi (detail permintaan, daftar barang tersedia)."""
    class Meta:
        model = Barang
        fields = ('id', 'kode_barang', 'nama_barang', 'satuan', 'stok', 'ambang_batas_kritis', 'kategori', 'foto')
        read_only_fields = fields


class TambahStokSerializer(serializers.Serializer):
    jumlah = serializers.IntegerField(min_value=1)
    catatan = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)


class MutasiStokSerializer(serializers.ModelSerializer):
    user = BasicUserSerializer(read_only=True)
    jenis_display = serializers.CharField(source='get_jenis_display', read_only=True)

    class Meta:
        model = MutasiStok
        fields = ('id', 'barang', 'jumlah', 'jenis', 'jenis_display', 'stok_setelah',
                  'waktu', 'user', 'permintaan', 'catatan')
        read_only_fields = fields


class LaporanPenggunaanQuerySerializer(serializers.Serializer):
    start = serializers.DateField(input_formats=['%Y-%m-%d'])
    end = serializers.DateField(input_formats=['%Y-%m-%d'])
    unit_kerja = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if attrs['start'] > attrs['end']:
            raise serializers.ValidationError({'start': _('Tanggal awal tidak boleh melebihi tanggal akhir.')})
        return attrs
