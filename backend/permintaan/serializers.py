# backend/permintaan/serializers.py
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from barang.serializers import BarangRingkasSerializer
from users.serializers import BasicUserSerializer
from .models import Permintaan, DetailPermintaan
from .services import KEPUTUSAN_CHOICES


class DetailPermintaanSerializer(serializers.ModelSerializer):
    barang = BarangRingkasSerializer(read_only=True)

    class Meta:
        model = DetailPermintaan
        fields = ('id', 'barang', 'jumlah_diminta', 'jumlah_disetujui')
        read_only_fields = fields


class PermintaanSerializer(serializers.ModelSerializer):
    pemohon = BasicUserSerializer(read_only=True)
    verifikator = BasicUserSerializer(read_only=True)
    details = DetailPermintaanSerializer(many=True, read_only=True)

    class Meta:
        model = Permintaan
        fields = (
            'id', 'pemohon', 'tanggal_permintaan', 'status', 'catatan',
            'verifikator', 'tanggal_verifikasi', 'catatan_verifikasi',
            'details', 'created_at', 'updated_at',
        )
        read_only_fields = fields


# --- Input serializers ---

class ItemPermintaanSerializer(serializers.Serializer):
    id_barang = serializers.IntegerField(min_value=1)
    jumlah = serializers.IntegerField(min_value=1)


class PermintaanCreateSerializer(serializers.Serializer):
    items = ItemPermintaanSerializer(many=True)
    catatan = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError(_('Permintaan harus berisi minimal satu barang.'))
        return value


class ItemVerifikasiSerializer(serializers.Serializer):
    id_detail = serializers.IntegerField()
    jumlah_disetujui = serializers.IntegerField(min_value=0)


class VerifikasiSerializer(serializers.Serializer):
    keputusan = serializers.ChoiceField(choices=KEPUTUSAN_CHOICES)
    # Daftar kosong ditolak oleh service agar status permintaan dicek lebih dulu
    items = ItemVerifikasiSerializer(many=True, allow_empty=True)
    catatan_verifikasi = serializers.CharField(required=False, allow_blank=True, allow_null=True)
