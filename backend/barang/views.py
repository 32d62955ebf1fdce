# backend/barang/views.py
import logging

from django.db.models import Q
from django.http import HttpResponse
from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response

from permintaan import reports
from users.permissions import RequireCapability
from users.policy import KELOLA_BARANG, LIHAT_BARANG_TERSEDIA, LIHAT_LAPORAN
from . import services
from .models import Barang, MutasiStok
from .serializers import (
    BarangSerializer,
    BarangRingkasSerializer,
    TambahStokSerializer,
    MutasiStokSerializer,
    LaporanPenggunaanQuerySerializer,
)

logger = logging.getLogger(__name__)


class BarangViewSet(viewsets.ModelViewSet):
    """
    API endpoint pengelolaan barang (admin).
    DELETE hanya menonaktifkan barang (status_aktif = false).
    """
    queryset = Barang.objects.all()
    serializer_class = BarangSerializer
    permission_classes = [permissions.IsAuthenticated, RequireCapability]
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    action_capabilities = {
        'list': KELOLA_BARANG,
        'create': KELOLA_BARANG,
        'retrieve': KELOLA_BARANG,
        'partial_update': KELOLA_BARANG,
        'destroy': KELOLA_BARANG,
        'tambah_stok': KELOLA_BARANG,
        'mutasi': KELOLA_BARANG,
        'stok_kritis': KELOLA_BARANG,
        'available': LIHAT_BARANG_TERSEDIA,
        'notifikasi_stok_kritis': LIHAT_BARANG_TERSEDIA,
        'laporan_penggunaan': LIHAT_LAPORAN,
        'laporan_penggunaan_export': LIHAT_LAPORAN,
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        params = self.request.query_params
        q = params.get('q')
        if q:
            queryset = queryset.filter(Q(nama_barang__icontains=q) | Q(kode_barang__icontains=q))
        status_aktif = params.get('status_aktif')
        if status_aktif in ('true', 'false'):
            queryset = queryset.filter(status_aktif=(status_aktif == 'true'))
        if params.get('stok_kritis') == 'true':
            queryset = queryset.kritis()
        kategori = params.get('kategori')
        if kategori:
            queryset = queryset.filter(kategori=kategori)
        return queryset

    def paginate_queryset(self, queryset):
        # ?paginate=false mengembalikan seluruh data tanpa pagination
        if self.request.query_params.get('paginate') == 'false':
            return None
        return super().paginate_queryset(queryset)

    def perform_create(self, serializer):
        barang = services.save_barang(serializer, user=self.request.user)
        logger.info("Barang %s dibuat oleh %s", barang.kode_barang, self.request.user.username)

    def perform_update(self, serializer):
        services.save_barang(serializer, user=self.request.user)

    def perform_destroy(self, instance):
        services.deactivate_barang(instance)

    @action(detail=True, methods=['post'], url_path='tambah-stok', serializer_class=TambahStokSerializer)
    def tambah_stok(self, request, pk=None):
        barang = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        barang = services.increment_stock(
            barang.pk,
            serializer.validated_data['jumlah'],
            user=request.user,
            catatan=serializer.validated_data.get('catatan'),
        )
        return Response(BarangSerializer(barang, context=self.get_serializer_context()).data)

    @action(detail=True, methods=['get'], serializer_class=MutasiStokSerializer)
    def mutasi(self, request, pk=None):
        barang = self.get_object()
        queryset = MutasiStok.objects.filter(barang=barang).select_related('user')
        page = self.paginate_queryset(queryset)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'], serializer_class=BarangRingkasSerializer)
    def available(self, request):
        queryset = Barang.objects.aktif().order_by('nama_barang', 'id')
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'], url_path='stok-kritis')
    def stok_kritis(self, request):
        queryset = Barang.objects.kritis().order_by('stok', 'nama_barang')
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'], url_path='dashboard/notifikasi-stok-kritis',
            serializer_class=BarangRingkasSerializer)
    def notifikasi_stok_kritis(self, request):
        queryset = Barang.objects.kritis().order_by('stok', 'nama_barang')
        return Response(self.get_serializer(queryset, many=True).data)

    def _laporan_params(self, request):
        query = LaporanPenggunaanQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        data = query.validated_data
        return data['start'], data['end'], data.get('unit_kerja') or None

    @action(detail=False, methods=['get'], url_path='laporan-penggunaan')
    def laporan_penggunaan(self, request):
        start, end, unit_kerja = self._laporan_params(request)
        return Response(reports.laporan_penggunaan(start, end, unit_kerja))

    @action(detail=False, methods=['get'], url_path='laporan-penggunaan/export')
    def laporan_penggunaan_export(self, request):
        start, end, unit_kerja = self._laporan_params(request)
        content = reports.laporan_penggunaan_xlsx(start, end, unit_kerja)
        response = HttpResponse(content, content_type=reports.XLSX_CONTENT_TYPE, status=status.HTTP_200_OK)
        response['Content-Disposition'] = f'attachment; filename="laporan_penggunaan_{start:%Y%m%d}_{end:%Y%m%d}.xlsx"'
        return response
