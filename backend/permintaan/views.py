# backend/permintaan/views.py
from django.http import HttpResponse
from rest_framework import viewsets, mixins, status, permissions
from rest_framework.decorators import action
from rest_framework.response import Response

from users.permissions import RequireCapability
from users.policy import (
    Allowed, check,
    BUAT_PERMINTAAN, VERIFIKASI_PERMINTAAN, LIHAT_PERMINTAAN_MASUK,
    LIHAT_LAPORAN, LIHAT_RIWAYAT,
)
from . import reports, services
from .models import Permintaan
from .serializers import (
    PermintaanSerializer,
    PermintaanCreateSerializer,
    VerifikasiSerializer,
)


class PermintaanViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """Endpoint permintaan barang: pengajuan oleh pegawai, verifikasi oleh admin."""
    queryset = Permintaan.objects.select_related(
        'pemohon', 'verifikator'
    ).prefetch_related(
        'details__barang'
    ).all()
    serializer_class = PermintaanSerializer
    permission_classes = [permissions.IsAuthenticated, RequireCapability]
    lookup_value_regex = r'\d+'
    action_capabilities = {
        'create': BUAT_PERMINTAAN,
        'retrieve': LIHAT_RIWAYAT,
        'riwayat': LIHAT_RIWAYAT,
        'bukti': LIHAT_RIWAYAT,
        'masuk': LIHAT_PERMINTAAN_MASUK,
        'semua': LIHAT_PERMINTAAN_MASUK,
        'verifikasi': VERIFIKASI_PERMINTAAN,
        'dashboard_statistik': LIHAT_LAPORAN,
        'dashboard_tren': LIHAT_LAPORAN,
    }

    def get_serializer_class(self):
        if self.action == 'create': return PermintaanCreateSerializer
        if self.action == 'verifikasi': return VerifikasiSerializer
        return PermintaanSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        # Selain yang boleh melihat semua permintaan, user hanya melihat miliknya sendiri
        if isinstance(check(self.request.user, LIHAT_PERMINTAAN_MASUK), Allowed):
            return queryset
        return queryset.filter(pemohon=self.request.user)

    def _detail_response(self, permintaan, status_code=status.HTTP_200_OK):
        permintaan = self.get_queryset().get(pk=permintaan.pk)
        return Response(PermintaanSerializer(permintaan, context=self.get_serializer_context()).data, status=status_code)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        permintaan = services.create_request(
            request.user,
            serializer.validated_data['items'],
            catatan=serializer.validated_data.get('catatan'),
        )
        return self._detail_response(permintaan, status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def riwayat(self, request):
        queryset = self.get_queryset().filter(pemohon=request.user).order_by('-tanggal_permintaan', '-id')
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'])
    def masuk(self, request):
        queryset = self.get_queryset().filter(status=Permintaan.Status.MENUNGGU).order_by('tanggal_permintaan', 'id')
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'], url_path='all')
    def semua(self, request):
        queryset = self.get_queryset().order_by('-tanggal_permintaan', '-id')
        status_filter = request.query_params.get('status')
        if status_filter:
            queryset = queryset.filter(status=status_filter)
        page = self.paginate_queryset(queryset)
        return self.get_paginated_response(self.get_serializer(page, many=True).data)

    @action(detail=True, methods=['patch'])
    def verifikasi(self, request, pk=None):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        permintaan = services.verify_request(
            int(pk),
            request.user,
            data['keputusan'],
            data['items'],
            catatan_verifikasi=data.get('catatan_verifikasi'),
        )
        return self._detail_response(permintaan)

    @action(detail=True, methods=['get'])
    def bukti(self, request, pk=None):
        permintaan = self.get_object()
        content = reports.bukti_permintaan_xlsx(permintaan)
        response = HttpResponse(content, content_type=reports.XLSX_CONTENT_TYPE)
        tanggal = permintaan.tanggal_permintaan.strftime('%Y%m%d')
        response['Content-Disposition'] = f'attachment; filename="bukti_permintaan_{permintaan.pk}_{tanggal}.xlsx"'
        return response

    @action(detail=False, methods=['get'], url_path='dashboard/statistik')
    def dashboard_statistik(self, request):
        return Response(reports.dashboard_statistik())

    @action(detail=False, methods=['get'], url_path='dashboard/tren-permintaan')
    def dashboard_tren(self, request):
        return Response(reports.tren_permintaan_bulanan())
