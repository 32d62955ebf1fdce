# backend/permintaan/admin.py
from django.contrib import admin

from .models import Permintaan, DetailPermintaan


class DetailPermintaanInline(admin.TabularInline):
    model = DetailPermintaan
    extra = 0
    fields = ('barang', 'jumlah_diminta', 'jumlah_disetujui')
    readonly_fields = ('jumlah_disetujui',)
    autocomplete_fields = ('barang',)

    # Baris permintaan yang sudah diverifikasi tidak boleh diubah lagi
    def get_readonly_fields(self, request, obj=None):
        if obj is not None and not obj.is_menunggu:
            return self.fields
        return super().get_readonly_fields(request, obj)

    def has_add_permission(self, request, obj=None):
        if obj is not None and not obj.is_menunggu:
            return False
        return super().has_add_permission(request, obj)

    def has_change_permission(self, request, obj=None):
        if obj is not None and not obj.is_menunggu:
            return False
        return super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        if obj is not None and not obj.is_menunggu:
            return False
        return super().has_delete_permission(request, obj)


@admin.register(Permintaan)
class PermintaanAdmin(admin.ModelAdmin):
    list_display = ('id', 'pemohon', 'tanggal_permintaan', 'status', 'verifikator', 'tanggal_verifikasi')
    list_filter = ('status', 'tanggal_permintaan')
    search_fields = ('pemohon__nama', 'pemohon__username', 'catatan')
    list_select_related = ('pemohon', 'verifikator')
    date_hierarchy = 'tanggal_permintaan'
    inlines = [DetailPermintaanInline]
    # Verifikasi hanya lewat API agar stok ikut disesuaikan
    readonly_fields = ('status', 'verifikator', 'tanggal_verifikasi', 'catatan_verifikasi', 'created_at', 'updated_at')
