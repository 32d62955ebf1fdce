# backend/barang/admin.py
from django.contrib import admin

from .models import Barang, MutasiStok


@admin.register(Barang)
class BarangAdmin(admin.ModelAdmin):
    list_display = ('kode_barang', 'nama_barang', 'kategori', 'satuan', 'stok', 'ambang_batas_kritis', 'status_aktif')
    list_filter = ('status_aktif', 'kategori')
    search_fields = ('kode_barang', 'nama_barang')
    ordering = ('nama_barang',)
    # Stok hanya berubah lewat aplikasi agar setiap mutasi tercatat
    readonly_fields = ('stok', 'created_at', 'updated_at')


@admin.register(MutasiStok)
class MutasiStokAdmin(admin.ModelAdmin):
    list_display = ('waktu', 'barang', 'jenis', 'jumlah', 'stok_setelah', 'user', 'permintaan')
    list_filter = ('jenis', 'waktu')
    search_fields = ('barang__kode_barang', 'barang__nama_barang', 'catatan')
    list_select_related = ('barang', 'user', 'permintaan')
    date_hierarchy = 'waktu'

    # Jurnal hanya dibaca, perubahan stok harus lewat aplikasi
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
