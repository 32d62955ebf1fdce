from django.apps import AppConfig


class BarangConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'barang'
    verbose_name = 'Persediaan Barang'
