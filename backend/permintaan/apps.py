from django.apps import AppConfig


class PermintaanConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'permintaan'
    verbose_name = 'Permintaan Barang'
