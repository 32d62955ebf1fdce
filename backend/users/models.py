# backend/users/models.py
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.db import models
from django.utils.translation import gettext_lazy as _


# --- CUSTOM USER MANAGER ---
class UserManager(DjangoUserManager):
    """Manager user SIAP: login tetap memakai username, superuser otomatis ber-role admin."""

    def create_user(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('nama', username)
        return super().create_user(username, email, password, **extra_fields)

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.Role.ADMIN)
        extra_fields.setdefault('nama', username)
        return super().create_superuser(username, email, password, **extra_fields)


# --- CUSTOM USER MODEL ---
class User(AbstractUser):
    class Role(models.TextChoices):
        ADMIN = 'admin', _('Administrator')
        PEGAWAI = 'pegawai', _('Pegawai')

    # Nama lengkap disimpan dalam satu kolom
    first_name = None
    last_name = None

    nama = models.CharField(_('nama lengkap'), max_length=100)
    role = models.CharField(
        _('role'),
        max_length=20,
        choices=Role.choices,
        default=Role.PEGAWAI,
    )
    unit_kerja = models.CharField(
        _('unit kerja'),
        max_length=100,
        blank=True,
        null=True,
        help_text="Contoh: Seksi Statistik Sosial",
    )
    # Akun dinonaktifkan, tidak pernah dihapus
    is_active = models.BooleanField(_('status aktif'), default=True, db_column='status_aktif')
    foto = models.FileField(_('foto profil'), upload_to='profile/', blank=True, null=True)
    created_at = models.DateTimeField(_('dibuat pada'), auto_now_add=True)
    updated_at = models.DateTimeField(_('diperbarui pada'), auto_now=True)

    REQUIRED_FIELDS = ['nama']

    objects = UserManager()

    class Meta:
        db_table = 'users'
        verbose_name = _('Pengguna')
        verbose_name_plural = _('Pengguna')
        ordering = ['nama']

    def __str__(self):
        return f"{self.nama} ({self.username})"

    def get_full_name(self):
        return self.nama

    def get_short_name(self):
        return self.nama

    @property
    def status_aktif(self):
        return self.is_active

    # Properties untuk cek role
    @property
    def is_admin(self):
        # Superuser juga dianggap admin dalam konteks aplikasi ini
        return self.role == self.Role.ADMIN or self.is_superuser

    @property
    def is_pegawai(self):
        return self.role == self.Role.PEGAWAI
