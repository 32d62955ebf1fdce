# backend/users/serializers.py
import os

from django.conf import settings
from django.contrib.auth import get_user_model, authenticate
from django.utils.translation import gettext_lazy as _
from rest_framework import serializers, exceptions

User = get_user_model()

FOTO_CONTENT_TYPES = ('image/jpeg', 'image/png', 'image/jpg', 'image/webp')
FOTO_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.webp')


class UserSerializer(serializers.ModelSerializer):
    """Serializer user untuk pengelolaan oleh admin."""
    role_display = serializers.CharField(source='get_role_display', read_only=True)
    status_aktif = serializers.BooleanField(source='is_active', required=False)
    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=6,
        style={'input_type': 'password'},
        trim_whitespace=False,
    )

    class Meta:
        model = User
        fields = (
            'id', 'username', 'password', 'nama',
            'role', 'role_display', 'unit_kerja',
            'status_aktif', 'foto',
            'created_at', 'updated_at',
        )
        read_only_fields = ('foto', 'created_at', 'updated_at')

    def validate(self, attrs):
        # Password wajib saat membuat user baru
        if self.instance is None and not attrs.get('password'):
            raise serializers.ValidationError({'password': _('Password wajib diisi untuk user baru.')})
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        username = validated_data.pop('username')
        return User.objects.create_user(username=username, password=password, **validated_data)

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class BasicUserSerializer(serializers.ModelSerializer):
    """Serializer minimal untuk info user di relasi."""
    class Meta:
        model = User
        fields = ('id', 'username', 'nama', 'unit_kerja')


class ProfileSerializer(UserSerializer):
    """Profil milik user yang sedang login; role dan status tidak bisa diubah di sini."""
    class Meta(UserSerializer.Meta):
        read_only_fields = ('role', 'status_aktif', 'foto', 'created_at', 'updated_at')

    def get_fields(self):
        fields = super().get_fields()
        fields['status_aktif'].read_only = True
        return fields


class FotoProfilSerializer(serializers.Serializer):
    foto = serializers.FileField()

    def validate_foto(self, value):
        content_type = getattr(value, 'content_type', '')
        extension = os.path.splitext(value.name)[1].lower()
        if content_type not in FOTO_CONTENT_TYPES or extension not in FOTO_EXTENSIONS:
            raise serializers.ValidationError(_('Format foto harus JPG, JPEG, PNG, atau WEBP.'))
        if value.size > settings.FOTO_PROFIL_MAX_SIZE:
            raise serializers.ValidationError(_('Ukuran foto maksimal 2 MB.'))
        return value


class LoginSerializer(serializers.Serializer):
    """Serializer untuk login menggunakan username dan password."""
    username = serializers.CharField(label=_("Username"), write_only=True)
    password = serializers.CharField(
        label=_("Password"),
        style={'input_type': 'password'},
        trim_whitespace=False,
        write_only=True,
    )

    def validate(self, attrs):
        username = attrs.get('username')
        password = attrs.get('password')

        user = authenticate(request=self.context.get('request'),
                            username=username, password=password)

        # authenticate() mengembalikan None untuk kredensial salah maupun akun nonaktif
        if not user:
            user_obj = User.objects.filter(username=username).first()
            if user_obj is not None and not user_obj.is_active and user_obj.check_password(password):
                raise exceptions.AuthenticationFailed(_('Akun pengguna tidak aktif.'))
            raise exceptions.AuthenticationFailed(_('Username atau password salah.'))

        attrs['user'] = user
        return attrs
