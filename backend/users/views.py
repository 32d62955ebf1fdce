# backend/users/views.py
import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from rest_framework import viewsets, status, permissions
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.authtoken.models import Token

from .serializers import (
    UserSerializer,
    ProfileSerializer,
    FotoProfilSerializer,
    LoginSerializer,
)
from .permissions import RequireCapability
from .policy import KELOLA_USER, LIHAT_PROFIL

logger = logging.getLogger(__name__)

User = get_user_model()


class UserViewSet(viewsets.ModelViewSet):
    """
    API endpoint pengelolaan user oleh admin.
    DELETE hanya menonaktifkan akun (status_aktif = false).
    Endpoint /user/profile dan /user/profile/foto untuk user yang sedang login.
    """
    queryset = User.objects.all().order_by('nama', 'id')
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated, RequireCapability]
    lookup_value_regex = r'\d+'
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    action_capabilities = {
        'list': KELOLA_USER,
        'create': KELOLA_USER,
        'retrieve': KELOLA_USER,
        'partial_update': KELOLA_USER,
        'destroy': KELOLA_USER,
        'profile': LIHAT_PROFIL,
        'profile_foto': LIHAT_PROFIL,
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action != 'list':
            return queryset

        params = self.request.query_params
        q = params.get('q')
        if q:
            queryset = queryset.filter(Q(nama__icontains=q) | Q(username__icontains=q))
        role = params.get('role')
        if role:
            queryset = queryset.filter(role=role)
        status_aktif = params.get('status_aktif')
        if status_aktif in ('true', 'false'):
            queryset = queryset.filter(is_active=(status_aktif == 'true'))
        return queryset

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info("User %s (%s) dibuat oleh %s", user.username, user.role, self.request.user.username)

    def perform_destroy(self, instance):
        # Soft delete: akun dinonaktifkan dan tokennya dicabut
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])
        Token.objects.filter(user=instance).delete()
        logger.info("User %s dinonaktifkan oleh %s", instance.username, self.request.user.username)

    @action(detail=False, methods=['get', 'patch'], serializer_class=ProfileSerializer)
    def profile(self, request):
        user = request.user
        if request.method == 'GET':
            return Response(self.get_serializer(user).data)

        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data)

    @action(detail=False, methods=['patch'], url_path='profile/foto',
            parser_classes=[MultiPartParser, FormParser], serializer_class=FotoProfilSerializer)
    def profile_foto(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = request.user
        if user.foto:
            user.foto.delete(save=False)
        user.foto = serializer.validated_data['foto']
        user.save(update_fields=['foto', 'updated_at'])
        return Response(ProfileSerializer(user, context=self.get_serializer_context()).data)


# --- View Login ---
class LoginView(APIView):
    """
    API View untuk user login menggunakan username dan password.
    Mengembalikan access token dan ringkasan data user.
    """
    permission_classes = [permissions.AllowAny]
    serializer_class = LoginSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.serializer_class(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        token, created = Token.objects.get_or_create(user=user)
        logger.info("Login berhasil: %s", user.username)
        return Response({
            'access_token': token.key,
            'user': {
                'id': user.id,
                'username': user.username,
                'role': user.role,
                'nama': user.nama,
            },
        }, status=status.HTTP_200_OK)


class LogoutView(APIView):
    """API endpoint untuk logout (menghapus token autentikasi)."""
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, *args, **kwargs):
        Token.objects.filter(user=request.user).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
