# backend/siap/urls.py
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    # Semua endpoint REST di bawah /api/
    path('api/', include('users.urls')),
    path('api/', include('barang.urls')),
    path('api/', include('permintaan.urls')),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
