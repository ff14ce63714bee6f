from django.contrib import admin
from django.urls import path


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("syncrm/django/admin/", admin.site.urls),
]
