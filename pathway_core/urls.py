# pathway_core/urls.py
from django.contrib import admin
from django.urls import path, include
from django.http import JsonResponse


def ping(request):
    return JsonResponse({"status": "ok", "app": "pathway", "version": "dev"})


urlpatterns = [
    path("admin/", admin.site.urls),

    #  Public quiz player
    path("api/public/", include("apps.pathway_quizzes.urls")),
    path("api/public/", include("apps.pathway_attempts.urls")),

    #  Health check
    path("ping/", ping),
]
