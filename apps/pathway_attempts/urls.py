# apps/pathway_attempts/urls.py
from django.urls import path
from .views import start, answers, submit, results

urlpatterns = [
    path("quiz/<str:token>/start", start, name="attempt-start"),
    path("attempts/<uuid:attempt_id>/answers", answers, name="attempt-answers"),
    path("attempts/<uuid:attempt_id>/submit", submit, name="attempt-submit"),
    path("attempts/<uuid:attempt_id>", results, name="attempt-results"),
]
