# apps/pathway_quizzes/urls.py
from django.urls import path
from .views import public_quiz

urlpatterns = [
    path("quiz/<str:token>", public_quiz, name="public-quiz"),
]
