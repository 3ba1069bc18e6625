# apps/pathway_quizzes/views.py
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.response import Response
from rest_framework import status, permissions

from apps.pathway_common.exceptions import QuizPlayerError
from apps.pathway_common.utils import error_response

from .selectors import get_public_quiz
from .serializers import QuizPublicSerializer


@api_view(["GET"])
@authentication_classes([])
@permission_classes([permissions.AllowAny])
def public_quiz(request, token):
    """
    /api/public/quiz/<token>

    Quiz with both language variants of every question and option.
    """
    try:
        quiz = get_public_quiz(token)
    except QuizPlayerError as e:
        return error_response(e)

    data = QuizPublicSerializer(quiz).data
    return Response(data, status=status.HTTP_200_OK)
