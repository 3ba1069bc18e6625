# apps/pathway_common/utils.py
from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.conf import settings
from rest_framework.response import Response

from .exceptions import QuizPlayerError


@dataclass
class ApiResponse:
    ok: bool
    message: Optional[str] = None
    data: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"ok": self.ok}
        if self.message:
            out["message"] = self.message
        if self.data is not None:
            out["data"] = self.data
        return out


def error_response(exc: QuizPlayerError) -> Response:
    """Render a quiz player error with its HTTP status."""
    body = ApiResponse(False, exc.message, data={"code": exc.code}).to_dict()
    return Response(body, status=exc.status_code)


#
# Languages
#


def supported_languages() -> list[str]:
    return list(settings.QUIZ_LANGUAGES)


def primary_language() -> str:
    return supported_languages()[0]


def resolve_language(requested) -> str:
    """
    Unknown, missing or non-string language values fall back to the primary language.
    Never raises.
    """
    if not isinstance(requested, str):
        return primary_language()
    code = requested.strip().lower()
    if code in supported_languages():
        return code
    return primary_language()


def localized_text(text: str, text_alt: str | None, language: str) -> str:
    """Secondary-language text when requested and non-empty, primary text otherwise."""
    if language != primary_language() and text_alt and text_alt.strip():
        return text_alt
    return text
