# apps/pathway_common/tokens.py
import logging
import secrets

from django.conf import settings

log = logging.getLogger(__name__)

MAX_ATTEMPTS = 10


def generate_token(prefix: str | None = None) -> str:
    """URL-safe slug, e.g. "quiz-k3j9x0aqzq2"."""
    prefix = prefix or settings.QUIZ_TOKEN_PREFIX
    return f"{prefix}-{secrets.token_urlsafe(8).lower()}"


def generate_unique_token(model, field: str = "token", prefix: str | None = None) -> str:
    """
    Draw tokens until one is unused on ``model.<field>``.
    Gives up after MAX_ATTEMPTS collisions.
    """
    for _ in range(MAX_ATTEMPTS):
        token = generate_token(prefix)
        if not model.objects.filter(**{field: token}).exists():
            return token
        log.warning("[token] collision on %s.%s: %s", model.__name__, field, token)
    raise RuntimeError(f"Failed to generate a unique {field} after {MAX_ATTEMPTS} attempts")
