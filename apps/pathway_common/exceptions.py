# apps/pathway_common/exceptions.py


class QuizPlayerError(Exception):
    """Base class for errors returned to the quiz player. Never retried internally."""

    status_code = 400
    code = "error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(QuizPlayerError):
    """Attempt, quiz or question does not exist"""

    status_code = 404
    code = "not_found"
    default_message = "Not found"


class Inactive(QuizPlayerError):
    """Quiz is disabled"""

    status_code = 403
    code = "inactive"
    default_message = "This quiz is not active"


class InvalidReference(QuizPlayerError):
    """Question is not in the attempt's quiz, or option is not on the question"""

    status_code = 400
    code = "invalid_reference"
    default_message = "Invalid question or option reference"


class AlreadySubmitted(QuizPlayerError):
    """Write attempted on a submitted attempt. Callers should fetch the results instead."""

    status_code = 409
    code = "already_submitted"
    default_message = "This quiz attempt has already been submitted"

    def __init__(self, attempt_id=None, message: str | None = None):
        self.attempt_id = attempt_id
        super().__init__(message)


class NotSubmitted(QuizPlayerError):
    """Results requested before submission"""

    status_code = 409
    code = "not_submitted"
    default_message = "This quiz attempt has not been submitted yet"
