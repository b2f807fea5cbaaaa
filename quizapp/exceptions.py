class QuizAppError(Exception):
    """Base class for errors raised by the quiz service."""


class NotFoundError(QuizAppError):
    """A quiz, question, category or attempt does not exist."""


class SubmissionValidationError(QuizAppError):
    """The submission payload is malformed. Raised before scoring."""


class InternalConsistencyError(QuizAppError):
    """Stored quiz data is broken, e.g. a question without a correct option or a quiz without questions."""


class PersistenceError(QuizAppError):
    """Writing quiz or user statistics failed."""
