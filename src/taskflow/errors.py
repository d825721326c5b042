from __future__ import annotations


class TaskParsingError(ValueError):
    """Base error for the task parsing pipeline; `code` is stable for API clients."""

    code = "TASK_PARSING_ERROR"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code


class InvalidTimePhrase(TaskParsingError):
    code = "INVALID_TIME_PHRASE"


class MissingAnchorTime(TaskParsingError):
    code = "MISSING_PREVIOUS_TIME"


class InvalidHour(TaskParsingError):
    code = "INVALID_HOUR"


class InvalidMinute(TaskParsingError):
    code = "INVALID_MINUTE"


class InvalidDuration(TaskParsingError):
    code = "INVALID_DURATION"


class InvalidTasksArray(TaskParsingError):
    code = "INVALID_TASKS_ARRAY"


class LLMError(RuntimeError):
    """Raised when the language-model provider cannot produce an answer."""
