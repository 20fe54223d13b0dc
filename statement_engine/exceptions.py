class StatementEngineError(Exception):
    """Base exception for all statement_engine errors."""


class UnknownCategoryError(StatementEngineError):
    """Raised when a file is offered for a category outside the fixed set."""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown financial category: {category!r}")


class DocumentProcessingError(StatementEngineError):
    """Raised when the remote processing endpoint cannot handle a document.

    ``status_code`` is None for transport failures (connection refused,
    timeout) and the HTTP status otherwise.
    """

    def __init__(self, file_name: str, status_code: int | None, message: str):
        self.file_name = file_name
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class SessionStorageError(StatementEngineError):
    """Raised when a value in session-scoped storage cannot be decoded."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Session storage entry {key!r} is unreadable: {message}")
