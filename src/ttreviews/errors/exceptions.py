"""Custom exception classes for the TT Reviews moderation service."""


class TTReviewsError(Exception):
    """Base exception for TT Reviews."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(TTReviewsError):
    """Request or payload validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(TTReviewsError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class ConflictError(TTReviewsError):
    """Resource state conflict."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(code, message, status_code=409)


class AlreadyApprovedError(ConflictError):
    """The moderator already approved this submission."""

    def __init__(self):
        super().__init__("You have already approved this submission", code="ALREADY_APPROVED")


class AlreadyFinalizedError(ConflictError):
    """The submission reached a terminal status and accepts no more decisions."""

    def __init__(self, status: str):
        super().__init__(f"Submission has already been {status}", code="ALREADY_FINALIZED")
        self.details = {"status": status}


class InvalidTransitionError(ConflictError):
    """A status change not allowed by the moderation state machine."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot move submission from '{current}' to '{target}'",
            code="INVALID_TRANSITION",
        )


class StorageError(TTReviewsError):
    """Persistence call failed. The user-facing message hides the cause."""

    def __init__(self, cause: Exception | None = None):
        super().__init__("STORAGE_ERROR", "Internal error processing moderation action")
        self.cause = cause


class AssetCleanupError(TTReviewsError):
    """Deleting an uploaded asset failed. Logged, never surfaced."""

    def __init__(self, key: str, reason: str):
        super().__init__("ASSET_CLEANUP_ERROR", f"Failed to delete asset '{key}': {reason}")
        self.key = key
