class PersistenceError(Exception):
    """Raised by repository implementations when the underlying store fails."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} failed: {cause.__class__.__name__}")
