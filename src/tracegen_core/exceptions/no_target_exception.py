from tracegen_core.exceptions.tracegen_exception import TracegenException


class NoTargetException(TracegenException):
    """Exception raised when a source unit declares no RPC client interface."""

    def __init__(self, message: str, filename: str):
        self.filename = filename
        super().__init__(message)

    def __str__(self) -> str:
        return f'{self.message} in {self.filename}'
