from tracegen_core.exceptions.tracegen_exception import TracegenException


class ShapeMismatchException(TracegenException):
    """Exception raised when a client interface method cannot be instrumented.

    Only the methods of machine generated RPC clients are supported. A
    qualifying interface declaring any other method aborts the generation,
    a partially instrumented client is never emitted.

    Attributes
    ----------
    message : str
        What part of the signature did not match
    interface : str
        Name of the client interface
    method : str
        Name of the offending method
    """

    def __init__(self, message: str, interface: str, method: str):
        self.interface = interface
        self.method = method
        super().__init__(message)

    def __str__(self) -> str:
        return (
            f'Failed to parse interface method {self.interface}.{self.method}, '
            f'is the input file a connectrpc generation? {self.message}'
        )
