class TracegenException(Exception):
    """Base class of the errors that abort code generation.

    Attributes
    ----------
    message : str
        Explanation of the error
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
