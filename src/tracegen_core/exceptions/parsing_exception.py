from typing import Optional

from tracegen_core.exceptions.tracegen_exception import TracegenException


class ParsingException(TracegenException):
    """Exception raised when a source unit cannot be parsed.

    Attributes
    ----------
    message : str
        Explanation of the parsing error
    filename : str
        Name of the source unit, `STDIN` when read from the standard input
    line : int, optional
        The 1-based line where the first syntax error was found

    Example
    ---------
    try:
        raise ParsingException(
            message="syntax error",
            filename="api.connect.go",
            line=12,
        )
    except ParsingException as e:
        print(e)  # Will print: "Cannot parse api.connect.go:12: syntax error"
    """

    def __init__(
        self,
        message: str,
        filename: str,
        line: Optional[int] = None,
    ):
        """Initialize the parsing error.

        Parameters
        ----------
        message : str
            Human-readable error message
        filename : str
            Name of the source unit
        line : int, optional
            Line of the error, by default None
        """
        self.filename = filename
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        location = self.filename if self.line is None else f'{self.filename}:{self.line}'
        return f'Cannot parse {location}: {self.message}'
