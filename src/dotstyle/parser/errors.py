"""Parser error types."""


class ParseError(Exception):
    """Raised when DOT or DSS source cannot be fully consumed by the grammar.

    Attributes:
        line: 1-based line of the offending input, when known.
        column: 1-based column of the offending input, when known.
        expected: Human-readable labels of what would have been accepted there.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        expected: tuple[str, ...] = (),
    ):
        self.line = line
        self.column = column
        self.expected = expected
        super().__init__(message)
