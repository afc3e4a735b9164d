class DivertidoError(Exception):
    """
    Base class for every error the pipeline can raise.
    Carries the error kind, a message and the source line it was found on.
    """
    kind = "Error"

    def __init__(self, message: str, line: int):
        self.message = message
        self.line = line
        super().__init__(message)

    def __str__(self) -> str:
        return f"[line {self.line}] {self.kind}: {self.message}."


class LexingError(DivertidoError):
    """Malformed input character or token."""
    kind = "LexingError"


class ParsingError(DivertidoError):
    """Grammar violation found by the parser."""
    kind = "ParsingError"


class DivertidoRuntimeError(DivertidoError):
    """Type mismatch or unresolved identifier found while evaluating."""
    kind = "RuntimeError"
