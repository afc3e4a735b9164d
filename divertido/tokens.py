from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional

class TokenType(Enum):
    # Literals
    NUMBER = auto()
    IDENTIFIER = auto()
    STRING = auto()

    # Keywords
    LET = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    NIL = auto()
    TRUE = auto()
    FALSE = auto()
    PRINT = auto()

    # Single-character tokens
    OPEN_PAREN = auto()     # (
    CLOSE_PAREN = auto()    # )
    OPEN_CURLY = auto()     # {
    CLOSE_CURLY = auto()    # }
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULTIPLICATION = auto() # *
    DIVISION = auto()       # /
    MODULO = auto()         # %
    COMMA = auto()          # ,
    SEMICOLON = auto()      # ;

    # One or two character tokens
    EQUAL = auto()          # =
    EQUAL_EQUAL = auto()    # ==
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=
    BITWISE_AND = auto()    # &
    AND = auto()            # && and
    BITWISE_OR = auto()     # |
    OR = auto()             # || or

    # End of file
    EOF = auto()


@dataclass(frozen=True)
class Token:
    token_type: TokenType
    lexeme: str
    literal: Optional[Any]
    line: int

    def __str__(self) -> str:
        return f"Token(type={self.token_type.name}, lexeme='{self.lexeme}', literal={self.literal}, line={self.line})"

# Mapping keywords to their token types
keywords = {
    "let": TokenType.LET,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "nil": TokenType.NIL,
    "print": TokenType.PRINT,
    "and": TokenType.AND,
    "or": TokenType.OR,
}

# Literal values baked into keyword tokens
keyword_literals = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}
