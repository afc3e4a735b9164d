from typing import List, Any

from . tokens import Token, TokenType, keywords, keyword_literals
from . errors import LexingError


class Lexer:
    """
    The Lexer class, also known as a scanner or tokenizer.
    It takes the source code as a string and breaks it into a list of tokens.
    The first invalid character or unterminated string raises a LexingError.
    """
    def __init__(self, source: str):
        self.source: str = source
        self.tokens: List[Token] = []
        self.start: int = 0
        self.current: int = 0
        self.line: int = 1

    def scan_tokens(self) -> List[Token]:
        """Scans the entire source code and returns a list of tokens ending in EOF."""
        while not self._is_at_end():
            self.start = self.current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def _is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self.current]
        self.current += 1
        return char

    def _add_token(self, token_type: TokenType, literal: Any = None):
        text = self.source[self.start:self.current]
        self.tokens.append(Token(token_type, text, literal, self.line))

    def _match(self, expected: str) -> bool:
        if self._is_at_end():
            return False
        if self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def _peek(self) -> str:
        if self._is_at_end():
            return '\0'
        return self.source[self.current]

    def _error(self, message: str) -> LexingError:
        return LexingError(message, self.line)

    def _string(self):
        while self._peek() != '"' and not self._is_at_end():
            if self._peek() == '\n':
                self.line += 1
            self._advance()

        if self._is_at_end():
            raise self._error("Unterminated string")

        self._advance()  # The closing quote.

        # Trim the surrounding quotes.
        value = self.source[self.start + 1:self.current - 1]
        self._add_token(TokenType.STRING, value)

    def _number(self):
        while self._is_digit(self._peek()):
            self._advance()

        text = self.source[self.start:self.current]
        try:
            value = float(text)
        except ValueError:
            raise self._error(f"Invalid number '{text}'")

        self._add_token(TokenType.NUMBER, value)

    def _identifier(self):
        while self._is_alpha(self._peek()):
            self._advance()

        text = self.source[self.start:self.current]
        token_type = keywords.get(text, TokenType.IDENTIFIER)
        self._add_token(token_type, keyword_literals.get(token_type))

    def _scan_token(self):
        char = self._advance()

        # Single-character tokens
        if char == '(': self._add_token(TokenType.OPEN_PAREN)
        elif char == ')': self._add_token(TokenType.CLOSE_PAREN)
        elif char == '{': self._add_token(TokenType.OPEN_CURLY)
        elif char == '}': self._add_token(TokenType.CLOSE_CURLY)
        elif char == '+': self._add_token(TokenType.PLUS)
        elif char == '-': self._add_token(TokenType.MINUS)
        elif char == '*': self._add_token(TokenType.MULTIPLICATION)
        elif char == '%': self._add_token(TokenType.MODULO)
        elif char == ',': self._add_token(TokenType.COMMA)
        elif char == ';': self._add_token(TokenType.SEMICOLON)

        # One or two character tokens
        elif char == '!': self._add_token(TokenType.BANG_EQUAL if self._match('=') else TokenType.BANG)
        elif char == '=': self._add_token(TokenType.EQUAL_EQUAL if self._match('=') else TokenType.EQUAL)
        elif char == '<': self._add_token(TokenType.LESS_EQUAL if self._match('=') else TokenType.LESS)
        elif char == '>': self._add_token(TokenType.GREATER_EQUAL if self._match('=') else TokenType.GREATER)
        elif char == '&': self._add_token(TokenType.AND if self._match('&') else TokenType.BITWISE_AND)
        elif char == '|': self._add_token(TokenType.OR if self._match('|') else TokenType.BITWISE_OR)

        # Comments
        elif char == '/':
            if self._match('/'):
                # A comment goes until the end of the line.
                while self._peek() != '\n' and not self._is_at_end():
                    self._advance()
            else:
                self._add_token(TokenType.DIVISION)

        # Whitespace
        elif char in [' ', '\r', '\t']:
            pass
        elif char == '\n':
            self.line += 1

        # Literals
        elif char == '"': self._string()
        elif self._is_digit(char): self._number()
        elif self._is_alpha(char): self._identifier()

        else:
            raise self._error(f"Invalid character '{char}'")

    # Helper methods
    def _is_digit(self, char: str) -> bool:
        return '0' <= char <= '9'

    def _is_alpha(self, char: str) -> bool:
        return ('a' <= char <= 'z') or ('A' <= char <= 'Z')
