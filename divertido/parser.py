from typing import List

from . tokens import Token, TokenType
from . errors import ParsingError
from . import ast_nodes as ast


class Parser:
    """
    The Parser consumes a stream of tokens and produces an Abstract Syntax Tree (AST).
    There is no error recovery: the first ParsingError aborts the parse.
    """
    def __init__(self, tokens: List[Token]):
        self.tokens: List[Token] = tokens
        self.current: int = 0

    def parse(self) -> List[ast.Stmt]:
        """The main entry point, parses a list of statements."""
        statements: List[ast.Stmt] = []
        try:
            while not self._is_at_end():
                statements.append(self._statement())
        except RecursionError:
            raise ParsingError("Expression nested too deeply", self._peek().line) from None
        return statements

    # --- GRAMMAR RULE IMPLEMENTATIONS ---

    def _statement(self) -> ast.Stmt:
        """Dispatches on the current token to pick a statement rule."""
        if self._match(TokenType.LET):
            return self._let_statement()
        if self._check(TokenType.IDENTIFIER):
            return self._assignment_statement()
        if self._check(TokenType.OPEN_CURLY):
            return self._block()
        if self._match(TokenType.IF):
            return self._if_statement()
        if self._match(TokenType.WHILE):
            return self._while_statement()
        if self._match(TokenType.PRINT):
            return self._print_statement()
        return self._expression_statement()

    def _let_statement(self) -> ast.Stmt:
        """Parses a variable declaration: 'let' IDENTIFIER '=' expression ';'"""
        name = self._consume(TokenType.IDENTIFIER, "Expected identifier after 'let'")
        self._consume(TokenType.EQUAL, "Expected '=' after identifier")
        initializer = self._expression()
        self._consume(TokenType.SEMICOLON, "Expected ';' after variable declaration")
        return ast.Let(name, initializer)

    def _assignment_statement(self) -> ast.Stmt:
        """Parses an assignment: IDENTIFIER '=' expression ';'"""
        name = self._advance()
        self._consume(TokenType.EQUAL, "Expected '=' after identifier")
        value = self._expression()
        self._consume(TokenType.SEMICOLON, "Expected ';' after assignment")
        return ast.Assign(name, value)

    def _block(self) -> ast.Block:
        """Parses a block of statements: '{' statement* '}'"""
        self._consume(TokenType.OPEN_CURLY, "Expected '{' before block")

        statements: List[ast.Stmt] = []
        while not self._check(TokenType.CLOSE_CURLY) and not self._is_at_end():
            statements.append(self._statement())

        self._consume(TokenType.CLOSE_CURLY, "Expected '}' after block")
        return ast.Block(statements)

    def _if_statement(self) -> ast.If:
        """Parses an if-else statement. 'else if' chains nest another If."""
        condition = self._expression()
        then_branch = self._block()

        else_branch = None
        if self._match(TokenType.ELSE):
            if self._match(TokenType.IF):
                else_branch = self._if_statement()
            else:
                else_branch = self._block()

        return ast.If(condition, then_branch, else_branch)

    def _while_statement(self) -> ast.Stmt:
        condition = self._expression()
        body = self._block()
        return ast.While(condition, body)

    def _print_statement(self) -> ast.Stmt:
        """Parses a print statement: 'print' expression (',' expression)* ';'"""
        expressions = [self._expression()]
        while self._match(TokenType.COMMA):
            expressions.append(self._expression())

        self._consume(TokenType.SEMICOLON, "Expected ';' after print values")
        return ast.Print(expressions)

    def _expression_statement(self) -> ast.Stmt:
        """Parses an expression statement: expression ';'"""
        expr = self._expression()
        self._consume(TokenType.SEMICOLON, "Expected ';' after expression")
        return ast.Expression(expr)

    def _expression(self) -> ast.Expr:
        """Parses an expression. Entry point for all expression rules."""
        return self._or()

    def _binary_layer(self, operand, *types: TokenType) -> ast.Expr:
        """Parses a left-associative run of binary operators sharing one precedence level."""
        expr = operand()
        while self._match(*types):
            operator = self._previous()
            right = operand()
            expr = ast.Binary(expr, operator, right)
        return expr

    def _or(self) -> ast.Expr:
        return self._binary_layer(self._and, TokenType.OR)

    def _and(self) -> ast.Expr:
        return self._binary_layer(self._comparison, TokenType.AND)

    def _comparison(self) -> ast.Expr:
        """Parses equality and ordering comparisons."""
        return self._binary_layer(
            self._term,
            TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL,
            TokenType.GREATER, TokenType.GREATER_EQUAL,
            TokenType.LESS, TokenType.LESS_EQUAL,
        )

    def _term(self) -> ast.Expr:
        """Parses addition and subtraction expressions (+, -)."""
        return self._binary_layer(self._factor, TokenType.PLUS, TokenType.MINUS)

    def _factor(self) -> ast.Expr:
        """Parses multiplicative and bitwise expressions (*, /, %, &, |)."""
        return self._binary_layer(
            self._unary,
            TokenType.MULTIPLICATION, TokenType.DIVISION, TokenType.MODULO,
            TokenType.BITWISE_AND, TokenType.BITWISE_OR,
        )

    def _unary(self) -> ast.Expr:
        """Parses unary expressions (-x, !y). The operand is a primary, not another unary."""
        if self._match(TokenType.MINUS, TokenType.BANG):
            operator = self._previous()
            right = self._primary()
            return ast.Unary(operator, right)
        return self._primary()

    def _primary(self) -> ast.Expr:
        """Parses primary expressions (literals, identifiers, grouping)."""
        if self._match(TokenType.NUMBER, TokenType.STRING,
                       TokenType.TRUE, TokenType.FALSE, TokenType.NIL):
            return ast.Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return ast.Variable(self._previous())

        if self._match(TokenType.OPEN_PAREN):
            expr = self._expression()
            self._consume(TokenType.CLOSE_PAREN, "Expected ')' after expression")
            return ast.Grouping(expr)

        raise self._error(self._peek(), "Expected expression")

    # --- TOKEN CONSUMPTION & UTILITY METHODS ---

    def _match(self, *types: TokenType) -> bool:
        """
        Checks if the current token has any of the given types.
        If so, it consumes the token and returns True.
        """
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Checks if the current token is of the given type without consuming it."""
        if self._is_at_end():
            return False
        return self._peek().token_type == token_type

    def _advance(self) -> Token:
        """Consumes the current token and returns it."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        """Checks if we have run out of tokens to parse."""
        return self._peek().token_type == TokenType.EOF

    def _peek(self) -> Token:
        """Returns the current token without consuming it."""
        return self.tokens[self.current]

    def _previous(self) -> Token:
        """Returns the most recently consumed token."""
        return self.tokens[self.current - 1]

    # --- ERROR HANDLING ---

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """
        Consumes a token of a specific type. If the next token is not of the
        expected type, it raises a ParsingError.
        """
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message)

    def _error(self, token: Token, message: str) -> ParsingError:
        """Creates a ParsingError naming the offending token."""
        if token.token_type == TokenType.EOF:
            found = "end of input"
        else:
            found = token.lexeme
        return ParsingError(f"{message}, found '{found}'", token.line)
