import math
import sys
from typing import List, Any, TextIO, Optional

from . import ast_nodes as ast
from . tokens import Token, TokenType
from . errors import DivertidoRuntimeError
from . environment import Environment
from . values import is_number, is_truthy, is_equal, stringify


class Interpreter:
    """
    The Interpreter walks the AST and executes the code.
    Any DivertidoRuntimeError aborts the run and propagates to the caller.
    """
    def __init__(self, output: Optional[TextIO] = None):
        self.environment = Environment()
        self.output = output if output is not None else sys.stdout
        # Line of the last token-bearing node reached, for errors without a token.
        self.line = 1

    def interpret(self, statements: List[ast.Stmt]) -> Environment:
        """The main entry point for the interpreter."""
        try:
            for statement in statements:
                self._execute(statement)
        except RecursionError:
            raise DivertidoRuntimeError("Expression nested too deeply", self.line) from None

        return self.environment

    # --- STATEMENTS ---

    def _execute(self, stmt: ast.Stmt):
        match stmt:
            case ast.Expression(expression=expression):
                self._evaluate(expression)

            case ast.Let(name=name, initializer=initializer):
                self.environment.set(name.lexeme, self._evaluate(initializer))

            case ast.Assign(name=name, value=value_expr):
                value = self._evaluate(value_expr)
                # Assignment only updates names that are already bound.
                self.environment.get(name)
                self.environment.set(name.lexeme, value)

            case ast.Block(statements=statements):
                for statement in statements:
                    self._execute(statement)

            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                if is_truthy(self._evaluate(condition)):
                    self._execute(then_branch)
                elif else_branch is not None:
                    self._execute(else_branch)

            case ast.While(condition=condition, body=body):
                while is_truthy(self._evaluate(condition)):
                    self._execute(body)

            case ast.Print(expressions=expressions):
                text = "".join(stringify(self._evaluate(expr)) for expr in expressions)
                print(text, file=self.output)

            case _:
                raise TypeError(f"Unknown statement node: {stmt!r}")

    # --- EXPRESSIONS ---

    def _evaluate(self, expr: ast.Expr) -> Any:
        match expr:
            case ast.Literal(value=value):
                return value

            case ast.Variable(name=name):
                self.line = name.line
                return self.environment.get(name)

            case ast.Grouping(expression=inner):
                return self._evaluate(inner)

            case ast.Unary(operator=operator, right=right):
                self.line = operator.line
                return self._unary(operator, self._evaluate(right))

            case ast.Binary(left=left, operator=operator, right=right):
                self.line = operator.line
                # Both sides are always evaluated, 'and'/'or' included.
                return self._binary(operator, self._evaluate(left), self._evaluate(right))

            case _:
                raise TypeError(f"Unknown expression node: {expr!r}")

    def _unary(self, operator: Token, right: Any) -> Any:
        if operator.token_type == TokenType.MINUS:
            if is_number(right):
                return -right
            raise self._error(operator, f"Expected number after '-', found '{stringify(right)}'")

        if operator.token_type == TokenType.BANG:
            if isinstance(right, bool):
                return not right
            raise self._error(operator, f"Expected boolean after '!', found '{stringify(right)}'")

        raise self._error(operator, f"Unknown unary operator '{operator.lexeme}'")

    def _binary(self, operator: Token, left: Any, right: Any) -> Any:
        op_type = operator.token_type

        if op_type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if op_type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if op_type == TokenType.AND:
            return is_truthy(left) and is_truthy(right)
        if op_type == TokenType.OR:
            return is_truthy(left) or is_truthy(right)

        if op_type == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise self._mismatch(operator, left, right, "'number + number' or 'string + string'")

        if op_type == TokenType.BITWISE_AND or op_type == TokenType.BITWISE_OR:
            if not (self._is_integral(left) and self._is_integral(right)):
                raise self._mismatch(operator, left, right, f"'integer {operator.lexeme} integer'")
            if op_type == TokenType.BITWISE_AND:
                result = int(left) & int(right)
            else:
                result = int(left) | int(right)
            try:
                return float(result)
            except OverflowError:
                # Rounds past the largest finite float.
                return math.inf if result > 0 else -math.inf

        self._check_number_operands(operator, left, right)

        if op_type == TokenType.MINUS: return left - right
        if op_type == TokenType.MULTIPLICATION: return left * right
        if op_type == TokenType.DIVISION: return self._divide(left, right)
        if op_type == TokenType.MODULO: return self._modulo(left, right)
        if op_type == TokenType.GREATER: return left > right
        if op_type == TokenType.GREATER_EQUAL: return left >= right
        if op_type == TokenType.LESS: return left < right
        if op_type == TokenType.LESS_EQUAL: return left <= right

        raise self._error(operator, f"Unknown binary operator '{operator.lexeme}'")

    # --- HELPER METHODS FOR RUNTIME CHECKS ---

    def _divide(self, left: float, right: float) -> float:
        """IEEE-754 division: dividing by zero gives an infinity or NaN."""
        if right == 0.0:
            if left == 0.0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    def _modulo(self, left: float, right: float) -> float:
        """Remainder with the sign of the dividend; x % 0 is NaN."""
        if right == 0.0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
            return math.nan
        return math.fmod(left, right)

    def _is_integral(self, value: Any) -> bool:
        return is_number(value) and value.is_integer()

    def _check_number_operands(self, operator: Token, left: Any, right: Any):
        if is_number(left) and is_number(right): return
        raise self._mismatch(operator, left, right, f"'number {operator.lexeme} number'")

    def _mismatch(self, operator: Token, left: Any, right: Any, expected: str) -> DivertidoRuntimeError:
        found = f"{stringify(left)} {operator.lexeme} {stringify(right)}"
        return self._error(operator, f"Expected {expected}, found '{found}'")

    def _error(self, operator: Token, message: str) -> DivertidoRuntimeError:
        return DivertidoRuntimeError(message, operator.line)
