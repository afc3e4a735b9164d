from . import ast_nodes as ast
from . values import stringify


class AstPrinter:
    """
    A utility class to print the AST in a readable Lisp-like format.
    This is extremely useful for debugging the parser.
    """
    def print_program(self, statements: list[ast.Stmt]) -> str:
        lines = []
        for stmt in statements:
            lines.append(self.print_stmt(stmt))
        return "\n".join(lines)

    def print_stmt(self, stmt: ast.Stmt) -> str:
        match stmt:
            case ast.Expression(expression=expression):
                return self._parenthesize("expr_stmt", expression)
            case ast.Let(name=name, initializer=initializer):
                return self._parenthesize(f"let {name.lexeme}", initializer)
            case ast.Assign(name=name, value=value):
                return self._parenthesize(f"assign {name.lexeme}", value)
            case ast.Block(statements=statements):
                lines = ["(block"]
                for statement in statements:
                    lines.append(f"  {self.print_stmt(statement)}")
                lines.append(")")
                return "\n".join(lines)
            case ast.If(condition=condition, then_branch=then_branch, else_branch=else_branch):
                parts = ["(if ", self.print_expr(condition), " ", self.print_stmt(then_branch)]
                if else_branch is not None:
                    parts.append(" else ")
                    parts.append(self.print_stmt(else_branch))
                parts.append(")")
                return "".join(parts)
            case ast.While(condition=condition, body=body):
                return f"(while {self.print_expr(condition)} {self.print_stmt(body)})"
            case ast.Print(expressions=expressions):
                return self._parenthesize("print", *expressions)
        raise TypeError(f"Unknown statement node: {stmt!r}")

    def print_expr(self, expr: ast.Expr) -> str:
        match expr:
            case ast.Literal(value=value):
                if isinstance(value, str): return f'"{value}"'
                return stringify(value)
            case ast.Variable(name=name):
                return name.lexeme
            case ast.Grouping(expression=inner):
                return self._parenthesize("group", inner)
            case ast.Unary(operator=operator, right=right):
                return self._parenthesize(operator.lexeme, right)
            case ast.Binary(left=left, operator=operator, right=right):
                return self._parenthesize(operator.lexeme, left, right)
        raise TypeError(f"Unknown expression node: {expr!r}")

    # --- Helper Method ---

    def _parenthesize(self, name: str, *parts: ast.Expr) -> str:
        """Helper to format a node and its children."""
        result = [f"({name}"]
        for part in parts:
            result.append(f" {self.print_expr(part)}")
        result.append(")")
        return "".join(result)
