from typing import Dict, Any

from . tokens import Token
from . errors import DivertidoRuntimeError

class Environment:
    """
    Stores the variables of a run in a single flat table.
    Blocks, if-branches and while-bodies share it, so a binding made
    anywhere stays visible for the rest of the run.
    """
    def __init__(self):
        self.values: Dict[str, Any] = {}

    def set(self, name: str, value: Any):
        """Binds a name, overwriting any previous value."""
        self.values[name] = value

    def get(self, name: Token) -> Any:
        """Retrieves the value of a variable."""
        if name.lexeme in self.values:
            return self.values[name.lexeme]

        raise DivertidoRuntimeError(f"Variable '{name.lexeme}' not found", name.line)
