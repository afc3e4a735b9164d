from dataclasses import dataclass
from typing import List, Any, Optional, Union

from . tokens import Token


# --- Expression Nodes ---

@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Variable:
    name: Token


@dataclass(frozen=True)
class Unary:
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Binary:
    left: 'Expr'
    operator: Token
    right: 'Expr'


@dataclass(frozen=True)
class Grouping:
    expression: 'Expr'


Expr = Union[Literal, Variable, Unary, Binary, Grouping]


# --- Statement Nodes ---

@dataclass(frozen=True)
class Expression:
    expression: Expr


@dataclass(frozen=True)
class Let:
    name: Token
    initializer: Expr


@dataclass(frozen=True)
class Assign:
    name: Token
    value: Expr


@dataclass(frozen=True)
class Block:
    statements: List['Stmt']


@dataclass(frozen=True)
class If:
    condition: Expr
    then_branch: Block
    # Either a Block or a chained If for 'else if'.
    else_branch: Optional[Union[Block, 'If']]


@dataclass(frozen=True)
class While:
    condition: Expr
    body: Block


@dataclass(frozen=True)
class Print:
    expressions: List[Expr]


Stmt = Union[Expression, Let, Assign, Block, If, While, Print]
