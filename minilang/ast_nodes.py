"""
MiniLang - AST Node Definitions
Closed set of immutable node kinds produced by the parser.

Every node records the line of its first token. ``line`` takes no part in
equality, so two trees parsed from differently laid out sources compare equal.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""


@dataclass(frozen=True)
class Number(ASTNode):
    """Integer literal, kept as its source digits until evaluation."""
    value: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Variable(ASTNode):
    """A variable reference."""
    name: str
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """left (+|-|*|/) right"""
    op: str
    left: "Node"
    right: "Node"
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Compare(ASTNode):
    """left (>=|<=) right, evaluates to 1 or 0"""
    op: str
    left: "Node"
    right: "Node"
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Assignment(ASTNode):
    """identifier = expression"""
    name: str
    expression: "Node"
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class If(ASTNode):
    """if (condition) then_branch [else else_branch]"""
    condition: "Node"
    then_branch: "Node"
    else_branch: Optional["Node"] = None
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class While(ASTNode):
    """while (condition) body"""
    condition: "Node"
    body: "Node"
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Print(ASTNode):
    """print expression"""
    expression: "Node"
    line: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Block(ASTNode):
    """{ statement* } -- also the root of every program."""
    statements: Tuple["Node", ...] = ()
    line: int = field(default=0, compare=False)


Node = Union[Number, Variable, BinaryOp, Compare, Assignment, If, While, Print, Block]
