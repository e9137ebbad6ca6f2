"""
MiniLang - Tree-walking Evaluator
Executes a parsed program against a mutable variable Environment.

Runtime problems (undefined variable, division by zero, unsupported node)
are reported as diagnostics and replaced by 0; evaluation always continues.
"""

import sys
from typing import Callable, Dict, List, Optional
from .diagnostics import Diagnostics, default_diagnostics
from .ast_nodes import (
    Number, Variable, BinaryOp, Compare, Assignment,
    If, While, Print, Block, ASTNode
)


class Environment:
    """Global variable store for one run. There is no scoping."""

    def __init__(self, values: Optional[Dict[str, int]] = None):
        self._values: Dict[str, int] = dict(values or {})

    def assign(self, name: str, value: int) -> None:
        self._values[name] = value

    def lookup(self, name: str) -> Optional[int]:
        return self._values.get(name)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._values)

    def __contains__(self, name):
        return name in self._values

    def __len__(self):
        return len(self._values)


def _write_stdout(value: int) -> None:
    print(value, file=sys.stdout)


def _divide(left: int, right: int) -> int:
    # Truncates toward zero, unlike Python's floor division
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


_ARITHMETIC = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
}


class Evaluator:
    def __init__(
        self,
        environment: Optional[Environment] = None,
        diagnostics: Optional[Diagnostics] = None,
        output: Optional[Callable[[int], None]] = None,
        record: bool = False,
    ):
        self.environment = environment if environment is not None else Environment()
        self.diagnostics = default_diagnostics(diagnostics)
        self._emit = output or _write_stdout
        # Printed values are kept only on request; loops may print forever
        self.record = record
        self.output: List[int] = []
        self.printed = 0

    # ------------------------------------------------------------------ public

    def run(self, root: ASTNode) -> None:
        """Execute a program (normally the Block returned by the parser)."""
        self._visit(root)

    def evaluate(self, node: ASTNode) -> int:
        """Evaluate a single expression node to an integer."""
        return self._visit(node)

    # ------------------------------------------------------------------ visitor

    def _visit(self, node: ASTNode) -> int:
        method = f"_visit_{type(node).__name__}"
        visitor = getattr(self, method, self._visit_unsupported)
        return visitor(node)

    def _visit_unsupported(self, node) -> int:
        self.diagnostics.report(
            "Runtime",
            f"Unsupported AST node: {type(node).__name__}",
            getattr(node, 'line', 0),
        )
        return 0

    # ------------------------------------------------------------------ statements

    def _visit_Block(self, node: Block) -> int:
        for stmt in node.statements:
            self._visit(stmt)
        return 0

    def _visit_Assignment(self, node: Assignment) -> int:
        value = self._visit(node.expression)
        self.environment.assign(node.name, value)
        return value

    def _visit_Print(self, node: Print) -> int:
        value = self._visit(node.expression)
        self.printed += 1
        if self.record:
            self.output.append(value)
        self._emit(value)
        return value

    def _visit_If(self, node: If) -> int:
        if self._visit(node.condition):
            self._visit(node.then_branch)
        elif node.else_branch is not None:
            self._visit(node.else_branch)
        return 0

    def _visit_While(self, node: While) -> int:
        while self._visit(node.condition):
            self._visit(node.body)
        return 0

    # ------------------------------------------------------------------ expressions

    def _visit_Number(self, node: Number) -> int:
        return int(node.value, 10)

    def _visit_Variable(self, node: Variable) -> int:
        value = self.environment.lookup(node.name)
        if value is None:
            self.diagnostics.report("Runtime", f"Undefined variable: {node.name}", node.line)
            return 0
        return value

    def _visit_BinaryOp(self, node: BinaryOp) -> int:
        # The parser builds left-leaning chains; fold them bottom-up in a
        # loop so a long sum does not cost a stack frame per operator.
        chain = []
        while isinstance(node, BinaryOp):
            chain.append(node)
            node = node.left
        value = self._visit(node)
        for op_node in reversed(chain):
            right = self._visit(op_node.right)
            value = self._apply(op_node, value, right)
        return value

    def _apply(self, node: BinaryOp, left: int, right: int) -> int:
        if node.op == '/':
            if right == 0:
                self.diagnostics.report("Runtime", "Division by zero", node.line)
                return 0
            return _divide(left, right)
        if node.op in _ARITHMETIC:
            return _ARITHMETIC[node.op](left, right)
        self.diagnostics.report("Runtime", f"Unsupported binary operator: {node.op!r}", node.line)
        return 0

    def _visit_Compare(self, node: Compare) -> int:
        left = self._visit(node.left)
        right = self._visit(node.right)
        if node.op == '>=':
            return int(left >= right)
        if node.op == '<=':
            return int(left <= right)
        self.diagnostics.report("Runtime", f"Unsupported comparison operator: {node.op!r}", node.line)
        return 0
