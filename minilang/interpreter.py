"""
MiniLang - Interpreter Orchestrator
Runs lexing, parsing and evaluation in sequence.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .lexer import tokenize, format_tokens
from .parser import Parser
from .evaluator import Evaluator, Environment
from .diagnostics import Diagnostics
from .ast_nodes import Block


class InterpretationError(Exception):
    """Unified error for sources that cannot be run."""

    def __init__(self, message: str, diagnostics: Optional[Diagnostics] = None):
        super().__init__(message)
        self.diagnostics = diagnostics


@dataclass
class InterpretationResult:
    ast: Block
    diagnostics: Diagnostics
    environment: Environment = field(default_factory=Environment)
    output: List[int] = field(default_factory=list)
    ast_json: Optional[str] = None


def interpret_source(
    source: str,
    debug: bool = False,
    dump_tokens: bool = False,
    emit_ast: bool = False,
    diagnostics: Optional[Diagnostics] = None,
    output: Optional[Callable[[int], None]] = None,
    record: bool = True,
) -> InterpretationResult:
    """
    Run MiniLang source text.

    Parameters
    ----------
    source       : MiniLang source code string
    debug        : print each phase summary to stderr
    dump_tokens  : print the token listing to stderr before parsing
    emit_ast     : stop after parsing and fill ``ast_json`` instead of running
    diagnostics  : collector for problems (default: echo to stderr)
    output       : callback for each printed value (default: stdout)
    record       : keep printed values and diagnostics on the result; pass
                   False for programs that may print without end

    Raises
    ------
    InterpretationError when the program fails to parse, or nests deeper
    than the Python stack allows
    """
    def log(msg):
        if debug:
            print(f"[MiniLang] {msg}", file=sys.stderr)

    if diagnostics is None:
        diagnostics = Diagnostics(echo=True, record=record)

    # ── Phase 1: Lexical Analysis ─────────────────────────────────────────────
    log("Phase 1: Lexical analysis")
    tokens = tokenize(source, diagnostics)
    log(f"  {len(tokens)-1} tokens produced")

    if dump_tokens:
        print(format_tokens(tokens), file=sys.stderr)

    # ── Phase 2: Parsing ──────────────────────────────────────────────────────
    log("Phase 2: Parsing")
    parser = Parser(tokens, diagnostics)
    try:
        ast = parser.parse_program()
    except RecursionError:
        diagnostics.report("Parse", "Program nested too deeply", parser.current_line)
        raise InterpretationError("Parsing failed", diagnostics) from None
    if parser.failed:
        raise InterpretationError("Parsing failed", diagnostics)

    log(f"  {len(ast.statements)} top-level statements")

    result = InterpretationResult(ast=ast, diagnostics=diagnostics)
    if emit_ast:
        try:
            result.ast_json = ast_to_json(ast)
        except RecursionError:
            diagnostics.report("Parse", "Program nested too deeply to serialize")
            raise InterpretationError("AST serialization failed", diagnostics) from None
        return result

    # ── Phase 3: Evaluation ───────────────────────────────────────────────────
    log("Phase 3: Evaluation")
    evaluator = Evaluator(result.environment, diagnostics, output, record=record)
    try:
        evaluator.run(ast)
    except RecursionError:
        diagnostics.report("Runtime", "Program nested too deeply to evaluate")
        raise InterpretationError("Evaluation failed", diagnostics) from None
    result.output = evaluator.output

    log(f"  {evaluator.printed} values printed, {len(diagnostics)} diagnostics")
    return result


def interpret_file(input_path: str, **kwargs) -> InterpretationResult:
    """
    Read a MiniLang source file and run it.

    Bytes that are not UTF-8 reach the lexer as lone surrogates and are
    reported there as unknown characters.
    """
    with open(input_path, "r", encoding="utf-8", errors="surrogateescape") as f:
        source = f.read()

    if not source.strip():
        raise InterpretationError("Empty or invalid source file")

    return interpret_source(source, **kwargs)


# ── AST serialization (for --emit-ast) ────────────────────────────────────────

def ast_to_json(node) -> str:
    return json.dumps(ast_to_dict(node), indent=2)


def ast_to_dict(node):
    if node is None:
        return None
    if isinstance(node, (list, tuple)):
        return [ast_to_dict(n) for n in node]
    if not hasattr(node, '__dataclass_fields__'):
        return node  # primitive
    d = {"_type": type(node).__name__}
    for field_name in node.__dataclass_fields__:
        d[field_name] = ast_to_dict(getattr(node, field_name))
    return d
