"""
MiniLang v0.1 - a tiny imperative language with integer arithmetic,
assignment, comparisons, if/else, while loops, blocks and print.
"""

from .lexer import Token, TokenType, tokenize
from .parser import Parser, parse
from .evaluator import Environment, Evaluator
from .diagnostics import Diagnostic, Diagnostics
from .interpreter import (
    InterpretationError, InterpretationResult, interpret_source, interpret_file
)

__version__ = "0.1.0"
