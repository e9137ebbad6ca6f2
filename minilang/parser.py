"""
MiniLang - Recursive Descent Parser
Converts a token stream into an AST rooted at a Block.

Errors never raise. A missing punctuation token is reported and skipped
over; an unexpected token yields ``None`` for the subtree being parsed, and
``None`` propagates upward so that no half-built node is ever returned. A
``None`` statement stops the parse and sets ``Parser.failed``.
"""

from typing import List, Optional
from .lexer import Token, TokenType
from .diagnostics import Diagnostics, default_diagnostics
from .ast_nodes import (
    Number, Variable, BinaryOp, Compare, Assignment,
    If, While, Print, Block, Node
)


_ADDITIVE = {TokenType.PLUS: '+', TokenType.MINUS: '-'}
_MULTIPLICATIVE = {TokenType.MULTIPLY: '*', TokenType.DIVIDE: '/'}
_COMPARISON = {TokenType.GEQ: '>=', TokenType.LEQ: '<='}


class Parser:
    def __init__(self, tokens: List[Token], diagnostics: Optional[Diagnostics] = None):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with an EOF token")
        self._tokens = tokens
        self._pos = 0
        self.diagnostics = default_diagnostics(diagnostics)
        self.failed = False

    @property
    def current_line(self) -> int:
        return self._peek().line

    # ------------------------------------------------------------------ helpers

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        tok = self._tokens[self._pos]
        if self._pos < len(self._tokens) - 1:
            self._pos += 1
        return tok

    def _match(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _expect(self, ttype: TokenType, message: str) -> Token:
        tok = self._peek()
        if tok.type != ttype:
            self._error(f"{message}, found {self._describe(tok)}", tok)
        return self._advance()

    def _error(self, message: str, tok: Token) -> None:
        self.diagnostics.report("Parse", message, tok.line)

    @staticmethod
    def _describe(tok: Token) -> str:
        if tok.value:
            return f"{tok.type.name} ({tok.value!r})"
        return tok.type.name

    # ------------------------------------------------------------------ public

    def parse_program(self) -> Block:
        stmts = []
        while not self._match(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is None:
                self.failed = True
                break
            stmts.append(stmt)
        return Block(tuple(stmts), line=1)

    # ------------------------------------------------------------------ statements

    def parse_statement(self) -> Optional[Node]:
        tok = self._peek()

        if tok.type == TokenType.IDENTIFIER:
            return self._parse_assignment()
        if tok.type == TokenType.IF:
            return self._parse_conditional()
        if tok.type == TokenType.WHILE:
            return self._parse_while()
        if tok.type == TokenType.LBRACE:
            return self._parse_block()
        if tok.type == TokenType.PRINT:
            return self._parse_print()
        if tok.type in (TokenType.NUMBER, TokenType.LPAREN):
            return self.parse_expression()

        self._error(f"Unexpected token {self._describe(tok)} in statement", tok)
        return None

    def _parse_assignment(self) -> Optional[Assignment]:
        name_tok = self._advance()
        self._expect(TokenType.ASSIGN, "Expected '=' after identifier")
        value = self.parse_expression()
        if value is None:
            return None
        return Assignment(name_tok.value, value, line=name_tok.line)

    def _parse_body(self) -> Optional[Node]:
        """Branch or loop body: a block, or any single statement."""
        if self._match(TokenType.LBRACE):
            return self._parse_block()
        return self.parse_statement()

    def _parse_conditional(self) -> Optional[If]:
        if_tok = self._advance()  # consume 'if'
        self._expect(TokenType.LPAREN, "Expected '(' after 'if'")
        condition = self.parse_condition()
        if condition is None:
            return None
        self._expect(TokenType.RPAREN, "Expected ')' after if condition")

        then_branch = self._parse_body()
        if then_branch is None:
            return None

        else_branch = None
        if self._match(TokenType.ELSE):
            self._advance()
            else_branch = self._parse_body()
            if else_branch is None:
                return None

        return If(condition, then_branch, else_branch, line=if_tok.line)

    def _parse_while(self) -> Optional[While]:
        while_tok = self._advance()  # consume 'while'
        self._expect(TokenType.LPAREN, "Expected '(' after 'while'")
        condition = self.parse_condition()
        if condition is None:
            return None
        self._expect(TokenType.RPAREN, "Expected ')' after while condition")

        body = self._parse_body()
        if body is None:
            return None
        return While(condition, body, line=while_tok.line)

    def _parse_block(self) -> Optional[Block]:
        open_tok = self._expect(TokenType.LBRACE, "Expected '{' to start block")
        stmts = []
        while not self._match(TokenType.RBRACE, TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is None:
                return None
            stmts.append(stmt)
        self._expect(TokenType.RBRACE, "Expected '}' at end of block")
        return Block(tuple(stmts), line=open_tok.line)

    def _parse_print(self) -> Optional[Print]:
        print_tok = self._advance()  # consume 'print'
        value = self.parse_expression()
        if value is None:
            return None
        return Print(value, line=print_tok.line)

    # ------------------------------------------------------------------ expressions

    def parse_condition(self) -> Optional[Node]:
        left = self.parse_expression()
        if left is None:
            return None
        if self._peek().type in _COMPARISON:
            op_tok = self._advance()
            right = self.parse_expression()
            if right is None:
                return None
            return Compare(_COMPARISON[op_tok.type], left, right, line=op_tok.line)
        return left

    def parse_expression(self) -> Optional[Node]:
        left = self._parse_term()

        while left is not None and self._peek().type in _ADDITIVE:
            op_tok = self._advance()
            right = self._parse_term()
            if right is None:
                return None
            left = BinaryOp(_ADDITIVE[op_tok.type], left, right, line=op_tok.line)

        return left

    def _parse_term(self) -> Optional[Node]:
        left = self._parse_factor()

        while left is not None and self._peek().type in _MULTIPLICATIVE:
            op_tok = self._advance()
            right = self._parse_factor()
            if right is None:
                return None
            left = BinaryOp(_MULTIPLICATIVE[op_tok.type], left, right, line=op_tok.line)

        return left

    def _parse_factor(self) -> Optional[Node]:
        tok = self._peek()

        if tok.type == TokenType.NUMBER:
            self._advance()
            return Number(tok.value, line=tok.line)

        if tok.type == TokenType.IDENTIFIER:
            self._advance()
            return Variable(tok.value, line=tok.line)

        if tok.type == TokenType.LPAREN:
            self._advance()
            expr = self.parse_expression()
            if expr is None:
                return None
            self._expect(TokenType.RPAREN, "Expected ')' after expression")
            return expr

        self._error(f"Unexpected token {self._describe(tok)} in expression", tok)
        return None


def parse(tokens: List[Token], diagnostics: Optional[Diagnostics] = None) -> Block:
    """Parse *tokens* into a program Block."""
    return Parser(tokens, diagnostics).parse_program()
