"""Canonical text rendering of Monkey ASTs.

Every prefix and infix expression is rendered fully parenthesized, so the
output spells out exactly how the parser resolved precedence and
associativity. Statements are concatenated without separators.
"""

from __future__ import annotations

from monkey.ast_nodes import (
    BlockStatement,
    BooleanLiteral,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)


class MonkeyFormatter:
    """Render a parsed Monkey node back to canonical text."""

    def format(self, node: object) -> str:
        if isinstance(node, (Program, BlockStatement)):
            return "".join(self.format(stmt) for stmt in node.statements)
        if isinstance(node, LetStatement):
            return self._format_let(node)
        if isinstance(node, ReturnStatement):
            if node.value is None:
                return "return;"
            return f"return {self.format(node.value)};"
        if isinstance(node, ExpressionStatement):
            return self.format(node.expression)
        return self._format_expr(node)

    def _format_let(self, stmt: LetStatement) -> str:
        if stmt.value is None:
            return f"let {stmt.name};"
        return f"let {stmt.name} = {self.format(stmt.value)};"

    def _format_expr(self, expr: object) -> str:
        if isinstance(expr, Identifier):
            return expr.name
        if isinstance(expr, BooleanLiteral):
            return "true" if expr.value else "false"
        if isinstance(expr, IntegerLiteral):
            return str(expr.value)
        if isinstance(expr, PrefixExpression):
            return f"({expr.operator}{self._format_expr(expr.right)})"
        if isinstance(expr, InfixExpression):
            left = self._format_expr(expr.left)
            right = self._format_expr(expr.right)
            return f"({left} {expr.operator} {right})"
        if isinstance(expr, IfExpression):
            text = f"if {self._format_expr(expr.condition)} {{ {self.format(expr.consequence)} }}"
            if expr.alternative is not None:
                text += f" else {{ {self.format(expr.alternative)} }}"
            return text
        raise TypeError(f"cannot render {type(expr).__name__}")


def render(node: object) -> str:
    """Render any AST node to its canonical text."""
    return MonkeyFormatter().format(node)
