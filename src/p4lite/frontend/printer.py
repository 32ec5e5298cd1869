"""
P4 Source Printer
=================

Renders an AST back to canonical P4 source text. Parsing the output of
format_program() yields an AST equal to the one printed, since locations
are not part of node equality.

Layout
------
- Four-space indentation, one declaration or statement per line
- Parameters separated by ', ' with no trailing comma
- Opening braces end a line, closing braces stand on their own line
- Controls separated by a blank line

Parenthesization
----------------
Only the parentheses needed to keep the tree shape are emitted:
- the right operand of '||' is parenthesized when it is itself an '||'
- the left operand of '&&' is parenthesized when it is an '||', the right
  one when it is an '||' or an '&&'
- '!' is followed directly by a literal or name, otherwise by '( ... )'
"""

from p4lite.frontend.ast import (
    ASTNode,
    ASTVisitor,
    ProgramNode,
    ControlDeclaration,
    ParameterNode,
    Instantiation,
    VariableDeclaration,
    BlockStatement,
    IfStatement,
    Expression,
    OrExpression,
    AndExpression,
    NegationExpression,
    BoolLiteral,
    VariableExpression,
)


INDENT = "    "


class P4SourcePrinter(ASTVisitor):
    """
    Pretty printer producing canonical P4 source.

    Usage:
        printer = P4SourcePrinter()
        text = printer.print(program)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Render the node and return the source text."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output) + "\n" if self.output else ""

    def _emit(self, text: str) -> None:
        self.output.append(f"{INDENT * self.indent_level}{text}")

    # =========================================================================
    # Declarations
    # =========================================================================

    def visit_ProgramNode(self, node: ProgramNode):
        for index, decl in enumerate(node.declarations):
            if index:
                self.output.append("")
            self.visit(decl)

    def visit_ControlDeclaration(self, node: ControlDeclaration):
        params = ", ".join(self._param_str(p) for p in node.parameters)
        self._emit(f"control {node.name}({params}) {{")
        self.indent_level += 1
        for decl in node.local_declarations:
            self.visit(decl)
        self._open("apply ", node.apply_body)
        self._emit("}")
        self.indent_level -= 1
        self._emit("}")

    def visit_Instantiation(self, node: Instantiation):
        self._emit(f"{node.type_ref}() {node.name};")

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        if node.initializer is None:
            self._emit(f"{node.type_ref} {node.name};")
        else:
            self._emit(f"{node.type_ref} {node.name} = {format_expression(node.initializer)};")

    # =========================================================================
    # Statements
    # =========================================================================

    def visit_BlockStatement(self, node: BlockStatement):
        self._open("", node)
        self._emit("}")

    def visit_IfStatement(self, node: IfStatement):
        self._open(f"if ({format_expression(node.condition)}) ", node.then_case)
        if node.else_case is not None:
            self._open("} else ", node.else_case)
        self._emit("}")

    def _open(self, prefix: str, block: BlockStatement) -> None:
        """Emit the opening line of a block and its statements, not the closing brace."""
        self._emit(f"{prefix}{{")
        self.indent_level += 1
        for stmt in block.statements:
            self.visit(stmt)
        self.indent_level -= 1

    @staticmethod
    def _param_str(param: ParameterNode) -> str:
        return f"{param.direction.value} {param.type_ref} {param.name}"


# =============================================================================
# Expressions
# =============================================================================

def format_expression(expr: Expression) -> str:
    """Render an expression with the minimal parentheses that keep its shape."""
    if isinstance(expr, BoolLiteral):
        return "true" if expr.value else "false"
    if isinstance(expr, VariableExpression):
        return expr.name
    if isinstance(expr, NegationExpression):
        operand = format_expression(expr.operand)
        if isinstance(expr.operand, (BoolLiteral, VariableExpression)):
            return f"!{operand}"
        return f"!({operand})"
    if isinstance(expr, OrExpression):
        left = format_expression(expr.left)
        right = _wrap(expr.right, (OrExpression,))
        return f"{left} || {right}"
    if isinstance(expr, AndExpression):
        left = _wrap(expr.left, (OrExpression,))
        right = _wrap(expr.right, (OrExpression, AndExpression))
        return f"{left} && {right}"
    raise TypeError(f"cannot format {type(expr).__name__}")


def _wrap(expr: Expression, needs_parens: tuple[type, ...]) -> str:
    text = format_expression(expr)
    if isinstance(expr, needs_parens):
        return f"({text})"
    return text


def format_program(program: ProgramNode) -> str:
    """Render a whole program as canonical P4 source."""
    return P4SourcePrinter().print(program)
