"""
P4 Abstract Syntax Tree (AST) Definitions
=========================================

This module defines the AST node types produced by the P4 parser.

Node Hierarchy
--------------
ASTNode (base)
├── ProgramNode - root node containing all declarations
├── Declarations
│   └── ControlDeclaration - control block with parameters and apply body
├── ParameterNode - control parameter (direction, type, name)
├── Control-local declarations
│   ├── Instantiation - 'Type() name;'
│   └── VariableDeclaration - 'Type name [= expr];' (also a statement)
├── Statements
│   ├── BlockStatement - { ... }
│   ├── IfStatement - if/else with block branches
│   └── VariableDeclaration
└── Expressions
    ├── OrExpression - a || b
    ├── AndExpression - a && b
    ├── NegationExpression - !a
    ├── BoolLiteral - true / false
    └── VariableExpression - identifier reference

Design Notes
------------
- All nodes are frozen dataclasses; child sequences are tuples, so the
  tree cannot be mutated after construction.
- Each node stores its source location for error reporting. The location
  is keyword-only and excluded from equality, so two trees compare equal
  when they have the same shape regardless of where they came from.
- Parenthesized expressions produce no node of their own.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Optional

from p4lite.errors import SourceLocation


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node starts (not compared)
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    def children(self) -> tuple["ASTNode", ...]:
        """Return the direct child nodes in source order."""
        result = []
        for f in fields(self):
            if f.name == "location":
                continue
            value = getattr(self, f.name)
            if isinstance(value, ASTNode):
                result.append(value)
            elif isinstance(value, tuple):
                result.extend(item for item in value if isinstance(item, ASTNode))
        return tuple(result)


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for boolean expression nodes."""
    pass


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for statements that may appear inside a block."""
    pass


@dataclass(frozen=True)
class ControlLocalDeclaration(ASTNode):
    """Base class for declarations placed in a control before 'apply'."""
    pass


@dataclass(frozen=True)
class Declaration(ASTNode):
    """Base class for top-level declarations."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class OrExpression(Expression):
    """Logical OR (left-associative)."""
    left: Expression
    right: Expression


@dataclass(frozen=True)
class AndExpression(Expression):
    """Logical AND (left-associative, binds tighter than OR)."""
    left: Expression
    right: Expression


@dataclass(frozen=True)
class NegationExpression(Expression):
    """Logical NOT applied to a single terminal expression."""
    operand: Expression


@dataclass(frozen=True)
class BoolLiteral(Expression):
    """Boolean constant 'true' or 'false'."""
    value: bool


@dataclass(frozen=True)
class VariableExpression(Expression):
    """Reference to a variable by name."""
    name: str


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class BlockStatement(Statement):
    """
    Block statement { ... }.

    Attributes:
        statements: Statements in source order
    """
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class IfStatement(Statement):
    """
    If/else statement.

    Both branches are blocks, never bare statements, so an 'else' can only
    belong to the 'if' immediately before it.

    Attributes:
        condition: The tested expression
        then_case: Block executed when the condition holds
        else_case: Optional block executed otherwise
    """
    condition: Expression
    then_case: BlockStatement
    else_case: Optional[BlockStatement] = None


@dataclass(frozen=True)
class VariableDeclaration(Statement, ControlLocalDeclaration):
    """
    Variable declaration, either control-local or inside a block.

        bool drop;
        bool hit = valid && !bypass;

    Attributes:
        type_ref: Name of the declared type (not interpreted here)
        name: Variable name
        initializer: Optional initialization expression
    """
    type_ref: str
    name: str
    initializer: Optional[Expression] = None


@dataclass(frozen=True)
class Instantiation(ControlLocalDeclaration):
    """
    Construction of a named object with a no-argument constructor.

        Counter() packet_counter;
    """
    type_ref: str
    name: str


# =============================================================================
# Declaration Nodes
# =============================================================================

class Direction(Enum):
    """Direction of a control parameter."""
    IN = "in"
    OUT = "out"
    INOUT = "inout"


@dataclass(frozen=True)
class ParameterNode(ASTNode):
    """
    Control parameter declaration.

    Attributes:
        direction: in, out or inout
        type_ref: Name of the parameter type (not interpreted here)
        name: Parameter name
    """
    direction: Direction
    type_ref: str
    name: str


@dataclass(frozen=True)
class ControlDeclaration(Declaration):
    """
    Control block.

        control ingress(inout headers hdr, in bool valid) {
            bool drop = false;
            apply { ... }
        }

    Attributes:
        name: Control name
        parameters: Parameters in source order
        local_declarations: Declarations before 'apply', in source order
        apply_body: The body of the apply block
    """
    name: str
    parameters: tuple[ParameterNode, ...]
    local_declarations: tuple[ControlLocalDeclaration, ...]
    apply_body: BlockStatement


@dataclass(frozen=True)
class ProgramNode(ASTNode):
    """
    Root node of the AST.

    Attributes:
        declarations: Top-level declarations in source order
    """
    declarations: tuple[Declaration, ...] = ()


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about;
    everything else falls through to generic_visit, which visits children.

    Usage:
        class ControlCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_ControlDeclaration(self, node):
                self.names.append(node.name)
                self.generic_visit(node)
    """

    def visit(self, node: ASTNode) -> Any:
        method_name = f"visit_{node.__class__.__name__}"
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: ASTNode) -> None:
        for child in node.children():
            self.visit(child)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Tree dump for AST debugging.

    Usage:
        printer = ASTPrinter()
        print(printer.print(program))
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, node: ASTNode) -> str:
        """Print the AST and return as string."""
        self.output = []
        self.indent_level = 0
        self.visit(node)
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _nested(self, node: ASTNode) -> None:
        self.indent_level += 1
        self.visit(node)
        self.indent_level -= 1

    def visit_ProgramNode(self, node: ProgramNode):
        self._emit("Program")
        for decl in node.declarations:
            self._nested(decl)

    def visit_ControlDeclaration(self, node: ControlDeclaration):
        params = ", ".join(
            f"{p.direction.value} {p.type_ref} {p.name}" for p in node.parameters
        )
        self._emit(f"Control: {node.name}({params})")
        for decl in node.local_declarations:
            self._nested(decl)
        self.indent_level += 1
        self._emit("Apply:")
        self._nested(node.apply_body)
        self.indent_level -= 1

    def visit_Instantiation(self, node: Instantiation):
        self._emit(f"Instantiation: {node.type_ref}() {node.name}")

    def visit_VariableDeclaration(self, node: VariableDeclaration):
        init = f" = {self._expr_str(node.initializer)}" if node.initializer else ""
        self._emit(f"Variable: {node.type_ref} {node.name}{init}")

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("Block")
        for stmt in node.statements:
            self._nested(stmt)

    def visit_IfStatement(self, node: IfStatement):
        self._emit(f"If {self._expr_str(node.condition)}")
        self.indent_level += 1
        self._emit("Then:")
        self._nested(node.then_case)
        if node.else_case is not None:
            self._emit("Else:")
            self._nested(node.else_case)
        self.indent_level -= 1

    def _expr_str(self, expr: Expression) -> str:
        """Fully parenthesized expression, showing the tree shape."""
        if isinstance(expr, BoolLiteral):
            return "true" if expr.value else "false"
        if isinstance(expr, VariableExpression):
            return expr.name
        if isinstance(expr, NegationExpression):
            return f"(!{self._expr_str(expr.operand)})"
        if isinstance(expr, AndExpression):
            return f"({self._expr_str(expr.left)} && {self._expr_str(expr.right)})"
        if isinstance(expr, OrExpression):
            return f"({self._expr_str(expr.left)} || {self._expr_str(expr.right)})"
        return f"<{type(expr).__name__}>"
