"""
P4 Frontend
===========

Lexer, parser and AST for a subset of the P4 switch programming language:
control blocks with directed parameters, control-local variable
declarations and instantiations, and apply bodies made of nested blocks,
variable declarations and if/else statements over boolean expressions.

Pipeline
--------
    P4 Source → Lexer → Parser → ProgramNode

The AST is immutable and is meant to be handed to downstream tools
(semantic analysis, code generation) as a finished value.

Usage
-----
>>> from p4lite.frontend import parse_source
>>> program = parse_source('''
... control ingress(inout headers hdr, in bool valid) {
...     bool drop = !valid;
...     apply {
...         if (drop || hdr) { } else { }
...     }
... }
... ''')
>>> program.declarations[0].name
'ingress'
"""

from p4lite.frontend.driver import P4Frontend, ParseResult, parse_file
from p4lite.frontend.errors import (
    P4SyntaxError,
    LexError,
    InvalidCharacterError,
    UnterminatedCommentError,
    UnexpectedTokenError,
    UnexpectedEndOfInputError,
    NestingTooDeepError,
)
from p4lite.frontend.lexer import P4Lexer, P4TokenType, P4Token
from p4lite.frontend.parser import P4Parser, parse_source, parse_expression
from p4lite.frontend.printer import P4SourcePrinter, format_program, format_expression
from p4lite.frontend.ast import (
    ASTNode,
    ASTVisitor,
    ASTPrinter,
    ProgramNode,
    Declaration,
    ControlDeclaration,
    ParameterNode,
    Direction,
    ControlLocalDeclaration,
    Instantiation,
    VariableDeclaration,
    Statement,
    BlockStatement,
    IfStatement,
    Expression,
    OrExpression,
    AndExpression,
    NegationExpression,
    BoolLiteral,
    VariableExpression,
)

__all__ = [
    # Main API
    "P4Frontend",
    "ParseResult",
    "parse_source",
    "parse_expression",
    "parse_file",
    "format_program",
    "format_expression",
    # Errors
    "P4SyntaxError",
    "LexError",
    "InvalidCharacterError",
    "UnterminatedCommentError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "NestingTooDeepError",
    # Lexer
    "P4Lexer",
    "P4TokenType",
    "P4Token",
    # Parser and printers
    "P4Parser",
    "P4SourcePrinter",
    "ASTPrinter",
    # AST
    "ASTNode",
    "ASTVisitor",
    "ProgramNode",
    "Declaration",
    "ControlDeclaration",
    "ParameterNode",
    "Direction",
    "ControlLocalDeclaration",
    "Instantiation",
    "VariableDeclaration",
    "Statement",
    "BlockStatement",
    "IfStatement",
    "Expression",
    "OrExpression",
    "AndExpression",
    "NegationExpression",
    "BoolLiteral",
    "VariableExpression",
]
