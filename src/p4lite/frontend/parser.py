"""
P4 Recursive Descent Parser
===========================

This module implements a recursive descent parser for the P4 control-block
subset. It takes the token stream produced by the lexer and builds an
immutable Abstract Syntax Tree (AST).

Grammar (EBNF)
--------------
program         ::= control_decl*
control_decl    ::= 'control' IDENTIFIER '(' param_list ')'
                    '{' control_local* 'apply' block '}'
param_list      ::= (param ',')* param?
param           ::= ('in' | 'out' | 'inout') IDENTIFIER IDENTIFIER
control_local   ::= instantiation | variable_decl
instantiation   ::= IDENTIFIER '(' ')' IDENTIFIER ';'
variable_decl   ::= IDENTIFIER IDENTIFIER ('=' expr)? ';'

block           ::= '{' statement* '}'
statement       ::= block | if_stmt | variable_decl
if_stmt         ::= 'if' '(' expr ')' block ('else' block)?

expr            ::= and_expr ('||' and_expr)*
and_expr        ::= factor ('&&' factor)*
factor          ::= '!' terminal | terminal
terminal        ::= 'true' | 'false' | IDENTIFIER | '(' expr ')'

Expression Precedence (lowest to highest)
-----------------------------------------
1. logical_or      ||   (left-associative)
2. logical_and     &&   (left-associative)
3. negation        !    (prefix, applies to one terminal)
4. terminal        true, false, IDENTIFIER, '(' expr ')'

Dangling Else
-------------
Both branches of an if statement must be blocks, so an 'else' can only
attach to the 'if' right before it. 'else if' is rejected.

Every alternative is chosen with one token of lookahead and the parser
never backtracks. The first error aborts the parse.

Example Usage
-------------
>>> from p4lite.frontend.parser import parse_source
>>> program = parse_source('control c(in bool a,) { apply { } }')
>>> program.declarations[0].name
'c'
"""

from typing import Callable, Optional, TypeVar
import logging

from p4lite.config import ParserOptions, get_default_options
from p4lite.frontend.lexer import P4Lexer, P4Token, P4TokenType, split_source_lines
from p4lite.frontend.ast import (
    ProgramNode,
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
from p4lite.frontend.errors import (
    NestingTooDeepError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


DIRECTIONS: dict[P4TokenType, Direction] = {
    P4TokenType.IN: Direction.IN,
    P4TokenType.OUT: Direction.OUT,
    P4TokenType.INOUT: Direction.INOUT,
}

# Tokens that can begin each construct; used for dispatch and diagnostics
STATEMENT_START = (P4TokenType.LBRACE, P4TokenType.IF, P4TokenType.IDENTIFIER)
TERMINAL_START = (
    P4TokenType.TRUE,
    P4TokenType.FALSE,
    P4TokenType.IDENTIFIER,
    P4TokenType.LPAREN,
)
FACTOR_START = (P4TokenType.NOT,) + TERMINAL_START


class P4Parser:
    """
    Recursive descent parser for the P4 subset.

    One method per nonterminal. Binary operators are parsed by
    _parse_binary, which folds operands to the left, giving
    left-associativity for '||' and '&&'.

    Attributes:
        tokens: List of tokens to parse, ending with EOF
        filename: Source filename for error reporting
        options: Parser options (nesting limit)
    """

    def __init__(
        self,
        tokens: list[P4Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
        options: Optional[ParserOptions] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer (must end with EOF)
            filename: Source filename for error messages
            source_lines: Original source lines for error context
            options: Parser options (defaults from the environment)
        """
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self.options = options or get_default_options()

        self._pos = 0
        self._depth = 0

    def parse(self) -> ProgramNode:
        """
        Parse the token stream into a program.

        Returns:
            ProgramNode containing all control declarations

        Raises:
            P4SyntaxError: On the first syntax error
        """
        location = self._peek().location
        declarations = []

        while self._check(P4TokenType.CONTROL):
            declarations.append(self._parse_control_declaration())

        self._expect(P4TokenType.EOF, alternatives=(P4TokenType.CONTROL,))

        logger.debug(f"Parsed {len(declarations)} control declaration(s) from {self.filename}")
        return ProgramNode(declarations=tuple(declarations), location=location)

    def parse_expression(self) -> Expression:
        """
        Parse the whole token stream as a single expression.

        Raises:
            P4SyntaxError: If the input is not exactly one expression
        """
        expr = self._parse_expression()
        self._expect(P4TokenType.EOF, alternatives=(P4TokenType.OR, P4TokenType.AND))
        return expr

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == P4TokenType.EOF

    def _peek(self, offset: int = 0) -> P4Token:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[pos]

    def _advance(self) -> P4Token:
        """Consume and return the current token."""
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: P4TokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: P4TokenType) -> Optional[P4Token]:
        """Consume the current token if it is one of the types."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(
        self,
        token_type: P4TokenType,
        alternatives: tuple[P4TokenType, ...] = (),
    ) -> P4Token:
        """
        Expect and consume a specific token type.

        Args:
            token_type: The token type to consume
            alternatives: Other token types that would have been accepted
                          at this point; only used in the error message

        Raises:
            UnexpectedTokenError: If the current token is not token_type
        """
        if self._check(token_type):
            return self._advance()
        raise self._unexpected((token_type,) + alternatives)

    def _unexpected(self, expected: tuple[P4TokenType, ...]) -> UnexpectedTokenError:
        """Build the error for the current token given what was acceptable."""
        token = self._peek()
        descriptions = [t.describe() for t in expected]
        source_line = self._get_source_line(token.line)

        if token.type == P4TokenType.EOF:
            return UnexpectedEndOfInputError(descriptions, token.location, source_line)
        return UnexpectedTokenError(
            token.describe(), descriptions, token.location, source_line
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _enter_nesting(self) -> None:
        self._depth += 1
        if self._depth > self.options.max_nesting_depth:
            token = self._peek()
            raise NestingTooDeepError(
                self.options.max_nesting_depth,
                token.location,
                self._get_source_line(token.line),
            )

    def _leave_nesting(self) -> None:
        self._depth -= 1

    # =========================================================================
    # Lists
    # =========================================================================

    def _parse_comma_list(
        self,
        parse_element: Callable[[], T],
        element_start: tuple[P4TokenType, ...],
        closing: P4TokenType,
    ) -> tuple[T, ...]:
        """
        Parse a comma-separated list up to and including its closing token.

        Accepts zero or more 'element ,' pairs followed by an optional final
        element without a comma, so 'a, b' and 'a, b,' are both valid while
        ', a' and 'a,, b' are not.

        Args:
            parse_element: Parses one element
            element_start: Token types that can begin an element
            closing: Token that ends the list (consumed)
        """
        items = []

        while self._check(*element_start):
            items.append(parse_element())
            if not self._match(P4TokenType.COMMA):
                self._expect(closing, alternatives=(P4TokenType.COMMA,))
                return tuple(items)

        self._expect(closing, alternatives=element_start)
        return tuple(items)

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_control_declaration(self) -> ControlDeclaration:
        location = self._expect(P4TokenType.CONTROL).location
        name = self._expect(P4TokenType.IDENTIFIER).value

        self._expect(P4TokenType.LPAREN)
        parameters = self._parse_comma_list(
            self._parse_parameter, tuple(DIRECTIONS), P4TokenType.RPAREN
        )

        self._expect(P4TokenType.LBRACE)
        local_declarations = []
        while self._check(P4TokenType.IDENTIFIER):
            local_declarations.append(self._parse_control_local_declaration())

        self._expect(P4TokenType.APPLY, alternatives=(P4TokenType.IDENTIFIER,))
        apply_body = self._parse_block()
        self._expect(P4TokenType.RBRACE)

        logger.debug(
            f"Parsed control '{name}': {len(parameters)} parameter(s), "
            f"{len(local_declarations)} local declaration(s)"
        )
        return ControlDeclaration(
            name=name,
            parameters=parameters,
            local_declarations=tuple(local_declarations),
            apply_body=apply_body,
            location=location,
        )

    def _parse_parameter(self) -> ParameterNode:
        direction_token = self._advance()
        type_ref = self._expect(P4TokenType.IDENTIFIER).value
        name = self._expect(P4TokenType.IDENTIFIER).value
        return ParameterNode(
            direction=DIRECTIONS[direction_token.type],
            type_ref=type_ref,
            name=name,
            location=direction_token.location,
        )

    def _parse_control_local_declaration(self) -> ControlLocalDeclaration:
        """
        Parse an instantiation or a variable declaration.

        Both start with a type name; '(' after it means instantiation.
        """
        if self._peek(1).type == P4TokenType.LPAREN:
            return self._parse_instantiation()
        return self._parse_variable_declaration()

    def _parse_instantiation(self) -> Instantiation:
        type_token = self._expect(P4TokenType.IDENTIFIER)
        self._expect(P4TokenType.LPAREN)
        self._expect(P4TokenType.RPAREN)
        name = self._expect(P4TokenType.IDENTIFIER).value
        self._expect(P4TokenType.SEMICOLON)
        return Instantiation(
            type_ref=type_token.value, name=name, location=type_token.location
        )

    def _parse_variable_declaration(self) -> VariableDeclaration:
        type_token = self._expect(P4TokenType.IDENTIFIER)
        name = self._expect(P4TokenType.IDENTIFIER).value

        initializer = None
        if self._match(P4TokenType.ASSIGN):
            initializer = self._parse_expression()
            self._expect(P4TokenType.SEMICOLON, alternatives=(P4TokenType.OR, P4TokenType.AND))
        else:
            self._expect(P4TokenType.SEMICOLON, alternatives=(P4TokenType.ASSIGN,))

        return VariableDeclaration(
            type_ref=type_token.value,
            name=name,
            initializer=initializer,
            location=type_token.location,
        )

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_block(self) -> BlockStatement:
        """Parse a block statement { ... }."""
        location = self._expect(P4TokenType.LBRACE).location
        self._enter_nesting()
        try:
            statements = []
            while self._check(*STATEMENT_START):
                statements.append(self._parse_statement())
            self._expect(P4TokenType.RBRACE, alternatives=STATEMENT_START)
        finally:
            self._leave_nesting()

        return BlockStatement(statements=tuple(statements), location=location)

    def _parse_statement(self) -> Statement:
        token = self._peek()

        if token.type == P4TokenType.LBRACE:
            return self._parse_block()
        if token.type == P4TokenType.IF:
            return self._parse_if_statement()
        if token.type == P4TokenType.IDENTIFIER:
            return self._parse_variable_declaration()

        raise self._unexpected(STATEMENT_START)

    def _parse_if_statement(self) -> IfStatement:
        location = self._expect(P4TokenType.IF).location
        self._expect(P4TokenType.LPAREN)
        condition = self._parse_expression()
        self._expect(P4TokenType.RPAREN, alternatives=(P4TokenType.OR, P4TokenType.AND))

        then_case = self._parse_block()

        else_case = None
        if self._match(P4TokenType.ELSE):
            else_case = self._parse_block()

        return IfStatement(
            condition=condition,
            then_case=then_case,
            else_case=else_case,
            location=location,
        )

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def _parse_expression(self) -> Expression:
        """Parse an expression at the lowest precedence level."""
        return self._parse_logical_or()

    def _parse_logical_or(self) -> Expression:
        return self._parse_binary(
            self._parse_logical_and, {P4TokenType.OR: OrExpression}
        )

    def _parse_logical_and(self) -> Expression:
        return self._parse_binary(
            self._parse_factor, {P4TokenType.AND: AndExpression}
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: dict[P4TokenType, Callable[..., Expression]],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Parses operands at the next-higher level
            operators: Map of token types to the node class they build
        """
        expr = operand_parser()

        while self._peek().type in operators:
            op_token = self._advance()
            right = operand_parser()
            expr = operators[op_token.type](
                left=expr, right=right, location=expr.location
            )

        return expr

    def _parse_factor(self) -> Expression:
        """Parse an optional '!' followed by exactly one terminal."""
        not_token = self._match(P4TokenType.NOT)
        if not_token is not None:
            operand = self._parse_terminal()
            return NegationExpression(operand=operand, location=not_token.location)

        if not self._check(*TERMINAL_START):
            raise self._unexpected(FACTOR_START)
        return self._parse_terminal()

    def _parse_terminal(self) -> Expression:
        """Parse a literal, variable reference or parenthesized expression."""
        token = self._peek()

        if token.type in (P4TokenType.TRUE, P4TokenType.FALSE):
            self._advance()
            return BoolLiteral(value=token.type == P4TokenType.TRUE, location=token.location)

        if token.type == P4TokenType.IDENTIFIER:
            self._advance()
            return VariableExpression(name=token.value, location=token.location)

        if token.type == P4TokenType.LPAREN:
            self._advance()
            self._enter_nesting()
            try:
                expr = self._parse_expression()
                self._expect(P4TokenType.RPAREN, alternatives=(P4TokenType.OR, P4TokenType.AND))
            finally:
                self._leave_nesting()
            return expr

        raise self._unexpected(TERMINAL_START)


# =============================================================================
# Convenience Functions
# =============================================================================

def _tokenize(source: str, filename: str, options: ParserOptions) -> list[P4Token]:
    lexer = P4Lexer(source, filename, allow_comments=options.allow_comments)
    return list(lexer.tokenize())


def parse_source(
    source: str,
    filename: Optional[str] = None,
    options: Optional[ParserOptions] = None,
) -> ProgramNode:
    """
    Parse P4 source code into an AST.

    This is a convenience function that combines lexing and parsing.

    Args:
        source: The P4 source code
        filename: Source filename for error messages
        options: Parser options (defaults from the environment)

    Returns:
        The root ProgramNode of the AST

    Raises:
        P4SyntaxError: If lexing or parsing fails
    """
    options = options or get_default_options()
    filename = filename or options.default_filename
    tokens = _tokenize(source, filename, options)
    parser = P4Parser(tokens, filename, split_source_lines(source), options)
    return parser.parse()


def parse_expression(
    source: str,
    filename: Optional[str] = None,
    options: Optional[ParserOptions] = None,
) -> Expression:
    """
    Parse a standalone boolean expression such as 'a || b && !c'.

    Raises:
        P4SyntaxError: If the text is not exactly one expression
    """
    options = options or get_default_options()
    filename = filename or options.default_filename
    tokens = _tokenize(source, filename, options)
    parser = P4Parser(tokens, filename, split_source_lines(source), options)
    return parser.parse_expression()
