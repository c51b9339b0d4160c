"""
TL Language Parser

Parses a TL token stream into a typed abstract syntax tree (`AstFile`).

The parser is a recursive descent over a single `TokenStream` cursor with one token
of pushback. The top-level builder recognizes declarations until end of stream,
the function builder reads a header and hands the body to the block builder, and
the block builder dispatches on the leading token of each statement, recursing into
itself for nested bodies and into the expression builder for conditions,
initializers and arguments.

Supported Constructs
--------------------
- Top level: `func`, `struct NAME is ... end`, `const NAME : T := E;`, `import a.b;`
- Statements:
    * Declarations: `var x : T := E;`, `var a : T[E];`, `struct s : Name;`, `const`
    * Assignment to an identifier, array element or struct member: `x := E;`
    * Call statements: `print("hi");`
    * Control flow: `while C do ... end`, `if C then ... elif C then ... else ... end`
    * `return [E];`, `break;`, `continue;`
- Expressions: literals, identifiers, calls `f(...)`, array access `a[i]`, struct
  access `p.x`, grouping `( )`, comma lists and the binary operators.

Expression Semantics
--------------------
Expressions use an operand stack and an operator stack with a single, uniform
precedence. Operators are reduced only at a `,` and at the end of the expression,
popping the most recent operator first, so `a - b - c` parses as `a - (b - c)`.
An assignment reduces to a `PendingAssignment` holding only its right-hand side;
the statement builder that knows the target completes it.

Parser Behavior
---------------
- Best-effort by default: every problem is reported to the `Diagnostics` collector,
  the offending token is skipped and parsing continues. Malformed input yields
  partial or placeholder ("none") nodes.
- With `strict=True` the first diagnostic raises `ParseError`.

Entry Points
------------
- `Parser.parse()`: Parse a full translation unit.
- `Parser.parse_expression(stop)`: Parse one expression up to a stop token type.
- `parse_source(source)`: Lex and parse a source string in one call.
"""

from __future__ import annotations

from typing import NamedTuple, Union

from tl.tl_ast import (
    AstArg,
    AstExpression,
    AstFile,
    AstFunction,
    AstStatement,
    AstStruct,
    DataType,
)
from tl.tl_constants import data_type_tokens, operator_tokens, token_spellings
from tl.tl_diagnostics import DiagnosticKind, Diagnostics
from tl.tl_lexer import Token, TokenStream


class PendingAssignment(NamedTuple):
    """An assignment whose target is not known yet.

    Attributes:
        value (AstExpression): The right-hand side.
        token (Token): The `:=` token, used for the location of the completed node.
    """

    value: AstExpression
    token: Token

    def complete(self, target: AstExpression) -> AstExpression:
        return AstExpression(
            "assign",
            args=(target, self.value),
            line=self.token.line,
            col=self.token.col,
        )


Operand = Union[AstExpression, PendingAssignment]

LITERAL_TOKENS = {
    "NUMBER": "int",
    "STRING": "string",
    "CHAR": "char",
}


class Parser:
    """
    TL Parser Class

    Turns a `TokenStream` into an `AstFile`. A parser instance owns the stream
    cursor for the duration of a parse and is single-use.

    Attributes
    ----------
    stream : TokenStream
        The token cursor being consumed.
    name : str
        File name recorded on the resulting `AstFile`.
    diagnostics : Diagnostics
        Collector receiving every reported problem.

    Methods
    -------
    parse() -> AstFile
        Parse declarations until end of stream.
    parse_function() -> AstFunction
        Parse a function after its `func` keyword.
    parse_block(consts, chained=False) -> tuple[AstStatement, Token]
        Parse statements up to `end` (or a chained `elif`/`else`).
    parse_expression(stop) -> AstExpression | PendingAssignment
        Parse one expression up to the given stop token type.
    parse_data_type() -> DataType
        Map one type keyword to a `DataType`.
    """

    def __init__(
        self,
        stream: TokenStream,
        name: str = "",
        strict: bool = False,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self.stream = stream
        self.name = name
        self.diagnostics = (
            diagnostics if diagnostics is not None else Diagnostics(fail_fast=strict)
        )

    def error(self, kind: DiagnosticKind, message: str, token: Token | None) -> None:
        self.diagnostics.report(kind, message, token)

    #
    # Top level
    #
    def parse(self) -> AstFile:
        """Parse a full TL translation unit."""
        functions: list[AstFunction] = []
        structs: list[AstStruct] = []
        consts: list[AstArg] = []
        imports: list[str] = []

        token = self.stream.next()
        while token.type != "EOF":
            if token.type == "FUNC":
                functions.append(self.parse_function())
            elif token.type == "STRUCT":
                structs.append(self.parse_struct())
            elif token.type == "CONST":
                consts.append(self.parse_const())
            elif token.type == "IMPORT":
                imports.append(self.parse_import())
            else:
                self.error(
                    DiagnosticKind.UNEXPECTED_TOPLEVEL,
                    "Unknown token in global scope.",
                    token,
                )
            token = self.stream.next()

        return AstFile(self.name, functions, structs, consts, imports)

    def parse_function(self) -> AstFunction:
        """Parse `NAME [(params)] [-> TYPE] is BLOCK`; the `func` keyword is already consumed."""
        token = self.stream.next()
        name = ""
        if token.type == "IDENT":
            name = str(token.value)
            token = self.stream.next()
        else:
            self.error(DiagnosticKind.MALFORMED_FUNCTION, "Expected function name.", token)
            if token.type not in ("LPAREN", "ARROW", "IS", "EOF"):
                token = self.stream.next()

        args: list[AstArg] = []
        if token.type == "LPAREN":
            args = self.parse_params()
            token = self.stream.next()

        data_type = DataType.VOID
        if token.type == "ARROW":
            data_type = self.parse_data_type()
            token = self.stream.next()

        if token.type != "IS":
            self.error(DiagnosticKind.MALFORMED_FUNCTION, 'Expected "is".', token)
            self.stream.unget(token)

        consts: list[AstArg] = []
        block, _ = self.parse_block(consts)
        return AstFunction(name, block, data_type, args, consts)

    def parse_params(self) -> list[AstArg]:
        """Parse `name : type, ...)`; the opening `(` is already consumed."""
        args: list[AstArg] = []
        token = self.stream.next()
        if token.type == "RPAREN":
            return args
        self.stream.unget(token)

        while True:
            name_tok = self.stream.next()
            if name_tok.type != "IDENT":
                self.error(DiagnosticKind.MALFORMED_FUNCTION, "Expected argument name.", name_tok)
                self._skip_params(name_tok)
                return args

            colon_tok = self.stream.next()
            if colon_tok.type != "COLON":
                self.error(
                    DiagnosticKind.MALFORMED_FUNCTION,
                    "Expected colon in function argument.",
                    colon_tok,
                )
                self._skip_params(colon_tok)
                return args

            args.append(AstArg(str(name_tok.value), self.parse_data_type()))

            token = self.stream.next()
            if token.type == "RPAREN":
                return args
            if token.type != "COMMA":
                self.error(
                    DiagnosticKind.MALFORMED_FUNCTION,
                    "Expected ',' or ')' after argument.",
                    token,
                )
                self._skip_params(token)
                return args

    def _skip_params(self, token: Token) -> None:
        while token.type not in ("RPAREN", "EOF"):
            if token.type == "IS":
                self.stream.unget(token)
                return
            token = self.stream.next()

    def parse_struct(self) -> AstStruct:
        """Parse `NAME is (item : type [:= expr];)* end`; `struct` is already consumed."""
        token = self.stream.next()
        name = ""
        if token.type == "IDENT":
            name = str(token.value)
            token = self.stream.next()
        else:
            self.error(DiagnosticKind.MALFORMED_STRUCT, "Expected structure name.", token)
            if token.type not in ("IS", "EOF"):
                token = self.stream.next()

        if token.type != "IS":
            self.error(DiagnosticKind.MALFORMED_STRUCT, 'Expected "is".', token)
            self.stream.unget(token)

        items: list[AstArg] = []
        token = self.stream.next()
        while token.type not in ("END", "EOF"):
            if token.type != "IDENT":
                self.error(DiagnosticKind.MALFORMED_STRUCT, "Expected item name.", token)
                token = self.stream.next()
                continue

            colon_tok = self.stream.next()
            if colon_tok.type != "COLON":
                self.error(
                    DiagnosticKind.MALFORMED_STRUCT,
                    "Expected ':' in structure item.",
                    colon_tok,
                )
                self.stream.unget(colon_tok)
            data_type = self.parse_data_type()

            target = AstExpression("identifier", token.value, line=token.line, col=token.col)
            expr = self._initializer(self.parse_expression("SEMICOLON"), target, token)
            items.append(AstArg(str(token.value), data_type, expr))

            token = self.stream.next()

        if token.type == "EOF":
            self.error(DiagnosticKind.MALFORMED_STRUCT, 'Expected "end" before end of file.', token)
        return AstStruct(name, items)

    def parse_const(self) -> AstArg:
        """Parse `NAME : TYPE := EXPR;`; `const` is already consumed."""
        token = self.stream.next()
        name = ""
        if token.type == "IDENT":
            name = str(token.value)
        else:
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                "Expected name in constant declaration.",
                token,
            )
            if token.type == "COLON":
                self.stream.unget(token)

        token = self.stream.next()
        if token.type != "COLON":
            self.error(DiagnosticKind.MALFORMED_STATEMENT, "Expected colon.", token)
            self.stream.unget(token)

        data_type = self.parse_data_type()

        token = self.stream.next()
        if token.type != "ASSIGN":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT, "Expected assignment operator.", token
            )
            self.stream.unget(token)

        expr = self._nested(self.parse_expression("SEMICOLON"))
        return AstArg(name, data_type, expr)

    def parse_import(self) -> str:
        """Parse `a.b.c;` into the path `a/b/c`; `import` is already consumed."""
        path = ""
        token = self.stream.next()
        while token.type not in ("SEMICOLON", "EOF"):
            if token.type == "IDENT":
                path += str(token.value)
            elif token.type == "DOT":
                path += "/"
            else:
                self.error(
                    DiagnosticKind.MALFORMED_STATEMENT,
                    "Unexpected token in import path.",
                    token,
                )
            token = self.stream.next()
        return path

    #
    # Blocks and statements
    #
    def parse_block(
        self, consts: list[AstArg], chained: bool = False
    ) -> tuple[AstStatement, Token]:
        """
        Parse statements until `end` or end of stream.

        Parameters
        ----------
        consts : list[AstArg]
            Receives every local `const` declared in this block or a nested one.
        chained : bool
            When True, an `elif` or `else` also ends the block so the caller can
            continue the if-chain. Otherwise those keywords are reported.

        Returns
        -------
        tuple[AstStatement, Token]
            The block and the token that ended it (`END`, `EOF`, `ELIF` or `ELSE`).
        """
        statements: list[AstStatement] = []
        token = self.stream.next()

        while token.type not in ("END", "EOF"):
            if token.type in ("ELIF", "ELSE"):
                if chained:
                    break
                self.error(
                    DiagnosticKind.MALFORMED_STATEMENT,
                    f'Unexpected "{token.value}" outside of an if statement.',
                    token,
                )
            else:
                stmt = self.parse_statement(token, consts)
                if stmt is not None:
                    statements.append(stmt)
            token = self.stream.next()

        if token.type == "EOF":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT, 'Expected "end" before end of file.', token
            )
        return AstStatement("block", statements=statements), token

    def parse_statement(self, token: Token, consts: list[AstArg]) -> AstStatement | None:
        """Parse one statement whose leading token has already been read."""
        if token.type == "RETURN":
            expr = self._nested(self.parse_expression("SEMICOLON"))
            return AstStatement("return", expr=expr, line=token.line, col=token.col)
        if token.type == "VAR":
            return self.parse_variable_dec(token)
        if token.type == "CONST":
            consts.append(self.parse_const())
            return None
        if token.type == "STRUCT":
            return self.parse_struct_dec(token)
        if token.type == "IDENT":
            return self.parse_identifier_statement(token)
        if token.type == "WHILE":
            cond = self._nested(self.parse_expression("DO"))
            body, _ = self.parse_block(consts)
            return AstStatement(
                "while", expr=cond, statements=(body,), line=token.line, col=token.col
            )
        if token.type == "IF":
            return self.parse_if(token, consts)
        if token.type in ("BREAK", "CONTINUE"):
            term = self.stream.next()
            if term.type != "SEMICOLON":
                self.error(DiagnosticKind.MALFORMED_STATEMENT, "Expected terminator.", term)
                self.stream.unget(term)
            return AstStatement(token.type.lower(), line=token.line, col=token.col)

        self.error(DiagnosticKind.MALFORMED_STATEMENT, "Invalid token statement.", token)
        return None

    def parse_if(self, if_tok: Token, consts: list[AstArg]) -> AstStatement:
        """Parse `C then BLOCK` followed by its `elif`/`else` clauses, in order."""
        cond = self._nested(self.parse_expression("THEN"))
        body, term = self.parse_block(consts, chained=True)

        branches: list[AstStatement] = []
        seen_else = False
        while term.type in ("ELIF", "ELSE"):
            if seen_else:
                self.error(
                    DiagnosticKind.MALFORMED_STATEMENT,
                    f'Unexpected "{term.value}" after "else".',
                    term,
                )
            clause_tok = term
            if clause_tok.type == "ELIF":
                clause_cond = self._nested(self.parse_expression("THEN"))
                clause_body, term = self.parse_block(consts, chained=True)
                branches.append(
                    AstStatement(
                        "elif",
                        expr=clause_cond,
                        statements=(clause_body,),
                        line=clause_tok.line,
                        col=clause_tok.col,
                    )
                )
            else:
                seen_else = True
                clause_body, term = self.parse_block(consts, chained=True)
                branches.append(
                    AstStatement(
                        "else",
                        statements=(clause_body,),
                        line=clause_tok.line,
                        col=clause_tok.col,
                    )
                )

        return AstStatement(
            "if",
            expr=cond,
            statements=(body,),
            branches=branches,
            line=if_tok.line,
            col=if_tok.col,
        )

    def parse_variable_dec(self, var_tok: Token) -> AstStatement:
        """Parse `NAME : TYPE [:= EXPR];` or `NAME : TYPE[EXPR];`; `var` is already consumed."""
        token = self.stream.next()
        if token.type != "IDENT":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                "Expected name in variable declaration.",
                token,
            )
            self._skip_statement(token)
            return AstStatement("none", line=var_tok.line, col=var_tok.col)
        name_tok = token
        name = str(name_tok.value)

        token = self.stream.next()
        if token.type != "COLON":
            self.error(DiagnosticKind.MALFORMED_STATEMENT, "Expected colon.", token)
            self._skip_statement(token)
            return AstStatement("none", line=var_tok.line, col=var_tok.col)

        data_type = self.parse_data_type()

        token = self.stream.next()
        if token.type == "LBRACKET":
            size = self._nested(self.parse_expression("RBRACKET"))
            token = self.stream.next()
            if token.type != "SEMICOLON":
                self.error(DiagnosticKind.MALFORMED_STATEMENT, "Expected terminator.", token)
                self._skip_statement(token)
                return AstStatement("none", line=var_tok.line, col=var_tok.col)
            return AstStatement(
                "array_dec",
                name=name,
                data_type=data_type,
                expr=size,
                line=var_tok.line,
                col=var_tok.col,
            )
        self.stream.unget(token)

        target = AstExpression("identifier", name, line=name_tok.line, col=name_tok.col)
        expr = self._initializer(self.parse_expression("SEMICOLON"), target, name_tok)
        return AstStatement(
            "var_dec",
            name=name,
            data_type=data_type,
            expr=expr,
            line=var_tok.line,
            col=var_tok.col,
        )

    def parse_struct_dec(self, struct_tok: Token) -> AstStatement:
        """Parse `NAME : StructName;` inside a block; `struct` is already consumed."""
        token = self.stream.next()
        var_name = ""
        if token.type == "IDENT":
            var_name = str(token.value)
        else:
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                "Expected variable name in structure declaration.",
                token,
            )
            if token.type == "COLON":
                self.stream.unget(token)

        token = self.stream.next()
        if token.type != "COLON":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                "Expected ':' between structure variable name and structure name.",
                token,
            )
            self.stream.unget(token)

        struct_id = self._nested(self.parse_expression("SEMICOLON"))
        if struct_id.kind != "identifier":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                "Expected structure name in structure declaration.",
                token,
            )
        return AstStatement(
            "struct_dec",
            name=var_name,
            expr=struct_id,
            line=struct_tok.line,
            col=struct_tok.col,
        )

    def parse_identifier_statement(self, name_tok: Token) -> AstStatement:
        """
        Parse an assignment or call statement led by an identifier.

        The token after the identifier selects the lvalue shape: `[` array element,
        `.` struct member, anything else a bare identifier. The rest of the statement
        is parsed as an expression; an assignment there is completed with the lvalue,
        anything else becomes the argument expression of a call to the identifier.
        """
        name = str(name_tok.value)
        token = self.stream.next()
        if token.type == "LBRACKET":
            index = self._nested(self.parse_expression("RBRACKET"))
            lval = AstExpression(
                "array_acc", name, args=(index,), line=name_tok.line, col=name_tok.col
            )
        elif token.type == "DOT":
            lval = AstExpression(
                "struct_acc",
                name,
                args=(self._member(),),
                line=name_tok.line,
                col=name_tok.col,
            )
        else:
            self.stream.unget(token)
            lval = AstExpression("identifier", name, line=name_tok.line, col=name_tok.col)

        expr = self.parse_expression("SEMICOLON")
        if isinstance(expr, PendingAssignment):
            return AstStatement(
                "expr_stmt",
                expr=expr.complete(lval),
                line=name_tok.line,
                col=name_tok.col,
            )

        if lval.kind != "identifier":
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                f'Expected ":=" after "{name}" element access.',
                name_tok,
            )
        return AstStatement(
            "call_stmt", name=name, expr=expr, line=name_tok.line, col=name_tok.col
        )

    def _skip_statement(self, token: Token) -> None:
        while token.type != "SEMICOLON":
            if token.type in ("END", "EOF"):
                self.stream.unget(token)
                return
            token = self.stream.next()

    def _initializer(
        self, expr: Operand, target: AstExpression, token: Token
    ) -> AstExpression:
        """Complete an initializer `:= E` with its implicit target."""
        if isinstance(expr, PendingAssignment):
            return expr.complete(target)
        if not expr.is_none():
            self.error(
                DiagnosticKind.MALFORMED_STATEMENT,
                f'Expected ":=" in declaration of "{target.name}".',
                token,
            )
        return expr

    #
    # Expressions
    #
    def parse_expression(self, stop: str) -> Operand:
        """
        Parse one expression, consuming tokens up to and including `stop`.

        Parameters
        ----------
        stop : str
            Token type that ends the expression (e.g. "SEMICOLON", "RPAREN", "THEN").

        Returns
        -------
        AstExpression | PendingAssignment
            The expression; a "list" node if a `,` was seen; the "none" marker if no
            tokens were consumed; a `PendingAssignment` if the root is `:=`.
        """
        stack: list[Operand] = []
        op_stack: list[Token] = []
        items: list[AstExpression] = []
        is_list = False

        first = token = self.stream.next()
        while token.type != stop and token.type != "EOF":
            if token.type == "LPAREN":
                stack.append(self.parse_expression("RPAREN"))
            elif token.type == "COMMA":
                is_list = True
                self.process_expression(stack, op_stack)
                if stack:
                    items.append(self._nested(stack.pop()))
                else:
                    self.error(
                        DiagnosticKind.MALFORMED_EXPRESSION,
                        "Expected expression before ','.",
                        token,
                    )
                self._drop_leftovers(stack, token)
            elif token.type == "IDENT":
                stack.append(self.parse_identifier(token))
            elif token.type in LITERAL_TOKENS:
                stack.append(
                    AstExpression(
                        LITERAL_TOKENS[token.type],
                        token.value,
                        line=token.line,
                        col=token.col,
                    )
                )
            elif token.type in ("TRUE", "FALSE"):
                stack.append(
                    AstExpression(
                        "bool", token.type == "TRUE", line=token.line, col=token.col
                    )
                )
            elif token.type in operator_tokens:
                op_stack.append(token)
            else:
                self.error(
                    DiagnosticKind.MALFORMED_EXPRESSION,
                    "Invalid token in expression.",
                    token,
                )
            token = self.stream.next()

        if token.type == "EOF" and stop != "EOF":
            self.error(
                DiagnosticKind.MALFORMED_EXPRESSION,
                f"Expected '{token_spellings.get(stop, stop)}' before end of file.",
                token,
            )

        self.process_expression(stack, op_stack)

        if is_list:
            if stack:
                items.append(self._nested(stack.pop()))
            self._drop_leftovers(stack, token)
            return AstExpression("list", items=items, line=first.line, col=first.col)

        if not stack:
            return AstExpression.none(first.line, first.col)
        result = stack.pop()
        self._drop_leftovers(stack, token)
        return result

    def process_expression(self, stack: list[Operand], op_stack: list[Token]) -> None:
        """
        Reduce every pending operator, most recent first.

        An assignment takes one operand (its right-hand side) and leaves a
        `PendingAssignment`; every other operator takes the right operand, then the
        left one, and leaves the completed node on the operand stack.
        """
        while op_stack:
            op = op_stack.pop()
            kind = operator_tokens[op.type]
            if kind == "assign":
                rval = self._pop_operand(stack, op)
                stack.append(PendingAssignment(rval, op))
            else:
                rval = self._pop_operand(stack, op)
                lval = self._pop_operand(stack, op)
                stack.append(
                    AstExpression(kind, args=(lval, rval), line=op.line, col=op.col)
                )

    def parse_identifier(self, token: Token) -> AstExpression:
        """Parse an identifier and an optional call, index or member suffix."""
        name = token.value
        nxt = self.stream.next()
        if nxt.type == "LPAREN":
            arg = self._nested(self.parse_expression("RPAREN"))
            return AstExpression("call", name, args=(arg,), line=token.line, col=token.col)
        if nxt.type == "LBRACKET":
            arg = self._nested(self.parse_expression("RBRACKET"))
            return AstExpression(
                "array_acc", name, args=(arg,), line=token.line, col=token.col
            )
        if nxt.type == "DOT":
            return AstExpression(
                "struct_acc",
                name,
                args=(self._member(),),
                line=token.line,
                col=token.col,
            )
        self.stream.unget(nxt)
        return AstExpression("identifier", name, line=token.line, col=token.col)

    def _member(self) -> AstExpression:
        token = self.stream.next()
        if token.type == "IDENT":
            return AstExpression("identifier", token.value, line=token.line, col=token.col)
        self.error(
            DiagnosticKind.MALFORMED_EXPRESSION,
            "Expected item name in structure access.",
            token,
        )
        self.stream.unget(token)
        return AstExpression("identifier", "", line=token.line, col=token.col)

    def _pop_operand(self, stack: list[Operand], op: Token) -> AstExpression:
        if not stack:
            self.error(
                DiagnosticKind.MALFORMED_EXPRESSION,
                f"Missing operand for '{op.value}'.",
                op,
            )
            return AstExpression.none(op.line, op.col)
        return self._nested(stack.pop())

    def _nested(self, operand: Operand) -> AstExpression:
        """Return `operand` as a plain expression; an untargeted assignment is reported."""
        if isinstance(operand, PendingAssignment):
            self.error(
                DiagnosticKind.MALFORMED_EXPRESSION,
                "Assignment has no target in this position.",
                operand.token,
            )
            return operand.complete(
                AstExpression.none(operand.token.line, operand.token.col)
            )
        return operand

    def _drop_leftovers(self, stack: list[Operand], token: Token) -> None:
        if stack:
            self.error(
                DiagnosticKind.MALFORMED_EXPRESSION,
                f"Expected operator; {len(stack)} operand(s) left unused.",
                token,
            )
            stack.clear()

    #
    # Types
    #
    def parse_data_type(self) -> DataType:
        token = self.stream.next()
        if token.type in data_type_tokens:
            return DataType[data_type_tokens[token.type]]
        self.error(DiagnosticKind.UNKNOWN_DATA_TYPE, "Unknown data type token.", token)
        return DataType.VOID


def parse_source(
    source: str, name: str = "", strict: bool = False
) -> tuple[AstFile, Diagnostics]:
    """Lex and parse `source`, returning the AST and the collected diagnostics.

    Raises:
        SyntaxError: If the lexer meets an unterminated literal.
        ParseError: On the first diagnostic when `strict` is True.
    """
    parser = Parser(TokenStream.from_source(source), name=name, strict=strict)
    return parser.parse(), parser.diagnostics


__all__ = ["Parser", "PendingAssignment", "parse_source"]
