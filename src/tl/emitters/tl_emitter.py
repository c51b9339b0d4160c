"""
Re-emits a TL AST as canonical TL source (the "unwriter").

This module defines the `SourceEmitter` class, which walks an already built
`AstFile` and writes it back out in a normalized form. Parsing the output again
yields a structurally equal tree.

Canonical Form:
    - Imports, then constants, then structures, then functions, in declaration order.
    - Four-space indentation, one statement per line, every block closed by `end`.
    - Local constants are emitted at the top of their function body.
    - Binary operands that are themselves operators (or lists) are parenthesized,
      so the right-associated folding of the parser rebuilds the same tree.
    - Only the outer `if` of an if/elif/else chain emits the closing `end`.

Behavior:
    - Maintains a line buffer (`lines`) retrieved with `get_output()`.
    - Placeholder ("none") statements left by error recovery emit nothing.

Raises:
    NotImplementedError: If an unrecognized node kind has no corresponding emitter.
"""

from tl.tl_ast import (
    BINARY_KINDS,
    AstArg,
    AstExpression,
    AstFile,
    AstFunction,
    AstStatement,
    AstStruct,
    DataType,
)
from tl.tl_constants import operator_symbols


class SourceEmitter:
    """Emits TL source from TL AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted source.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines) + "\n" if self.lines else ""

    def line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    #
    # Expressions
    #
    def emit_expr(self, node: AstExpression) -> str:
        """
        Dispatches expression emission based on node kind.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        if node.kind in BINARY_KINDS:
            return self.emit_expr_binary(node)
        method = getattr(self, f"emit_expr_{node.kind}", None)
        if callable(method):
            return str(method(node))
        raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")

    def emit_expr_none(self, node: AstExpression) -> str:
        return ""

    def emit_expr_int(self, node: AstExpression) -> str:
        return str(node.value)

    def emit_expr_string(self, node: AstExpression) -> str:
        return f'"{node.value}"'

    def emit_expr_char(self, node: AstExpression) -> str:
        return f"'{node.value}'"

    def emit_expr_bool(self, node: AstExpression) -> str:
        return "true" if node.value else "false"

    def emit_expr_identifier(self, node: AstExpression) -> str:
        return node.name

    def emit_expr_list(self, node: AstExpression) -> str:
        return ", ".join(self.emit_list_item(item) for item in node.items)

    def emit_list_item(self, node: AstExpression) -> str:
        text = self.emit_expr(node)
        if node.kind == "list":
            return f"({text})"
        return text

    def emit_expr_call(self, node: AstExpression) -> str:
        return f"{node.name}({self.emit_expr(node.arg)})"

    def emit_expr_array_acc(self, node: AstExpression) -> str:
        return f"{node.name}[{self.emit_expr(node.arg)}]"

    def emit_expr_struct_acc(self, node: AstExpression) -> str:
        return f"{node.name}.{node.arg.name}"

    def emit_expr_binary(self, node: AstExpression) -> str:
        """
        Emits `lval OP rval`, parenthesizing compound operands.

        Parameters
        ----------
        node : AstExpression
            An operator node with exactly two operands.
        """
        left = self.emit_operand(node.lval)
        right = self.emit_operand(node.rval)
        return f"{left} {operator_symbols[node.kind]} {right}".strip()

    def emit_operand(self, node: AstExpression) -> str:
        text = self.emit_expr(node)
        if node.kind in BINARY_KINDS or node.kind == "list":
            return f"({text})"
        return text

    def emit_initializer(self, expr: AstExpression) -> str:
        """Emits ` := VALUE` for an initializer, or nothing when absent."""
        if expr.is_none():
            return ""
        value = expr.rval if expr.kind == "assign" else expr
        return f" := {self.emit_expr(value)}"

    #
    # Statements
    #
    def _visit(self, node: AstStatement) -> None:
        """
        Dispatches a statement node to the appropriate emit method.

        Raises
        ------
        NotImplementedError
            If no emitter is defined for the node kind.
        """
        method = getattr(self, f"emit_{node.kind}", None)
        if not callable(method):
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
        method(node)

    def emit_none(self, node: AstStatement) -> None:
        pass

    def emit_block(self, node: AstStatement) -> None:
        for stmt in node.statements:
            self._visit(stmt)

    def emit_body(self, node: AstStatement) -> None:
        self.indent += 1
        self._visit(node)
        self.indent -= 1

    def emit_var_dec(self, node: AstStatement) -> None:
        self.line(f"var {node.name} : {node.data_type}{self.emit_initializer(node.expr)};")

    def emit_array_dec(self, node: AstStatement) -> None:
        self.line(f"var {node.name} : {node.data_type}[{self.emit_expr(node.expr)}];")

    def emit_struct_dec(self, node: AstStatement) -> None:
        self.line(f"struct {node.name} : {self.emit_expr(node.expr)};")

    def emit_expr_stmt(self, node: AstStatement) -> None:
        expr = node.expr
        self.line(f"{self.emit_expr(expr.lval)} := {self.emit_expr(expr.rval)};")

    def emit_call_stmt(self, node: AstStatement) -> None:
        self.line(f"{node.name}({self.emit_expr(node.expr)});")

    def emit_return(self, node: AstStatement) -> None:
        if node.expr.is_none():
            self.line("return;")
        else:
            self.line(f"return {self.emit_expr(node.expr)};")

    def emit_break(self, node: AstStatement) -> None:
        self.line("break;")

    def emit_continue(self, node: AstStatement) -> None:
        self.line("continue;")

    def emit_while(self, node: AstStatement) -> None:
        self.line(f"while {self.emit_expr(node.expr)} do")
        self.emit_body(node.block)
        self.line("end")

    def emit_if(self, node: AstStatement) -> None:
        """
        Emits an `if` with its chained clauses and the single closing `end`.

        Parameters
        ----------
        node : AstStatement
            The if-node; its `branches` hold the `elif`/`else` clauses in order.
        """
        self.line(f"if {self.emit_expr(node.expr)} then")
        self.emit_body(node.block)
        for branch in node.branches:
            self._visit(branch)
        self.line("end")

    def emit_elif(self, node: AstStatement) -> None:
        self.line(f"elif {self.emit_expr(node.expr)} then")
        self.emit_body(node.block)

    def emit_else(self, node: AstStatement) -> None:
        self.line("else")
        self.emit_body(node.block)

    #
    # Declarations
    #
    def emit_const(self, const: AstArg) -> None:
        self.line(
            f"const {const.name} : {const.data_type} := {self.emit_expr(const.expr)};"
        )

    def emit_struct(self, struct: AstStruct) -> None:
        self.line(f"struct {struct.name} is")
        self.indent += 1
        for item in struct.items:
            self.line(f"{item.name} : {item.data_type}{self.emit_initializer(item.expr)};")
        self.indent -= 1
        self.line("end")

    def emit_function(self, func: AstFunction) -> None:
        header = f"func {func.name}"
        if func.args:
            params = ", ".join(f"{a.name} : {a.data_type}" for a in func.args)
            header += f"({params})"
        if func.data_type is not DataType.VOID:
            header += f" -> {func.data_type}"
        self.line(f"{header} is")

        self.indent += 1
        for const in func.consts:
            self.emit_const(const)
        self._visit(func.block)
        self.indent -= 1
        self.line("end")

    def emit_file(self, file: AstFile) -> None:
        for path in file.imports:
            self.line(f"import {path.replace('/', '.')};")
        for const in file.consts:
            self.emit_const(const)
        if file.imports or file.consts:
            self.lines.append("")

        for struct in file.structs:
            self.emit_struct(struct)
            self.lines.append("")
        for func in file.functions:
            self.emit_function(func)
            self.lines.append("")

        while self.lines and self.lines[-1] == "":
            self.lines.pop()


def unwrite(file: AstFile) -> str:
    """Returns the canonical TL source for `file`."""
    emitter = SourceEmitter()
    emitter.emit_file(file)
    return emitter.get_output()
