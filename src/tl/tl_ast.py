"""
Defines the abstract syntax tree (AST) node structure for the TL programming language.

Classes:
    DataType:
        Closed enumeration of the primitive types a declaration can carry.

    AstExpression:
        Expression node: literals, identifiers, lists, calls, array/struct access and
        binary operators (each operator owns exactly two operands).

    AstStatement:
        Statement node: blocks, declarations, expression and call statements, loops and
        the if/elif/else chain.

    AstArg, AstFunction, AstStruct, AstFile:
        Declaration records: parameters/struct items/constants, functions, structure
        definitions and the whole translation unit.

Nodes are built bottom-up by the parser and handed to their parent once complete.
They expose read-only properties over tuples; there is no way to mutate a node after
construction. Equality is structural and ignores source positions, so two parses of
equivalent text compare equal.

Example:
    five = AstExpression("int", 5)
    x = AstExpression("identifier", "x")
    init = AstExpression("assign", args=(x, five))
    stmt = AstStatement("var_dec", name="x", data_type=DataType.I32, expr=init)
"""

from enum import Enum
from typing import Any, TypedDict, Union

from tl.tl_constants import operator_tokens

BINARY_KINDS: frozenset[str] = frozenset(operator_tokens.values())


class DataType(Enum):
    VOID = "void"
    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"
    I64 = "i64"
    U64 = "u64"
    STRING = "string"
    CHAR = "char"
    BOOL = "bool"

    def __str__(self) -> str:
        return self.value


class ExprDict(TypedDict, total=False):
    kind: str
    value: Any
    line: int
    col: int
    args: list["ExprDict"]
    items: list["ExprDict"]


class StmtDict(TypedDict, total=False):
    kind: str
    name: str
    data_type: str
    expr: ExprDict
    line: int
    col: int
    statements: list["StmtDict"]
    branches: list["StmtDict"]


class AstExpression:
    """
    Represents an expression node in the TL syntax tree.

    Args:
        kind (str): The expression kind (e.g. "int", "identifier", "call", "add").
        value (str | int | bool, optional): Literal payload, or the name of an
            identifier/call/array access/struct access.
        args (tuple[AstExpression, ...]): Operands. Binary operators hold exactly two
            (left/assigned-to first); call, array and struct access hold their single
            sub-argument.
        items (tuple[AstExpression, ...]): Ordered children of a "list" node.
        line (int): Source line number (default is 0).
        col (int): Source column number (default is 0).
    """

    __slots__ = ("_kind", "_value", "_args", "_items", "_line", "_col")

    def __init__(
        self,
        kind: str,
        value: str | int | bool | None = None,
        args: Union[tuple["AstExpression", ...], list["AstExpression"]] = (),
        items: Union[tuple["AstExpression", ...], list["AstExpression"]] = (),
        line: int = 0,
        col: int = 0,
    ):
        self._kind = kind
        self._value = value
        self._args = tuple(args)
        self._items = tuple(items)
        self._line = line
        self._col = col

    @classmethod
    def none(cls, line: int = 0, col: int = 0) -> "AstExpression":
        """The empty marker returned when an expression consumed no tokens."""
        return cls("none", line=line, col=col)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def value(self) -> str | int | bool | None:
        return self._value

    @property
    def name(self) -> str:
        return "" if self._value is None else str(self._value)

    @property
    def args(self) -> tuple["AstExpression", ...]:
        return self._args

    @property
    def items(self) -> tuple["AstExpression", ...]:
        return self._items

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    @property
    def arg(self) -> "AstExpression":
        """Sub-argument of a call, array access or struct access."""
        return self._args[0]

    @property
    def lval(self) -> "AstExpression":
        """Left (assigned-to) operand.

        Raises:
            IndexError: If the node does not hold two operands.
        """
        if len(self._args) < 2:
            raise IndexError(f"{self._kind} node has {len(self._args)} operand(s), lval needs 2")
        return self._args[0]

    @property
    def rval(self) -> "AstExpression":
        """Right (value) operand.

        Raises:
            IndexError: If the node does not hold two operands.
        """
        if len(self._args) < 2:
            raise IndexError(f"{self._kind} node has {len(self._args)} operand(s), rval needs 2")
        return self._args[1]

    def is_none(self) -> bool:
        return self._kind == "none"

    def __repr__(self) -> str:
        parts = [self._kind]
        if self._value is not None:
            parts.append(f"value={self._value!r}")
        if self._args:
            parts.append(f"args=[{', '.join(repr(a) for a in self._args)}]")
        if self._items:
            parts.append(f"items=[{', '.join(repr(i) for i in self._items)}]")
        return f"AstExpression({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstExpression):
            return NotImplemented
        return (
            self._kind == other._kind
            and type(self._value) is type(other._value)
            and self._value == other._value
            and self._args == other._args
            and self._items == other._items
        )

    def __hash__(self) -> int:
        return hash((self._kind, self._value, self._args, self._items))

    def to_dict(self) -> ExprDict:
        out: ExprDict = {
            "kind": self._kind,
            "value": self._value,
            "line": self._line,
            "col": self._col,
        }
        if self._args:
            out["args"] = [a.to_dict() for a in self._args]
        if self._items:
            out["items"] = [i.to_dict() for i in self._items]
        return out


class AstStatement:
    """
    Represents a statement node in the TL syntax tree.

    Args:
        kind (str): The statement kind ("block", "var_dec", "call_stmt", "if", ...).
        name (str): Declared variable name or callee name, if any.
        data_type (DataType): Declared type for declarations (VOID otherwise).
        expr (AstExpression, optional): Owned expression: initializer, condition,
            assignment or call arguments. Defaults to the "none" marker.
        statements (tuple[AstStatement, ...]): Children of a block, or the single
            body block of while/if/elif/else.
        branches (tuple[AstStatement, ...]): The elif/else clauses chained off an if.
    """

    __slots__ = (
        "_kind",
        "_name",
        "_data_type",
        "_expr",
        "_statements",
        "_branches",
        "_line",
        "_col",
    )

    def __init__(
        self,
        kind: str,
        name: str = "",
        data_type: DataType = DataType.VOID,
        expr: AstExpression | None = None,
        statements: Union[tuple["AstStatement", ...], list["AstStatement"]] = (),
        branches: Union[tuple["AstStatement", ...], list["AstStatement"]] = (),
        line: int = 0,
        col: int = 0,
    ):
        self._kind = kind
        self._name = name
        self._data_type = data_type
        self._expr = expr if expr is not None else AstExpression.none()
        self._statements = tuple(statements)
        self._branches = tuple(branches)
        self._line = line
        self._col = col

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def name(self) -> str:
        return self._name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def expr(self) -> AstExpression:
        return self._expr

    @property
    def statements(self) -> tuple["AstStatement", ...]:
        return self._statements

    @property
    def branches(self) -> tuple["AstStatement", ...]:
        return self._branches

    @property
    def line(self) -> int:
        return self._line

    @property
    def col(self) -> int:
        return self._col

    @property
    def block(self) -> "AstStatement":
        """Body block of a while/if/elif/else statement."""
        return self._statements[0]

    def __repr__(self) -> str:
        parts = [self._kind]
        if self._name:
            parts.append(f"name={self._name!r}")
        if self._data_type is not DataType.VOID:
            parts.append(f"data_type={self._data_type.name}")
        if not self._expr.is_none():
            parts.append(f"expr={self._expr!r}")
        if self._statements:
            preview = ", ".join(repr(s) for s in self._statements[:3])
            if len(self._statements) > 3:
                preview += ", ..."
            parts.append(f"statements=[{preview}]")
        if self._branches:
            parts.append(f"branches=[{', '.join(repr(b) for b in self._branches)}]")
        return f"AstStatement({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstStatement):
            return NotImplemented
        return (
            self._kind == other._kind
            and self._name == other._name
            and self._data_type == other._data_type
            and self._expr == other._expr
            and self._statements == other._statements
            and self._branches == other._branches
        )

    def __hash__(self) -> int:
        return hash((self._kind, self._name, self._data_type, self._expr, self._statements))

    def to_dict(self) -> StmtDict:
        out: StmtDict = {
            "kind": self._kind,
            "name": self._name,
            "data_type": self._data_type.value,
            "expr": self._expr.to_dict(),
            "line": self._line,
            "col": self._col,
        }
        if self._statements:
            out["statements"] = [s.to_dict() for s in self._statements]
        if self._branches:
            out["branches"] = [b.to_dict() for b in self._branches]
        return out


class AstArg:
    """A typed name: function parameter, structure item or constant."""

    __slots__ = ("_name", "_data_type", "_expr")

    def __init__(
        self, name: str, data_type: DataType, expr: AstExpression | None = None
    ):
        self._name = name
        self._data_type = data_type
        self._expr = expr if expr is not None else AstExpression.none()

    @property
    def name(self) -> str:
        return self._name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def expr(self) -> AstExpression:
        return self._expr

    def __repr__(self) -> str:
        return f"AstArg({self._name!r}, {self._data_type.name}, {self._expr!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstArg):
            return NotImplemented
        return (
            self._name == other._name
            and self._data_type == other._data_type
            and self._expr == other._expr
        )

    def __hash__(self) -> int:
        return hash((self._name, self._data_type, self._expr))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "data_type": self._data_type.value,
            "expr": self._expr.to_dict(),
        }


class AstFunction:
    """A function definition: name, return type, parameters, local constants and body."""

    __slots__ = ("_name", "_data_type", "_args", "_consts", "_block")

    def __init__(
        self,
        name: str,
        block: AstStatement,
        data_type: DataType = DataType.VOID,
        args: Union[tuple[AstArg, ...], list[AstArg]] = (),
        consts: Union[tuple[AstArg, ...], list[AstArg]] = (),
    ):
        self._name = name
        self._block = block
        self._data_type = data_type
        self._args = tuple(args)
        self._consts = tuple(consts)

    @property
    def name(self) -> str:
        return self._name

    @property
    def data_type(self) -> DataType:
        return self._data_type

    @property
    def args(self) -> tuple[AstArg, ...]:
        return self._args

    @property
    def consts(self) -> tuple[AstArg, ...]:
        return self._consts

    @property
    def block(self) -> AstStatement:
        return self._block

    def __repr__(self) -> str:
        return (
            f"AstFunction({self._name!r}, data_type={self._data_type.name}, "
            f"args={list(self._args)!r}, block={self._block!r})"
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstFunction):
            return NotImplemented
        return (
            self._name == other._name
            and self._data_type == other._data_type
            and self._args == other._args
            and self._consts == other._consts
            and self._block == other._block
        )

    def __hash__(self) -> int:
        return hash((self._name, self._data_type, self._args))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "data_type": self._data_type.value,
            "args": [a.to_dict() for a in self._args],
            "consts": [c.to_dict() for c in self._consts],
            "block": self._block.to_dict(),
        }


class AstStruct:
    """A structure definition and its typed items."""

    __slots__ = ("_name", "_items")

    def __init__(self, name: str, items: Union[tuple[AstArg, ...], list[AstArg]] = ()):
        self._name = name
        self._items = tuple(items)

    @property
    def name(self) -> str:
        return self._name

    @property
    def items(self) -> tuple[AstArg, ...]:
        return self._items

    def __repr__(self) -> str:
        return f"AstStruct({self._name!r}, items={list(self._items)!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstStruct):
            return NotImplemented
        return self._name == other._name and self._items == other._items

    def __hash__(self) -> int:
        return hash((self._name, self._items))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self._name, "items": [i.to_dict() for i in self._items]}


class AstFile:
    """
    A whole translation unit.

    Every list keeps declaration order.

    Args:
        name (str): File name the source was loaded from (may be empty).
        functions, structs, consts: Top-level declarations.
        imports (tuple[str, ...]): Import paths, dots replaced with "/".
    """

    __slots__ = ("_name", "_functions", "_structs", "_consts", "_imports")

    def __init__(
        self,
        name: str = "",
        functions: Union[tuple[AstFunction, ...], list[AstFunction]] = (),
        structs: Union[tuple[AstStruct, ...], list[AstStruct]] = (),
        consts: Union[tuple[AstArg, ...], list[AstArg]] = (),
        imports: Union[tuple[str, ...], list[str]] = (),
    ):
        self._name = name
        self._functions = tuple(functions)
        self._structs = tuple(structs)
        self._consts = tuple(consts)
        self._imports = tuple(imports)

    @property
    def name(self) -> str:
        return self._name

    @property
    def functions(self) -> tuple[AstFunction, ...]:
        return self._functions

    @property
    def structs(self) -> tuple[AstStruct, ...]:
        return self._structs

    @property
    def consts(self) -> tuple[AstArg, ...]:
        return self._consts

    @property
    def imports(self) -> tuple[str, ...]:
        return self._imports

    def __repr__(self) -> str:
        return f"AstFile({self._name!r}, functions={[f.name for f in self._functions]!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AstFile):
            return NotImplemented
        return (
            self._functions == other._functions
            and self._structs == other._structs
            and self._consts == other._consts
            and self._imports == other._imports
        )

    def __hash__(self) -> int:
        return hash((self._functions, self._structs, self._consts, self._imports))

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self._name,
            "imports": list(self._imports),
            "consts": [c.to_dict() for c in self._consts],
            "structs": [s.to_dict() for s in self._structs],
            "functions": [f.to_dict() for f in self._functions],
        }
