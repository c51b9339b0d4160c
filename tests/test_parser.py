import pytest
from hypothesis import given
from hypothesis import strategies as st

from tl.tl_ast import AstArg, AstExpression, AstFile, AstStatement, DataType
from tl.tl_constants import KEYWORDS, operator_symbols
from tl.tl_diagnostics import DiagnosticKind, Diagnostics, ParseError
from tl.tl_lexer import TokenStream
from tl.tl_parser import Parser, PendingAssignment, parse_source

names = st.from_regex(r"[a-z_][a-z0-9_]{0,7}", fullmatch=True).filter(
    lambda s: s not in KEYWORDS
)
data_types = st.sampled_from([t for t in DataType if t is not DataType.VOID])
binary_ops = st.sampled_from(sorted(k for k in operator_symbols if k != "assign"))


def parse(source: str) -> tuple[AstFile, Diagnostics]:
    return parse_source(source)


def parse_ok(source: str) -> AstFile:
    file, diagnostics = parse_source(source)
    assert not diagnostics.has_errors, diagnostics.render()
    return file


def body(source: str) -> tuple[AstStatement, ...]:
    """Statements of a single function wrapped around `source`."""
    return parse_ok(f"func f is {source} end").functions[0].block.statements


def expr(source: str, stop: str = "SEMICOLON") -> AstExpression:
    parser = Parser(TokenStream.from_source(source))
    result = parser.parse_expression(stop)
    assert not parser.diagnostics.has_errors, parser.diagnostics.render()
    assert isinstance(result, AstExpression)
    return result


def expr_with_diagnostics(source: str) -> tuple[object, Diagnostics]:
    parser = Parser(TokenStream.from_source(source))
    return parser.parse_expression("SEMICOLON"), parser.diagnostics


def ident(name: str) -> AstExpression:
    return AstExpression("identifier", name)


def num(value: int) -> AstExpression:
    return AstExpression("int", value)


def binop(kind: str, lval: AstExpression, rval: AstExpression) -> AstExpression:
    return AstExpression(kind, args=(lval, rval))


def assign(target: AstExpression, value: AstExpression) -> AstExpression:
    return binop("assign", target, value)


#
# Expressions
#


def test_empty_expression_is_none_marker() -> None:
    assert expr(";").is_none()


@pytest.mark.parametrize(
    "source,expected",
    [
        ("42;", num(42)),
        ('"hi";', AstExpression("string", "hi")),
        ("'c';", AstExpression("char", "c")),
        ("true;", AstExpression("bool", True)),
        ("false;", AstExpression("bool", False)),
        ("x;", ident("x")),
    ],
)
def test_leaf_expressions(source: str, expected: AstExpression) -> None:
    assert expr(source) == expected


@given(a=names, b=names, op=binary_ops)
def test_binary_operand_order(a: str, b: str, op: str) -> None:
    node = expr(f"{a} {operator_symbols[op]} {b};")
    assert node.kind == op
    assert node.lval == ident(a)
    assert node.rval == ident(b)


def test_uniform_precedence_folds_right() -> None:
    assert expr("a - b - c;") == binop("sub", ident("a"), binop("sub", ident("b"), ident("c")))
    assert expr("a * b + c;") == binop("mul", ident("a"), binop("add", ident("b"), ident("c")))


def test_grouping_controls_fold() -> None:
    assert expr("(a * b) + c;") == binop("add", binop("mul", ident("a"), ident("b")), ident("c"))


@pytest.mark.parametrize("inner", ["a + b", "f(x)", "a, b", "1", "p.x - q[2]"])
def test_parentheses_are_transparent(inner: str) -> None:
    assert expr(f"({inner});") == expr(f"{inner};")
    assert expr(f"(({inner}));") == expr(f"{inner};")


@given(a=names, b=names, op=binary_ops)
def test_parenthesized_binary_is_transparent(a: str, b: str, op: str) -> None:
    text = f"{a} {operator_symbols[op]} {b}"
    assert expr(f"({text});") == expr(f"{text};")


def test_call_arguments_form_ordered_list() -> None:
    node = expr("f(a, b, c);")
    assert node.kind == "call"
    assert node.name == "f"
    assert node.arg.kind == "list"
    assert node.arg.items == (ident("a"), ident("b"), ident("c"))


def test_call_without_arguments_has_none_argument() -> None:
    node = expr("f();")
    assert node.kind == "call"
    assert node.arg.is_none()


def test_call_with_single_argument() -> None:
    assert expr("f(a + 1);").arg == binop("add", ident("a"), num(1))


def test_top_level_list_keeps_last_item() -> None:
    node = expr("a, b + 1, c;")
    assert node.kind == "list"
    assert node.items == (ident("a"), binop("add", ident("b"), num(1)), ident("c"))


def test_nested_call_arguments() -> None:
    node = expr("f(g(1, 2), h());")
    inner = node.arg.items
    assert inner[0] == AstExpression(
        "call", "g", args=(AstExpression("list", items=(num(1), num(2))),)
    )
    assert inner[1] == AstExpression("call", "h", args=(AstExpression.none(),))


def test_array_access() -> None:
    node = expr("a[i + 1];")
    assert node == AstExpression("array_acc", "a", args=(binop("add", ident("i"), num(1)),))


def test_struct_access() -> None:
    assert expr("p.x;") == AstExpression("struct_acc", "p", args=(ident("x"),))


def test_stop_token_is_consumed() -> None:
    stream = TokenStream.from_source("a then b")
    parser = Parser(stream)
    assert parser.parse_expression("THEN") == ident("a")
    assert stream.next().value == "b"


def test_assignment_is_pending_until_target_known() -> None:
    parser = Parser(TokenStream.from_source(":= a + 1;"))
    result = parser.parse_expression("SEMICOLON")
    assert isinstance(result, PendingAssignment)
    assert result.value == binop("add", ident("a"), num(1))
    assert result.complete(ident("x")) == assign(ident("x"), binop("add", ident("a"), num(1)))


def test_invalid_token_is_skipped() -> None:
    result, diagnostics = expr_with_diagnostics("a then;")
    assert result == ident("a")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_EXPRESSION]


def test_missing_operand_becomes_none() -> None:
    result, diagnostics = expr_with_diagnostics("+ 5;")
    assert result == binop("add", AstExpression.none(), num(5))
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_EXPRESSION]


def test_leftover_operands_are_reported() -> None:
    result, diagnostics = expr_with_diagnostics("a b;")
    assert result == ident("b")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_EXPRESSION]


def test_nested_assignment_is_reported() -> None:
    result, diagnostics = expr_with_diagnostics("f(:= 1);")
    assert isinstance(result, AstExpression)
    assert result.arg == assign(AstExpression.none(), num(1))
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_EXPRESSION]


#
# Statements
#


def test_var_declaration() -> None:
    (stmt,) = body("var x : i32 := 5;")
    assert stmt.kind == "var_dec"
    assert stmt.name == "x"
    assert stmt.data_type is DataType.I32
    assert stmt.expr == assign(ident("x"), num(5))


@given(name=names, data_type=data_types, value=st.integers(0, 2**64 - 1))
def test_var_declaration_initializer(name: str, data_type: DataType, value: int) -> None:
    (stmt,) = body(f"var {name} : {data_type} := {value};")
    assert stmt.data_type is data_type
    assert stmt.expr.kind == "assign"
    assert stmt.expr.lval == ident(name)
    assert stmt.expr.rval == num(value)


def test_var_declaration_without_initializer() -> None:
    (stmt,) = body("var x : bool;")
    assert stmt.kind == "var_dec"
    assert stmt.expr.is_none()


def test_array_declaration() -> None:
    (stmt,) = body("var buf : u8[16];")
    assert stmt.kind == "array_dec"
    assert stmt.name == "buf"
    assert stmt.data_type is DataType.U8
    assert stmt.expr == num(16)


def test_struct_variable_declaration() -> None:
    (stmt,) = body("struct p : Point;")
    assert stmt.kind == "struct_dec"
    assert stmt.name == "p"
    assert stmt.expr == ident("Point")


def test_assignment_to_identifier() -> None:
    (stmt,) = body("x := x + 1;")
    assert stmt.kind == "expr_stmt"
    assert stmt.expr == assign(ident("x"), binop("add", ident("x"), num(1)))


def test_assignment_to_array_element() -> None:
    (stmt,) = body("a[2] := 3;")
    target = AstExpression("array_acc", "a", args=(num(2),))
    assert stmt.expr == assign(target, num(3))


def test_assignment_to_struct_member() -> None:
    (stmt,) = body("p.x := 3;")
    target = AstExpression("struct_acc", "p", args=(ident("x"),))
    assert stmt.expr == assign(target, num(3))


@pytest.mark.parametrize(
    "source,expected",
    [
        ('print("hi");', AstExpression("string", "hi")),
        ('print("a", 1);', AstExpression("list", items=(AstExpression("string", "a"), num(1)))),
        ("tick();", AstExpression.none()),
    ],
)
def test_call_statement(source: str, expected: AstExpression) -> None:
    (stmt,) = body(source)
    assert stmt.kind == "call_stmt"
    assert stmt.expr == expected


def test_return_statement() -> None:
    value, bare = body("return x + 1; return;")
    assert value.kind == "return"
    assert value.expr == binop("add", ident("x"), num(1))
    assert bare.expr.is_none()


def test_break_and_continue() -> None:
    assert [s.kind for s in body("break; continue;")] == ["break", "continue"]


def test_while_loop() -> None:
    (stmt,) = body("while i < 10 do i := i + 1; end")
    assert stmt.kind == "while"
    assert stmt.expr == binop("lt", ident("i"), num(10))
    assert len(stmt.statements) == 1
    assert stmt.block.kind == "block"
    assert [s.kind for s in stmt.block.statements] == ["expr_stmt"]


def test_if_elif_else_chain() -> None:
    (stmt,) = body(
        "if a then x := 1; elif b then x := 2; else x := 3; end"
    )
    assert stmt.kind == "if"
    assert stmt.expr == ident("a")
    assert stmt.block.statements[0].expr == assign(ident("x"), num(1))

    elif_, else_ = stmt.branches
    assert elif_.kind == "elif"
    assert elif_.expr == ident("b")
    assert elif_.block.statements[0].expr == assign(ident("x"), num(2))
    assert elif_.branches == ()
    assert else_.kind == "else"
    assert else_.expr.is_none()
    assert else_.block.statements[0].expr == assign(ident("x"), num(3))


def test_if_chain_is_closed_by_single_end() -> None:
    stmts = body("if a then elif b then elif c then else end x := 1;")
    assert [s.kind for s in stmts] == ["if", "expr_stmt"]
    assert [b.kind for b in stmts[0].branches] == ["elif", "elif", "else"]


def test_if_without_branches() -> None:
    (stmt,) = body("if a = 1 then return; end")
    assert stmt.branches == ()
    assert stmt.expr == binop("eq", ident("a"), num(1))


def test_nested_control_flow() -> None:
    (loop,) = body("while true do if x then break; else continue; end end")
    (inner,) = loop.block.statements
    assert inner.kind == "if"
    assert [b.kind for b in inner.branches] == ["else"]
    assert inner.block.statements[0].kind == "break"


def test_else_after_else_is_reported() -> None:
    file, diagnostics = parse("func f is if a then else else end end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_STATEMENT]
    (stmt,) = file.functions[0].block.statements
    assert [b.kind for b in stmt.branches] == ["else", "else"]


def test_else_outside_if_is_reported() -> None:
    file, diagnostics = parse("func f is while x do else break; end end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_STATEMENT]
    (loop,) = file.functions[0].block.statements
    assert [s.kind for s in loop.block.statements] == ["break"]


#
# Functions and top level
#


def test_minimal_function() -> None:
    file = parse_ok("func f is var x : i32 := 5; end")
    assert len(file.functions) == 1
    func = file.functions[0]
    assert func.name == "f"
    assert func.data_type is DataType.VOID
    assert func.args == ()
    (stmt,) = func.block.statements
    assert stmt.kind == "var_dec"
    assert stmt.name == "x"
    assert stmt.data_type is DataType.I32
    assert stmt.expr == assign(ident("x"), num(5))


def test_function_header() -> None:
    func = parse_ok("func add(a : i32, b : i32) -> i64 is return a + b; end").functions[0]
    assert func.name == "add"
    assert func.data_type is DataType.I64
    assert func.args == (AstArg("a", DataType.I32), AstArg("b", DataType.I32))


def test_empty_parameter_list() -> None:
    func = parse_ok("func f() is end").functions[0]
    assert func.args == ()
    assert func.block.statements == ()


def test_functions_keep_declaration_order() -> None:
    file = parse_ok("func a is end func b is end func c is end")
    assert [f.name for f in file.functions] == ["a", "b", "c"]


def test_local_constants_belong_to_their_function() -> None:
    file = parse_ok(
        "func f is const N : i32 := 3; while x do const M : u8 := 1; end end "
        "func g is end"
    )
    f, g = file.functions
    assert f.consts == (
        AstArg("N", DataType.I32, num(3)),
        AstArg("M", DataType.U8, num(1)),
    )
    assert [s.kind for s in f.block.statements] == ["while"]
    assert g.consts == ()


def test_top_level_declarations() -> None:
    file = parse_ok(
        "import std.io; const LIMIT : u32 := 10; "
        "struct Point is x : i32 := 0; y : i32; end "
        "func main is end"
    )
    assert file.imports == ("std/io",)
    assert file.consts == (AstArg("LIMIT", DataType.U32, num(10)),)
    (point,) = file.structs
    assert point.name == "Point"
    assert point.items == (
        AstArg("x", DataType.I32, assign(ident("x"), num(0))),
        AstArg("y", DataType.I32),
    )
    assert [f.name for f in file.functions] == ["main"]


def test_file_name_is_recorded() -> None:
    parser = Parser(TokenStream.from_source("func f is end"), name="demo.tl")
    assert parser.parse().name == "demo.tl"


#
# Error recovery
#


def test_missing_function_name_does_not_abort() -> None:
    file, diagnostics = parse("func is end func g is x := 1; end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_FUNCTION]
    assert [f.name for f in file.functions] == ["", "g"]
    assert file.functions[1].block.statements[0].kind == "expr_stmt"


def test_missing_is_still_parses_body() -> None:
    file, diagnostics = parse("func f var x : i32 := 1; end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_FUNCTION]
    assert [s.kind for s in file.functions[0].block.statements] == ["var_dec"]


def test_bad_parameter_skips_to_close_paren() -> None:
    file, diagnostics = parse("func f(a i32) is return; end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_FUNCTION]
    func = file.functions[0]
    assert func.args == ()
    assert [s.kind for s in func.block.statements] == ["return"]


def test_unexpected_top_level_token() -> None:
    file, diagnostics = parse("5 func f is end")
    assert diagnostics.kinds() == [DiagnosticKind.UNEXPECTED_TOPLEVEL]
    assert [f.name for f in file.functions] == ["f"]


def test_unknown_data_type() -> None:
    file, diagnostics = parse("func f is var x : foo := 1; end")
    assert diagnostics.kinds() == [DiagnosticKind.UNKNOWN_DATA_TYPE]
    (stmt,) = file.functions[0].block.statements
    assert stmt.data_type is DataType.VOID
    assert stmt.expr == assign(ident("x"), num(1))


def test_invalid_statement_tokens_are_discarded() -> None:
    file, diagnostics = parse("func f is 5; break; end")
    assert set(diagnostics.kinds()) == {DiagnosticKind.MALFORMED_STATEMENT}
    assert [s.kind for s in file.functions[0].block.statements] == ["break"]


def test_malformed_declaration_leaves_placeholder() -> None:
    file, diagnostics = parse("func f is var 5 : i32; break; end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_STATEMENT]
    assert [s.kind for s in file.functions[0].block.statements] == ["none", "break"]


def test_missing_end_is_reported() -> None:
    file, diagnostics = parse("func f is x := 1;")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_STATEMENT]
    assert len(file.functions[0].block.statements) == 1


def test_unicode_digit_is_reported_not_raised() -> None:
    file, diagnostics = parse("func f is x := ²; end")
    assert DiagnosticKind.MALFORMED_EXPRESSION in diagnostics.kinds()
    assert diagnostics[0].token is not None
    assert diagnostics[0].token.value == "²"
    assert [f.name for f in file.functions] == ["f"]


def test_non_ascii_function_name_is_rejected() -> None:
    file, diagnostics = parse("func é is end")
    assert diagnostics.kinds() == [DiagnosticKind.MALFORMED_FUNCTION]
    assert file.functions[0].name == ""


def test_strict_mode_raises_on_first_diagnostic() -> None:
    with pytest.raises(ParseError) as info:
        parse_source("func is end", strict=True)
    assert info.value.diagnostic.kind is DiagnosticKind.MALFORMED_FUNCTION


def test_diagnostic_points_at_offending_token() -> None:
    _, diagnostics = parse("func f is\n  var x : foo;\nend")
    (diag,) = diagnostics
    assert (diag.line, diag.col) == (2, 11)
    assert diag.token is not None
    assert diag.token.value == "foo"
