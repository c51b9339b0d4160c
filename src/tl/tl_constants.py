"""
Token and operator tables shared by the TL lexer, parser and unwriter.

Exports:
    token_hashmap: Source spelling -> canonical token type, used by the lexer
        for keywords and longest-match symbol recognition.
    KEYWORDS: Every reserved word (identifiers may not use them).
    operator_tokens: Operator token type -> expression kind.
    operator_symbols: Expression kind -> canonical source spelling.
    data_type_tokens: Type keyword token type -> `DataType` member name.
    token_spellings: Token type -> source spelling, for diagnostics.
"""

token_hashmap: dict[str, str] = {
    # Keywords
    "func": "FUNC",
    "is": "IS",
    "end": "END",
    "var": "VAR",
    "const": "CONST",
    "struct": "STRUCT",
    "import": "IMPORT",
    "return": "RETURN",
    "while": "WHILE",
    "do": "DO",
    "if": "IF",
    "then": "THEN",
    "elif": "ELIF",
    "else": "ELSE",
    "break": "BREAK",
    "continue": "CONTINUE",
    "true": "TRUE",
    "false": "FALSE",
    # Types
    "i8": "TYPE_I8",
    "u8": "TYPE_U8",
    "i16": "TYPE_I16",
    "u16": "TYPE_U16",
    "i32": "TYPE_I32",
    "u32": "TYPE_U32",
    "i64": "TYPE_I64",
    "u64": "TYPE_U64",
    "string": "TYPE_STRING",
    "char": "TYPE_CHAR",
    "bool": "TYPE_BOOL",
    # Symbols
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACKET",
    "]": "RBRACKET",
    ";": "SEMICOLON",
    ":": "COLON",
    ",": "COMMA",
    ".": "DOT",
    "->": "ARROW",
    # Operators
    ":=": "ASSIGN",
    "+": "ADD",
    "-": "SUB",
    "*": "MUL",
    "/": "DIV",
    "%": "MOD",
    "&": "AND",
    "|": "OR",
    "^": "XOR",
    "=": "EQ",
    "!=": "NE",
    ">": "GT",
    ">=": "GE",
    "<": "LT",
    "<=": "LE",
    "&&": "LG_AND",
    "||": "LG_OR",
}

KEYWORDS: frozenset[str] = frozenset(k for k in token_hashmap if k[0].isalpha())

operator_tokens: dict[str, str] = {
    "ASSIGN": "assign",
    "ADD": "add",
    "SUB": "sub",
    "MUL": "mul",
    "DIV": "div",
    "MOD": "mod",
    "AND": "and",
    "OR": "or",
    "XOR": "xor",
    "EQ": "eq",
    "NE": "ne",
    "GT": "gt",
    "GE": "ge",
    "LT": "lt",
    "LE": "le",
    "LG_AND": "lg_and",
    "LG_OR": "lg_or",
}

operator_symbols: dict[str, str] = {
    kind: spelling
    for spelling, tok_type in token_hashmap.items()
    for op_type, kind in operator_tokens.items()
    if tok_type == op_type
}

data_type_tokens: dict[str, str] = {
    "TYPE_I8": "I8",
    "TYPE_U8": "U8",
    "TYPE_I16": "I16",
    "TYPE_U16": "U16",
    "TYPE_I32": "I32",
    "TYPE_U32": "U32",
    "TYPE_I64": "I64",
    "TYPE_U64": "U64",
    "TYPE_STRING": "STRING",
    "TYPE_CHAR": "CHAR",
    "TYPE_BOOL": "BOOL",
}

U64_MAX = 2**64 - 1

token_spellings: dict[str, str] = {v: k for k, v in token_hashmap.items()}
