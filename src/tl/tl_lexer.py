"""
Lexical analyzer for the TL programming language.

This module provides the components that turn raw source text into the token
stream consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenStream: Lazy token cursor with a single-slot pushback for one-token lookahead.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Longest-match recognition of symbols and operators (`:=`, `->`, `>=`, ...)
    - Recognizes:
        * Identifiers, keywords and type keywords
        * Unsigned integers (64-bit range)
        * Strings (`"..."`, no escape sequences) and characters (`'c'`)

Raises:
    SyntaxError: If an unterminated string or character literal is encountered.

Example:
    >>> stream = TokenStream.from_source("func main is end")
    >>> stream.next()
    Token(FUNC, func)
"""

import string
from collections.abc import Iterable, Iterator
from typing import Any

from tl.tl_constants import U64_MAX, token_hashmap

# Identifiers are ASCII only; anything else lexes as ERROR.
IDENT_START = frozenset(string.ascii_letters + "_")
IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "_")


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Returns:
            str: The character at the offset, or an empty string if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the TL language.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'NUMBER', 'EOF').
        value (str | int): The payload: source text for keywords and symbols,
            the name for identifiers, an int for numbers, the text for string
            and character literals.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, value: str | int, line: int = 0, col: int = 0):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


class Lexer:
    """Lexical analyzer for the TL language.

    The Lexer takes a CharacterStream and converts it into a stream of Token objects.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid symbol or operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(2):  # longest symbol is two characters
            ch = self.stream.peek(i)
            if ch == "" or ch in IDENT_CHARS or not ch.isascii():
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def read_quoted(self, quote: str, line: int, col: int) -> str:
        """Reads a quoted literal body; the opening quote has already been consumed."""
        val = ""
        while not self.stream.end_of_file() and self.peek() != quote:
            val += self.advance()
        if self.stream.end_of_file():
            kind = "string" if quote == '"' else "character"
            raise SyntaxError(f"Unterminated {kind} literal at line {line}, col {col}")
        self.advance()
        return val

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token parsed from the stream; `EOF` once the source is exhausted.

        Raises:
            SyntaxError: If a string or character literal is not terminated.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token("EOF", "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch in IDENT_START:
            ident = ""
            while not self.stream.end_of_file() and self.peek() in IDENT_CHARS:
                ident += self.advance()
            if ident in token_hashmap:
                return Token(token_hashmap[ident], ident, line, col)
            return Token("IDENT", ident, line, col)

        # 2. Unsigned integer
        if ch in string.digits:
            num = ""
            while not self.stream.end_of_file() and self.peek() in string.digits:
                num += self.advance()
            if int(num) > U64_MAX:
                return Token("ERROR", num, line, col)
            return Token("NUMBER", int(num), line, col)

        # 3. String
        if ch == '"':
            self.advance()
            return Token("STRING", self.read_quoted('"', line, col), line, col)

        # 4. Character
        if ch == "'":
            self.advance()
            val = self.read_quoted("'", line, col)
            if len(val) != 1:
                return Token("ERROR", f"'{val}'", line, col)
            return Token("CHAR", val, line, col)

        # 5. Symbol or operator
        token = self.match_operator()
        if token:
            return token

        # 6. Unknown character
        return Token("ERROR", self.advance(), line, col)

    def tokens(self) -> Iterator[Token]:
        """Yields every token up to and including `EOF`."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == "EOF":
                return


class TokenStream:
    """Token cursor consumed by the parser.

    Tokens are pulled lazily from the underlying iterable. Once `EOF` has been
    produced it is returned again on every further `next()`, so builders never
    run off the end. A single token can be pushed back with `unget()`.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._pushed: Token | None = None
        self._eof: Token | None = None

    @classmethod
    def from_source(cls, source: str) -> "TokenStream":
        return cls(Lexer(CharacterStream(source)).tokens())

    def next(self) -> Token:
        if self._pushed is not None:
            tok, self._pushed = self._pushed, None
            return tok
        if self._eof is not None:
            return self._eof

        tok = next(self._tokens, None)
        if tok is None:
            tok = Token("EOF", "EOF")
        if tok.type == "EOF":
            self._eof = tok
        return tok

    def unget(self, token: Token) -> None:
        """Pushes one token back to the front of the stream.

        Raises:
            RuntimeError: If a token is already waiting in the pushback slot.
        """
        if self._pushed is not None:
            raise RuntimeError(
                f"Pushback slot already holds {self._pushed!r}; cannot unget {token!r}"
            )
        self._pushed = token


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream", "token_hashmap"]
