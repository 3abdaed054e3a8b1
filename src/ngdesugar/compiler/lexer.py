"""Tokenizer for Angular binding expressions."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union

KEYWORDS = {
    "var",
    "let",
    "as",
    "null",
    "undefined",
    "true",
    "false",
    "if",
    "else",
    "this",
}

CHARACTERS = set("()[]{},:;")

SINGLE_OPERATORS = set("#+-*/%^")

ESCAPES = {
    "n": "\n",
    "f": "\f",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


class TokenType(Enum):
    CHARACTER = "character"
    IDENTIFIER = "identifier"
    KEYWORD = "keyword"
    STRING = "string"
    OPERATOR = "operator"
    NUMBER = "number"
    ERROR = "error"


@dataclass(frozen=True)
class Token:
    index: int
    end: int
    type: TokenType
    num_value: Union[int, float] = 0
    str_value: str = ""

    def is_character(self, char: str) -> bool:
        return self.type is TokenType.CHARACTER and self.str_value == char

    def is_number(self) -> bool:
        return self.type is TokenType.NUMBER

    def is_string(self) -> bool:
        return self.type is TokenType.STRING

    def is_operator(self, operator: str) -> bool:
        return self.type is TokenType.OPERATOR and self.str_value == operator

    def is_identifier(self) -> bool:
        return self.type is TokenType.IDENTIFIER

    def is_keyword(self, keyword: Optional[str] = None) -> bool:
        if self.type is not TokenType.KEYWORD:
            return False
        return keyword is None or self.str_value == keyword

    def is_error(self) -> bool:
        return self.type is TokenType.ERROR

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return str(self.num_value)
        return self.str_value


DIGITS = set("0123456789")

IDENTIFIER_START = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_$")

IDENTIFIER_PART = IDENTIFIER_START | DIGITS


def _is_identifier_start(char: str) -> bool:
    return char in IDENTIFIER_START


def _is_identifier_part(char: str) -> bool:
    return char in IDENTIFIER_PART


def _is_digit(char: str) -> bool:
    return char in DIGITS


class _Scanner:
    """Single-pass scanner over one input string."""

    def __init__(self, text: str) -> None:
        self.input = text
        self.length = len(text)
        self.index = 0

    @property
    def peek(self) -> str:
        return self.input[self.index] if self.index < self.length else ""

    def advance(self) -> None:
        self.index += 1

    def scan_token(self) -> Optional[Token]:
        while self.index < self.length and (
            self.peek <= " " or self.peek == "\u00a0"
        ):
            self.advance()
        if self.index >= self.length:
            return None

        start = self.index
        char = self.peek

        if _is_identifier_start(char):
            return self.scan_identifier()
        if _is_digit(char):
            return self.scan_number(start)

        if char == ".":
            self.advance()
            if _is_digit(self.peek):
                return self.scan_number(start)
            return Token(start, self.index, TokenType.CHARACTER, str_value=".")
        if char in CHARACTERS:
            self.advance()
            return Token(start, self.index, TokenType.CHARACTER, str_value=char)
        if char in "'\"":
            return self.scan_string()
        if char in SINGLE_OPERATORS:
            self.advance()
            return Token(start, self.index, TokenType.OPERATOR, str_value=char)
        if char == "?":
            return self.scan_complex_operator(start, "?", ".")
        if char in "<>":
            return self.scan_complex_operator(start, char, "=")
        if char in "!=":
            return self.scan_complex_operator(start, char, "=", "=")
        if char == "&":
            return self.scan_complex_operator(start, "&", "&")
        if char == "|":
            return self.scan_complex_operator(start, "|", "|")

        return self.error(f"Unexpected character [{char}]", 0)

    def scan_complex_operator(self, start: int, first: str, *followers: str) -> Token:
        self.advance()
        operator = first
        for follower in followers:
            if self.peek != follower:
                break
            self.advance()
            operator += follower
        return Token(start, self.index, TokenType.OPERATOR, str_value=operator)

    def scan_identifier(self) -> Token:
        start = self.index
        self.advance()
        while _is_identifier_part(self.peek):
            self.advance()
        text = self.input[start : self.index]
        token_type = TokenType.KEYWORD if text in KEYWORDS else TokenType.IDENTIFIER
        return Token(start, self.index, token_type, str_value=text)

    def scan_number(self, start: int) -> Token:
        simple = self.index == start
        self.advance()
        while True:
            char = self.peek
            if _is_digit(char):
                pass
            elif char == ".":
                simple = False
            elif char in ("e", "E"):
                self.advance()
                if self.peek in ("+", "-"):
                    self.advance()
                if not _is_digit(self.peek):
                    return self.error("Invalid exponent", -1)
                simple = False
            else:
                break
            self.advance()
        text = self.input[start : self.index]
        try:
            value: Union[int, float] = int(text) if simple else float(text)
        except ValueError:
            return self.error(f"Invalid number [{text}]", 0)
        return Token(start, self.index, TokenType.NUMBER, num_value=value)

    def scan_string(self) -> Token:
        start = self.index
        quote = self.peek
        self.advance()

        buffer = ""
        marker = self.index
        while self.peek != quote:
            if self.peek == "\\":
                buffer += self.input[marker : self.index]
                self.advance()
                if self.peek == "u":
                    hex_digits = self.input[self.index + 1 : self.index + 5]
                    try:
                        if len(hex_digits) != 4:
                            raise ValueError(hex_digits)
                        buffer += chr(int(hex_digits, 16))
                    except ValueError:
                        return self.error(f"Invalid unicode escape [\\u{hex_digits}]", 0)
                    self.index += 5
                else:
                    buffer += ESCAPES.get(self.peek, self.peek)
                    self.advance()
                marker = self.index
            elif self.index >= self.length:
                return self.error("Unterminated quote", 0)
            else:
                self.advance()

        last = self.input[marker : self.index]
        self.advance()
        return Token(start, self.index, TokenType.STRING, str_value=buffer + last)

    def error(self, message: str, offset: int) -> Token:
        position = self.index + offset
        token = Token(
            position,
            self.index,
            TokenType.ERROR,
            str_value=(
                f"Lexer Error: {message} at column {position} "
                f"in expression [{self.input}]"
            ),
        )
        # Scanning stops at the first lexer error.
        self.index = self.length
        return token


class Lexer:
    """Splits a binding expression into tokens."""

    def tokenize(self, text: str) -> List[Token]:
        scanner = _Scanner(text)
        tokens: List[Token] = []
        token = scanner.scan_token()
        while token is not None:
            tokens.append(token)
            token = scanner.scan_token()
        return tokens
