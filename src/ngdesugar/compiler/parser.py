"""Parser for structural directive micro-syntax (``*ngFor="let item of items"``)."""

import logging
from typing import Callable, List, NoReturn, Optional, Tuple

from ngdesugar.compiler.ast_nodes import (
    AST,
    IMPLICIT_NAME,
    ASTWithSource,
    Binary,
    BindingPipe,
    Conditional,
    EmptyExpr,
    FunctionCall,
    ImplicitReceiver,
    KeyedRead,
    LiteralArray,
    LiteralMap,
    LiteralPrimitive,
    MethodCall,
    ParserError,
    ParseSpan,
    PrefixNot,
    PropertyRead,
    SafeMethodCall,
    SafePropertyRead,
    TemplateBinding,
    TemplateBindingParseResult,
)
from ngdesugar.compiler.lexer import Lexer, Token

logger = logging.getLogger(__name__)

HASH_DEPRECATION_WARNING = '"#" inside of expressions is deprecated. Use "let" instead!'

EQUALITY_OPERATORS = ("==", "!=", "===", "!==")
RELATIONAL_OPERATORS = ("<", ">", "<=", ">=")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "%", "/")


class _ParseAbort(Exception):
    """Unwinds the current binding after an error has been recorded."""


class _ParseAST:
    """Recursive descent over the token stream of one binding string."""

    def __init__(
        self,
        text: str,
        location: Optional[str],
        tokens: List[Token],
        errors: List[ParserError],
    ) -> None:
        self.input = text
        self.location = location
        self.tokens = tokens
        self.errors = errors
        self.index = 0

    # === Token stream helpers ===

    @property
    def next(self) -> Optional[Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    @property
    def input_index(self) -> int:
        token = self.next
        return token.index if token is not None else len(self.input)

    @property
    def current_end_index(self) -> int:
        if self.index > 0:
            return self.tokens[self.index - 1].end
        return 0

    def span(self, start: int) -> ParseSpan:
        return ParseSpan(start, max(start, self.current_end_index))

    def advance(self) -> None:
        self.index += 1

    def optional_character(self, char: str) -> bool:
        token = self.next
        if token is not None and token.is_character(char):
            self.advance()
            return True
        return False

    def optional_operator(self, operator: str) -> bool:
        token = self.next
        if token is not None and token.is_operator(operator):
            self.advance()
            return True
        return False

    def peek_keyword_let(self) -> bool:
        token = self.next
        return token is not None and token.is_keyword("let")

    def peek_keyword_as(self) -> bool:
        token = self.next
        return token is not None and token.is_keyword("as")

    def _peek_assignment(self) -> bool:
        token = self.next
        return token is not None and token.is_operator("=")

    def expect_character(self, char: str) -> None:
        if not self.optional_character(char):
            self.error(f"Missing expected {char}")

    def expect_identifier_or_keyword(self) -> str:
        token = self.next
        self._check_lexer_error(token)
        if token is None or not (token.is_identifier() or token.is_keyword()):
            self.error(
                f"Unexpected {self._describe(token)}, expected identifier or keyword"
            )
        self.advance()
        return token.str_value

    def expect_identifier_or_keyword_or_string(self) -> str:
        token = self.next
        self._check_lexer_error(token)
        if token is None or not (
            token.is_identifier() or token.is_keyword() or token.is_string()
        ):
            self.error(
                f"Unexpected {self._describe(token)}, "
                "expected identifier, keyword, or string"
            )
        self.advance()
        return token.str_value

    def expect_template_binding_key(self) -> str:
        """Read a binding key; dashes may join several words (``my-dir``)."""
        result = self.expect_identifier_or_keyword_or_string()
        while self.optional_operator("-"):
            result += "-" + self.expect_identifier_or_keyword_or_string()
        return result

    def _describe(self, token: Optional[Token]) -> str:
        if token is None:
            return "end of input"
        return f"token {token}"

    def _check_lexer_error(self, token: Optional[Token]) -> None:
        if token is not None and token.is_error():
            self.error(token.str_value)

    def error(self, message: str, index: Optional[int] = None) -> NoReturn:
        if index is None:
            index = self.index
        if index < len(self.tokens):
            location = f"at column {self.tokens[index].index + 1} in"
        else:
            location = "at the end of the expression"
        error = ParserError(message, self.input, location, self.location)
        self.errors.append(error)
        logger.debug(error.message)
        raise _ParseAbort(message)

    def skip(self) -> None:
        """Drop tokens up to the next binding separator."""
        token = self.next
        while token is not None and not (
            token.is_character(";") or token.is_character(",")
        ):
            self.advance()
            token = self.next

    # === Template bindings ===

    def parse_template_bindings(
        self, tpl_key: str
    ) -> Tuple[List[TemplateBinding], List[str]]:
        bindings: List[TemplateBinding] = []
        warnings: List[str] = []
        first_binding = True

        while True:
            try:
                self._parse_template_binding(tpl_key, first_binding, bindings, warnings)
            except _ParseAbort:
                self.skip()
            first_binding = False

            if not self.optional_character(";"):
                self.optional_character(",")
            if self.index >= len(self.tokens):
                break

        return bindings, warnings

    def _parse_template_binding(
        self,
        tpl_key: str,
        first_binding: bool,
        bindings: List[TemplateBinding],
        warnings: List[str],
    ) -> None:
        start = self.input_index
        key_is_var = False

        if first_binding:
            raw_key = key = tpl_key
        else:
            key_is_var = self.peek_keyword_let()
            if key_is_var:
                self.advance()
            elif self.optional_operator("#"):
                key_is_var = True
                warnings.append(HASH_DEPRECATION_WARNING)
            raw_key = self.expect_template_binding_key()
            if key_is_var:
                key = raw_key
            else:
                key = tpl_key + raw_key[:1].upper() + raw_key[1:]
            self.optional_character(":")

        name: Optional[str] = None
        expression: Optional[ASTWithSource] = None

        if key_is_var:
            if self.optional_operator("="):
                name = self.expect_template_binding_key()
            else:
                name = IMPLICIT_NAME
        elif self.peek_keyword_as():
            # `index as i` exposes the directive's `index` as local `i`.
            self.advance()
            try:
                alias = self.expect_template_binding_key()
            except _ParseAbort:
                bindings.append(TemplateBinding(self.span(start), key, False))
                raise
            name = raw_key
            key = alias
            key_is_var = True
        elif self.next is not None and not self.peek_keyword_let():
            expression_start = self.input_index
            try:
                ast = self.parse_pipe()
            except _ParseAbort:
                # Keep the binding; its source runs up to the next separator.
                self.skip()
                ast = EmptyExpr(self.span(expression_start))
            source = self.input[expression_start : self.input_index]
            expression = ASTWithSource(ast, source, self.location)

        bindings.append(
            TemplateBinding(self.span(start), key, key_is_var, name, expression)
        )

        if self.peek_keyword_as() and not key_is_var:
            let_start = self.input_index
            self.advance()
            let_name = self.expect_template_binding_key()
            bindings.append(
                TemplateBinding(self.span(let_start), let_name, True, key, None)
            )

    # === Expressions ===

    def parse_pipe(self) -> AST:
        result = self.parse_expression()
        while self.optional_operator("|"):
            start = self.input_index
            name = self.expect_identifier_or_keyword()
            args: List[AST] = []
            while self.optional_character(":"):
                args.append(self.parse_expression())
            result = BindingPipe(self.span(start), result, name, args)
        return result

    def parse_expression(self) -> AST:
        return self.parse_conditional()

    def parse_conditional(self) -> AST:
        start = self.input_index
        result = self.parse_logical_or()

        if self.optional_operator("?"):
            yes = self.parse_pipe()
            if not self.optional_character(":"):
                end = self.input_index
                expression = self.input[start:end]
                self.error(
                    f"Conditional expression {expression} requires all 3 expressions"
                )
            no = self.parse_pipe()
            return Conditional(self.span(start), result, yes, no)
        return result

    def _parse_binary(
        self, operators: Tuple[str, ...], operand: Callable[[], AST]
    ) -> AST:
        start = self.input_index
        result = operand()
        while True:
            for operator in operators:
                if self.optional_operator(operator):
                    right = operand()
                    result = Binary(self.span(start), operator, result, right)
                    break
            else:
                return result

    def parse_logical_or(self) -> AST:
        return self._parse_binary(("||",), self.parse_logical_and)

    def parse_logical_and(self) -> AST:
        return self._parse_binary(("&&",), self.parse_equality)

    def parse_equality(self) -> AST:
        return self._parse_binary(EQUALITY_OPERATORS, self.parse_relational)

    def parse_relational(self) -> AST:
        return self._parse_binary(RELATIONAL_OPERATORS, self.parse_additive)

    def parse_additive(self) -> AST:
        return self._parse_binary(ADDITIVE_OPERATORS, self.parse_multiplicative)

    def parse_multiplicative(self) -> AST:
        return self._parse_binary(MULTIPLICATIVE_OPERATORS, self.parse_prefix)

    def parse_prefix(self) -> AST:
        start = self.input_index
        zero = LiteralPrimitive(ParseSpan(start, start), 0)
        if self.optional_operator("+"):
            result = self.parse_prefix()
            return Binary(self.span(start), "-", result, zero)
        if self.optional_operator("-"):
            result = self.parse_prefix()
            return Binary(self.span(start), "-", zero, result)
        if self.optional_operator("!"):
            result = self.parse_prefix()
            return PrefixNot(self.span(start), result)
        return self.parse_call_chain()

    def parse_call_chain(self) -> AST:
        start = self.input_index
        result = self.parse_primary()
        while True:
            if self.optional_character("."):
                result = self.parse_access_member_or_method_call(result, start, False)
            elif self.optional_operator("?."):
                result = self.parse_access_member_or_method_call(result, start, True)
            elif self.optional_character("["):
                key = self.parse_pipe()
                self.expect_character("]")
                if self._peek_assignment():
                    self.error("Bindings cannot contain assignments")
                result = KeyedRead(self.span(start), result, key)
            elif self.optional_character("("):
                args = self.parse_call_arguments()
                self.expect_character(")")
                result = FunctionCall(self.span(start), result, args)
            else:
                return result

    def parse_primary(self) -> AST:
        start = self.input_index
        token = self.next

        if self.optional_character("("):
            result = self.parse_pipe()
            self.expect_character(")")
            return result
        if token is None:
            self.error(f"Unexpected end of expression: {self.input}")
        self._check_lexer_error(token)
        if token.is_keyword("null") or token.is_keyword("undefined"):
            self.advance()
            return LiteralPrimitive(self.span(start), None)
        if token.is_keyword("true"):
            self.advance()
            return LiteralPrimitive(self.span(start), True)
        if token.is_keyword("false"):
            self.advance()
            return LiteralPrimitive(self.span(start), False)
        if token.is_keyword("this"):
            self.advance()
            return ImplicitReceiver(self.span(start))
        if self.optional_character("["):
            expressions = self.parse_expression_list("]")
            self.expect_character("]")
            return LiteralArray(self.span(start), expressions)
        if token.is_character("{"):
            return self.parse_literal_map()
        if token.is_identifier():
            return self.parse_access_member_or_method_call(
                ImplicitReceiver(ParseSpan(start, start)), start, False
            )
        if token.is_number():
            self.advance()
            return LiteralPrimitive(self.span(start), token.num_value)
        if token.is_string():
            self.advance()
            return LiteralPrimitive(self.span(start), token.str_value)

        self.error(f"Unexpected {self._describe(token)}")

    def parse_expression_list(self, terminator: str) -> List[AST]:
        result: List[AST] = []
        token = self.next
        if token is not None and not token.is_character(terminator):
            result.append(self.parse_pipe())
            while self.optional_character(","):
                result.append(self.parse_pipe())
        return result

    def parse_literal_map(self) -> AST:
        start = self.input_index
        keys: List[str] = []
        values: List[AST] = []
        self.expect_character("{")
        if not self.optional_character("}"):
            while True:
                keys.append(self.expect_identifier_or_keyword_or_string())
                self.expect_character(":")
                values.append(self.parse_pipe())
                if not self.optional_character(","):
                    break
            self.expect_character("}")
        return LiteralMap(self.span(start), keys, values)

    def parse_access_member_or_method_call(
        self, receiver: AST, start: int, is_safe: bool
    ) -> AST:
        name = self.expect_identifier_or_keyword()

        if self.optional_character("("):
            args = self.parse_call_arguments()
            self.expect_character(")")
            if is_safe:
                return SafeMethodCall(self.span(start), receiver, name, args)
            return MethodCall(self.span(start), receiver, name, args)

        if self._peek_assignment():
            if is_safe:
                self.error("The '?.' operator cannot be used in the assignment")
            self.error("Bindings cannot contain assignments")
        if is_safe:
            return SafePropertyRead(self.span(start), receiver, name)
        return PropertyRead(self.span(start), receiver, name)

    def parse_call_arguments(self) -> List[AST]:
        token = self.next
        if token is not None and token.is_character(")"):
            return []
        args = [self.parse_pipe()]
        while self.optional_character(","):
            args.append(self.parse_pipe())
        return args


class BindingParser:
    """Turns a directive name and its micro-syntax into template bindings."""

    def __init__(self, lexer: Optional[Lexer] = None) -> None:
        self.lexer = lexer or Lexer()

    def parse_template_bindings(
        self, tpl_key: str, text: str, location: Optional[str] = None
    ) -> TemplateBindingParseResult:
        """
        Parse ``text`` as the value of ``*tpl_key``.

        Never raises: syntax problems are collected in ``errors`` and the
        bindings parsed around them are still returned.
        """
        tokens = self.lexer.tokenize(text)
        errors: List[ParserError] = []
        bindings, warnings = _ParseAST(text, location, tokens, errors).parse_template_bindings(
            tpl_key
        )
        logger.debug(
            "Parsed %d binding(s) for %r with %d error(s)",
            len(bindings),
            tpl_key,
            len(errors),
        )
        return TemplateBindingParseResult(bindings, warnings, errors)
