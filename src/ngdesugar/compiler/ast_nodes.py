"""AST node definitions for template bindings and binding expressions."""

from dataclasses import dataclass, field
from typing import Any, List, Optional

IMPLICIT_NAME = "$implicit"


@dataclass(frozen=True)
class ParseSpan:
    """Character offsets of a node in the binding text."""

    start: int
    end: int


@dataclass
class AST:
    """Base class for expression nodes."""

    span: ParseSpan


@dataclass
class EmptyExpr(AST):
    pass


@dataclass
class ImplicitReceiver(AST):
    """The component instance; receiver of bare identifiers and `this`."""


@dataclass
class PropertyRead(AST):
    receiver: AST
    name: str


@dataclass
class SafePropertyRead(AST):
    receiver: AST
    name: str


@dataclass
class KeyedRead(AST):
    obj: AST
    key: AST


@dataclass
class MethodCall(AST):
    receiver: AST
    name: str
    args: List[AST] = field(default_factory=list)


@dataclass
class SafeMethodCall(AST):
    receiver: AST
    name: str
    args: List[AST] = field(default_factory=list)


@dataclass
class FunctionCall(AST):
    target: AST
    args: List[AST] = field(default_factory=list)


@dataclass
class LiteralPrimitive(AST):
    value: Any


@dataclass
class LiteralArray(AST):
    expressions: List[AST] = field(default_factory=list)


@dataclass
class LiteralMap(AST):
    keys: List[str] = field(default_factory=list)
    values: List[AST] = field(default_factory=list)


@dataclass
class Binary(AST):
    operation: str
    left: AST
    right: AST


@dataclass
class PrefixNot(AST):
    expression: AST


@dataclass
class Conditional(AST):
    condition: AST
    true_exp: AST
    false_exp: AST


@dataclass
class BindingPipe(AST):
    exp: AST
    name: str
    args: List[AST] = field(default_factory=list)


@dataclass
class ASTWithSource:
    """An expression AST together with the raw text it was parsed from."""

    ast: AST
    source: str
    location: Optional[str] = None

    @property
    def source_text(self) -> str:
        return self.source


@dataclass
class TemplateBinding:
    """
    One unit of structural directive micro-syntax.

    Variable bindings (``let-x``) carry the exposed context name in ``name``
    and no expression. Input bindings carry an expression; a binding that is
    neither is a bare flag such as the leading ``[ngFor]``.
    """

    span: ParseSpan
    key: str
    key_is_var: bool
    name: Optional[str] = None
    expression: Optional[ASTWithSource] = None

    @property
    def is_implicit(self) -> bool:
        return self.key_is_var and self.name == IMPLICIT_NAME


@dataclass
class ParserError:
    """A syntax problem found while parsing a binding expression."""

    description: str
    input: str
    err_location: str
    ctx_location: Optional[str] = None

    @property
    def message(self) -> str:
        message = f"Parser Error: {self.description} {self.err_location} [{self.input}]"
        if self.ctx_location:
            message += f" in {self.ctx_location}"
        return message

    def __str__(self) -> str:
        return self.message


@dataclass
class TemplateBindingParseResult:
    template_bindings: List[TemplateBinding] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[ParserError] = field(default_factory=list)


@dataclass
class GenerationRequest:
    """Inputs of one render pass."""

    tag_name: str
    directive_name: str
    bindings: List[TemplateBinding] = field(default_factory=list)


@dataclass
class GenerationResult:
    """Everything a driver needs to display for one render pass."""

    errors: str
    warnings: str
    skeleton: str
    source: str
