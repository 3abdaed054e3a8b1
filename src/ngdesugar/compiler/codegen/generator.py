"""Main code generator orchestrator."""

import logging
from typing import Optional

from ngdesugar.compiler.ast_nodes import GenerationRequest, GenerationResult
from ngdesugar.compiler.codegen.directive import render_directive_source
from ngdesugar.compiler.codegen.skeleton import render_skeleton
from ngdesugar.compiler.exceptions import InvalidDirectiveNameError
from ngdesugar.compiler.parser import BindingParser

logger = logging.getLogger(__name__)


def validate_directive_name(directive_name: str) -> None:
    """Reject names whose first character has no upper-case form."""
    if not directive_name:
        raise InvalidDirectiveNameError(directive_name, "must not be empty")
    first = directive_name[0]
    if first.upper() == first.lower():
        raise InvalidDirectiveNameError(directive_name, "must start with a cased letter")


class CodeGenerator:
    """Parses a binding expression and renders both outputs for it."""

    def __init__(self, parser: Optional[BindingParser] = None) -> None:
        self.parser = parser or BindingParser()

    def render(self, request: GenerationRequest) -> GenerationResult:
        """Render a request whose bindings are already parsed."""
        validate_directive_name(request.directive_name)
        return GenerationResult(
            errors="",
            warnings="",
            skeleton=render_skeleton(request.tag_name, request.bindings),
            source=render_directive_source(
                request.directive_name, request.tag_name, request.bindings
            ),
        )

    def generate(
        self,
        tag_name: str,
        directive_name: str,
        binding: str,
        location: Optional[str] = None,
    ) -> GenerationResult:
        """
        Parse ``binding`` as ``*directive_name`` and render both outputs.

        Parser errors and warnings are returned as newline separated text
        alongside whatever bindings could still be parsed.

        Raises:
            InvalidDirectiveNameError: if ``directive_name`` is empty or does
                not start with a cased letter.
        """
        validate_directive_name(directive_name)

        parsed = self.parser.parse_template_bindings(directive_name, binding, location)
        request = GenerationRequest(tag_name, directive_name, parsed.template_bindings)
        logger.debug(
            "Generating %s for <%s> from %d binding(s)",
            directive_name,
            tag_name,
            len(request.bindings),
        )

        result = self.render(request)
        result.errors = "\n".join(error.message for error in parsed.errors)
        result.warnings = "\n".join(parsed.warnings)
        return result
