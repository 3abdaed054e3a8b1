"""Directive class source generation."""

import textwrap
from typing import Sequence

from ngdesugar.compiler.ast_nodes import TemplateBinding
from ngdesugar.compiler.codegen.classifier import classify
from ngdesugar.compiler.codegen.text import unpad

IMPORTS = "import { Directive, Input, TemplateRef } from '@angular/core'"

# Type used wherever the real Angular type is not known to this tool.
ANY_TYPE = "any"

DIRECTIVE_TEMPLATE = """
    {imports}{context}

    @Directive({{
      selector: '[{directive_name}]'
    }})
    export class {class_name} {{{fields}
      constructor(templateRef: TemplateRef<{context_type}>) {{}}
    }}
"""

CONTEXT_TEMPLATE = """
    export interface {class_name}Context {{
{fields}
    }}
"""


def ucfirst(value: str) -> str:
    return value[:1].upper() + value[1:]


def render_context(class_name: str, variable_bindings: Sequence[TemplateBinding]) -> str:
    """Render the ``<ClassName>Context`` interface; one field per variable."""
    fields = "\n".join(
        f"      {binding.name}: {ANY_TYPE};" for binding in variable_bindings
    )
    return unpad(CONTEXT_TEMPLATE, class_name=class_name, fields=fields)


def render_inputs(input_bindings: Sequence[TemplateBinding]) -> str:
    """Render one ``@Input()`` field per input binding."""
    return "\n".join(
        f"@Input() {binding.key}: {ANY_TYPE} = null;" for binding in input_bindings
    )


def render_directive_source(
    directive_name: str, tag_name: str, bindings: Sequence[TemplateBinding]
) -> str:
    """
    Render the TypeScript source of a directive implementing ``bindings``.

    The context interface is only emitted when the bindings declare
    variables; otherwise the template reference is typed ``any``. Input
    fields are only emitted when at least one binding has an expression.
    ``tag_name`` does not affect the class; it is accepted so both
    generators share a signature.
    """
    class_name = ucfirst(directive_name)
    classified = classify(bindings)

    context = ""
    context_type = ANY_TYPE
    if classified.has_variables:
        interface = render_context(class_name, classified.variable_bindings)
        context = "\n\n" + textwrap.indent(interface, "    ")
        context_type = f"{class_name}Context"

    fields = ""
    if classified.has_inputs:
        inputs = render_inputs(classified.input_bindings)
        fields = "\n" + textwrap.indent(inputs, "      ") + "\n"

    return unpad(
        DIRECTIVE_TEMPLATE,
        imports=IMPORTS,
        context=context,
        directive_name=directive_name,
        class_name=class_name,
        fields=fields,
        context_type=context_type,
    )
