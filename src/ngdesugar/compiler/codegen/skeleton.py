"""Explicit ``<ng-template>`` form of a structural directive."""

from typing import Sequence

from ngdesugar.compiler.ast_nodes import TemplateBinding
from ngdesugar.compiler.codegen.text import unpad

SKELETON_TEMPLATE = """
    <ng-template{attributes}>
      <{tag_name}></{tag_name}>
    </ng-template>
"""


def render_attribute(binding: TemplateBinding) -> str:
    """Render one binding as an attribute of ``<ng-template>``."""
    if binding.key_is_var:
        if binding.is_implicit:
            return f"let-{binding.key}"
        return f'let-{binding.key}="{binding.name}"'
    if binding.expression is not None:
        return f'[{binding.key}]="{binding.expression.source.strip()}"'
    return f"[{binding.key}]"


def render_skeleton(tag_name: str, bindings: Sequence[TemplateBinding]) -> str:
    attributes = " ".join(render_attribute(binding) for binding in bindings)
    if attributes:
        attributes = " " + attributes
    return unpad(SKELETON_TEMPLATE, attributes=attributes, tag_name=tag_name)
