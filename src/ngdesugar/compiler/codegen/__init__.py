from ngdesugar.compiler.codegen.classifier import BindingClassification, classify
from ngdesugar.compiler.codegen.directive import (
    render_context,
    render_directive_source,
    render_inputs,
)
from ngdesugar.compiler.codegen.skeleton import render_skeleton
from ngdesugar.compiler.codegen.text import unpad

__all__ = [
    "BindingClassification",
    "classify",
    "render_context",
    "render_directive_source",
    "render_inputs",
    "render_skeleton",
    "unpad",
]
