"""Partitioning of template bindings for code generation."""

from dataclasses import dataclass, field
from typing import List, Sequence

from ngdesugar.compiler.ast_nodes import TemplateBinding


@dataclass(frozen=True)
class BindingClassification:
    variable_bindings: List[TemplateBinding] = field(default_factory=list)
    input_bindings: List[TemplateBinding] = field(default_factory=list)
    flag_bindings: List[TemplateBinding] = field(default_factory=list)

    @property
    def has_variables(self) -> bool:
        return bool(self.variable_bindings)

    @property
    def has_inputs(self) -> bool:
        return bool(self.input_bindings)


def is_input(binding: TemplateBinding) -> bool:
    return not binding.key_is_var and binding.expression is not None


def classify(bindings: Sequence[TemplateBinding]) -> BindingClassification:
    """
    Split bindings into context variables, inputs and bare flags.

    Every binding lands in exactly one list; relative order is kept.
    """
    variables: List[TemplateBinding] = []
    inputs: List[TemplateBinding] = []
    flags: List[TemplateBinding] = []

    for binding in bindings:
        if binding.key_is_var:
            variables.append(binding)
        elif is_input(binding):
            inputs.append(binding)
        else:
            flags.append(binding)

    return BindingClassification(variables, inputs, flags)
