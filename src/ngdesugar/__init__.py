try:
    from ._version import __version__
except ImportError:
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("ngdesugar")
    except PackageNotFoundError:
        __version__ = "unknown"

from ngdesugar.compiler.ast_nodes import (
    GenerationRequest,
    GenerationResult,
    TemplateBinding,
)
from ngdesugar.compiler.codegen.generator import CodeGenerator
from ngdesugar.compiler.exceptions import DesugarError, InvalidDirectiveNameError
from ngdesugar.compiler.parser import BindingParser

__all__ = [
    "BindingParser",
    "CodeGenerator",
    "GenerationRequest",
    "GenerationResult",
    "TemplateBinding",
    "DesugarError",
    "InvalidDirectiveNameError",
]
