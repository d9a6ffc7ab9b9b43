"""
DartQL filter compiler.

Compiles parsed queries into API filters or client-side predicates.
"""

from dartql.query.compiler.capabilities import (
    DEFAULT_CAPABILITIES,
    ServerCapabilities,
)
from dartql.query.compiler.compiler import (
    FilterCompilationResult,
    FilterCompiler,
    compile_filter,
)
from dartql.query.compiler.predicate import build_predicate, evaluate

__all__ = [
    "DEFAULT_CAPABILITIES",
    "ServerCapabilities",
    "FilterCompilationResult",
    "FilterCompiler",
    "compile_filter",
    "build_predicate",
    "evaluate",
]
