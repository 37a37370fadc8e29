"""Multi-target code generation from parsed interface contracts."""

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.elements import generate_element
from tigerlink.codegen.modules import generate, generate_native_module
from tigerlink.codegen.services import generate_service
from tigerlink.codegen.types import TypeKind, TypeShape, classify_type, convert_type
from tigerlink.codegen.writer import EntityOutput

__all__ = [
    "CodegenContext",
    "EntityOutput",
    "TypeKind",
    "TypeShape",
    "classify_type",
    "convert_type",
    "generate",
    "generate_element",
    "generate_native_module",
    "generate_service",
]
