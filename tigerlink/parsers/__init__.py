"""Interface parsing, doc-comment directives and extension discovery."""

from tigerlink.parsers.annotations import (
    AnnotationParseResult,
    extract_android_view_type,
    parse_android_view_type_annotation,
)
from tigerlink.parsers.discovery import DiscoveryResult, ExtensionDiscovery
from tigerlink.parsers.interface_parser import (
    InterfaceParser,
    ParsedInterfaces,
    discover_native_modules,
)
from tigerlink.parsers.models import (
    AndroidViewTypeConfig,
    ElementInfo,
    InterfaceInfo,
    MethodInfo,
    MethodParam,
    PropertyInfo,
)
from tigerlink.parsers.view_registry import ViewTypeRegistry

__all__ = [
    "AndroidViewTypeConfig",
    "AnnotationParseResult",
    "DiscoveryResult",
    "ElementInfo",
    "ExtensionDiscovery",
    "InterfaceInfo",
    "InterfaceParser",
    "MethodInfo",
    "MethodParam",
    "ParsedInterfaces",
    "PropertyInfo",
    "ViewTypeRegistry",
    "discover_native_modules",
    "extract_android_view_type",
    "parse_android_view_type_annotation",
]
