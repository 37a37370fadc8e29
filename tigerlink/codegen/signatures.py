"""Method and parameter signatures in each target language."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from tigerlink.codegen.types import convert_param, convert_return, convert_type
from tigerlink.parsers.models import MethodInfo, MethodParam, PropertyInfo

BRIDGE_TYPES = ("Callback", "ReadableArray", "ReadableMap")


def ts_params(params: Sequence[MethodParam]) -> str:
    return ", ".join(
        f"{p.name}{'?' if p.is_optional else ''}: {p.type_text}" for p in params
    )


def ts_method(method: MethodInfo) -> str:
    """`name(a: string, b?: number): void` with source types verbatim."""
    return f"{method.name}({ts_params(method.params)}): {method.return_type}"


def ts_property(prop: PropertyInfo) -> str:
    return f"{prop.name}{'?' if prop.is_optional else ''}: {prop.type_text};"


def kotlin_params(params: Sequence[MethodParam]) -> str:
    return ", ".join(f"{p.name}: {convert_param(p, 'kotlin')}" for p in params)


def kotlin_return_suffix(method: MethodInfo) -> str:
    """`: String` or empty for Unit."""
    rendered = convert_return(method.return_type, "kotlin")
    return "" if rendered == "Unit" else f": {rendered}"


def java_params(params: Sequence[MethodParam]) -> str:
    return ", ".join(f"{convert_param(p, 'java')} {p.name}" for p in params)


def java_return(method: MethodInfo) -> str:
    return convert_return(method.return_type, "java")


def property_type(prop: PropertyInfo, language: str) -> str:
    return convert_type(prop.type_text, language, optional=prop.is_optional)


def bridge_imports(rendered_types: Iterable[str], *, semicolon: bool) -> List[str]:
    """Import lines for bridge types referenced by rendered signatures."""
    text = " ".join(rendered_types)
    end = ";" if semicolon else ""
    return [
        f"import com.lynx.react.bridge.{name}{end}"
        for name in BRIDGE_TYPES
        if name in text
    ]


def capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]
