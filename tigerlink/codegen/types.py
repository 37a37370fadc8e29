"""TypeScript -> target-language type conversion.

Conversion is two steps. :func:`classify_type` reduces a TypeScript type
string to a :class:`TypeShape` (one of a closed set of kinds plus a nullable
flag); :func:`render_type` maps the shape through the per-language table.

    classify_type("string | null")     -> TypeShape(STRING, nullable=True)
    convert_type("string | null", "kotlin") -> "String?"
    convert_type("number", "java", optional=True) -> "Double"

Types outside the closed set raise :class:`UnsupportedTypeError` rather than
being passed through to the generated source.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping

from tigerlink.errors import GenerationError, UnsupportedTypeError
from tigerlink.parsers.models import MethodParam


class TypeKind(enum.Enum):
    VOID = "void"
    ANY = "any"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    BIGINT = "bigint"
    BYTES = "bytes"
    ARRAY = "array"
    MAP = "map"
    CALLBACK = "callback"


@dataclass(frozen=True)
class TypeShape:
    kind: TypeKind
    nullable: bool = False

    def as_nullable(self) -> "TypeShape":
        return replace(self, nullable=True)


LANGUAGES = ("kotlin", "java", "swift")

TYPE_TABLES: Dict[str, Mapping[TypeKind, str]] = {
    "kotlin": {
        TypeKind.VOID: "Unit",
        TypeKind.ANY: "Any?",
        TypeKind.STRING: "String",
        TypeKind.NUMBER: "Double",
        TypeKind.BOOLEAN: "Boolean",
        TypeKind.BIGINT: "Long",
        TypeKind.BYTES: "ByteArray",
        TypeKind.ARRAY: "ReadableArray",
        TypeKind.MAP: "ReadableMap",
        TypeKind.CALLBACK: "Callback",
    },
    "java": {
        TypeKind.VOID: "void",
        TypeKind.ANY: "Object",
        TypeKind.STRING: "String",
        TypeKind.NUMBER: "double",
        TypeKind.BOOLEAN: "boolean",
        TypeKind.BIGINT: "long",
        TypeKind.BYTES: "byte[]",
        TypeKind.ARRAY: "ReadableArray",
        TypeKind.MAP: "ReadableMap",
        TypeKind.CALLBACK: "Callback",
    },
    "swift": {
        TypeKind.VOID: "Void",
        TypeKind.ANY: "Any?",
        TypeKind.STRING: "String",
        TypeKind.NUMBER: "Double",
        TypeKind.BOOLEAN: "Bool",
        TypeKind.BIGINT: "String",
        TypeKind.BYTES: "Data",
        TypeKind.ARRAY: "NSArray",
        TypeKind.MAP: "NSDictionary",
        TypeKind.CALLBACK: "(NSString) -> Void",
    },
}

_JAVA_BOXED = {"double": "Double", "boolean": "Boolean", "long": "Long"}


def _check_exhaustive(tables: Mapping[str, Mapping[TypeKind, str]]) -> None:
    for language in LANGUAGES:
        if language not in tables:
            raise RuntimeError(f"No type table for language '{language}'")
    for language, table in tables.items():
        missing = [kind.name for kind in TypeKind if kind not in table]
        if missing:
            raise RuntimeError(
                f"Type table for '{language}' has no mapping for: {', '.join(missing)}"
            )


_check_exhaustive(TYPE_TABLES)


# =============================================================================
# Classification
# =============================================================================

_OPENERS = {"(": ")", "<": ">", "{": "}", "[": "]"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}

_STRING_LITERAL_RE = re.compile(r"""^(?:'[^']*'|"[^"]*"|`[^`]*`)$""")
_NUMBER_LITERAL_RE = re.compile(r"^-?\d+(\.\d+)?$")
_TYPE_REFERENCE_RE = re.compile(r"^(?:[A-Za-z_$][\w$]*\.)*[A-Z][\w$]*(?:<.*>)?$")

_SIMPLE_KINDS = {
    "void": TypeKind.VOID,
    "any": TypeKind.ANY,
    "unknown": TypeKind.ANY,
    "null": TypeKind.ANY,
    "string": TypeKind.STRING,
    "String": TypeKind.STRING,
    "number": TypeKind.NUMBER,
    "Number": TypeKind.NUMBER,
    "boolean": TypeKind.BOOLEAN,
    "Boolean": TypeKind.BOOLEAN,
    "true": TypeKind.BOOLEAN,
    "false": TypeKind.BOOLEAN,
    "bigint": TypeKind.BIGINT,
    "BigInt": TypeKind.BIGINT,
    "ArrayBuffer": TypeKind.BYTES,
    "Uint8Array": TypeKind.BYTES,
    "object": TypeKind.MAP,
    "Object": TypeKind.MAP,
    "Function": TypeKind.CALLBACK,
}

_GENERIC_KINDS = {
    "Array": TypeKind.ARRAY,
    "ReadonlyArray": TypeKind.ARRAY,
    "Record": TypeKind.MAP,
    "Map": TypeKind.MAP,
}


def _split_top_level(text: str, separator: str) -> List[str]:
    """Split on a separator that is not nested in brackets or quotes."""
    parts: List[str] = []
    depth = 0
    quote = ""
    start = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "'\"`":
            quote = ch
        elif ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS and not (ch == ">" and i > 0 and text[i - 1] == "="):
            depth -= 1
        elif depth == 0 and text.startswith(separator, i):
            parts.append(text[start:i].strip())
            i += len(separator)
            start = i
            continue
        i += 1
    parts.append(text[start:].strip())
    return parts


def _strip_outer_parens(text: str) -> str:
    """`(string | null)` -> `string | null`; `(a) => void` stays as is."""
    while text.startswith("(") and text.endswith(")"):
        depth = 0
        for i, ch in enumerate(text):
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
                if depth == 0 and i != len(text) - 1:
                    return text
        text = text[1:-1].strip()
    return text


def _generic_args(text: str, base: str) -> str:
    return text[len(base) + 1 : -1].strip()


def _classify_union(members: List[str], type_text: str, is_return: bool) -> TypeShape:
    present = [m for m in members if m not in ("null", "undefined")]
    nullable = len(present) < len(members)

    if not present:
        return TypeShape(TypeKind.ANY, nullable=True)
    if len(present) == 1:
        shape = classify_type(present[0], is_return=is_return)
        return shape.as_nullable() if nullable else shape

    for pattern, kind in (
        (_STRING_LITERAL_RE, TypeKind.STRING),
        (_NUMBER_LITERAL_RE, TypeKind.NUMBER),
    ):
        if all(pattern.match(m) for m in present):
            return TypeShape(kind, nullable=nullable)
    if all(m in ("true", "false", "boolean") for m in present):
        return TypeShape(TypeKind.BOOLEAN, nullable=nullable)

    raise UnsupportedTypeError(type_text)


def classify_type(type_text: str, *, is_return: bool = False) -> TypeShape:
    """Reduce a TypeScript type string to a TypeShape.

    Args:
        type_text: Type as written in the interface source.
        is_return: Classify in return position, where `undefined` means
            VOID instead of ANY.

    Raises:
        UnsupportedTypeError: The type has no shape (symbol, never, tuples,
            mixed unions, intersections, unknown lowercase identifiers).
    """
    text = _strip_outer_parens(" ".join(type_text.split()))
    if not text:
        raise UnsupportedTypeError(type_text)

    members = [m for m in _split_top_level(text, "|") if m]
    if len(members) > 1:
        return _classify_union(members, type_text, is_return)
    text = _strip_outer_parens(members[0]) if members else text

    if len(_split_top_level(text, "&")) > 1:
        raise UnsupportedTypeError(type_text)

    # "(a: string) => void"
    if text.startswith("(") and len(_split_top_level(text, "=>")) > 1:
        return TypeShape(TypeKind.CALLBACK)

    if text == "undefined":
        return TypeShape(TypeKind.VOID if is_return else TypeKind.ANY)
    if text in _SIMPLE_KINDS:
        return TypeShape(_SIMPLE_KINDS[text])
    if _STRING_LITERAL_RE.match(text):
        return TypeShape(TypeKind.STRING)
    if _NUMBER_LITERAL_RE.match(text):
        return TypeShape(TypeKind.NUMBER)

    if text.startswith("Promise<") and text.endswith(">"):
        return classify_type(_generic_args(text, "Promise"), is_return=True)

    if text.endswith("[]"):
        if text.startswith("["):
            raise UnsupportedTypeError(type_text)
        return TypeShape(TypeKind.ARRAY)

    for base, kind in _GENERIC_KINDS.items():
        if text.startswith(f"{base}<") and text.endswith(">"):
            return TypeShape(kind)

    if text.startswith("{") and text.endswith("}"):
        return TypeShape(TypeKind.MAP)
    if text.startswith("["):
        raise UnsupportedTypeError(type_text)
    if _TYPE_REFERENCE_RE.match(text):
        return TypeShape(TypeKind.MAP)

    raise UnsupportedTypeError(type_text)


# =============================================================================
# Rendering
# =============================================================================


def render_type(shape: TypeShape, language: str) -> str:
    """Target syntax for a shape; nullability is applied per language."""
    if language not in TYPE_TABLES:
        raise GenerationError(f"Unsupported target language '{language}'")
    rendered = TYPE_TABLES[language][shape.kind]

    if not shape.nullable or shape.kind is TypeKind.VOID:
        return rendered
    if language == "java":
        return _JAVA_BOXED.get(rendered, rendered)
    if rendered.endswith("?"):
        return rendered
    if "->" in rendered:
        return f"({rendered})?"
    return f"{rendered}?"


def convert_type(
    type_text: str,
    language: str,
    *,
    is_return: bool = False,
    optional: bool = False,
) -> str:
    """Convert a TypeScript type string to `language` syntax.

    Raises:
        UnsupportedTypeError: With `language` set.
    """
    try:
        shape = classify_type(type_text, is_return=is_return)
    except UnsupportedTypeError as exc:
        raise UnsupportedTypeError(type_text, language) from exc
    if optional:
        shape = shape.as_nullable()
    return render_type(shape, language)


def is_callback_param(param: MethodParam) -> bool:
    """True for parameters typed as functions or named `callback`."""
    if param.name == "callback":
        return True
    try:
        return classify_type(param.type_text).kind is TypeKind.CALLBACK
    except UnsupportedTypeError:
        return False


def convert_param(param: MethodParam, language: str) -> str:
    """Target type of a method parameter; optional parameters are nullable."""
    if is_callback_param(param):
        return render_type(TypeShape(TypeKind.CALLBACK, param.is_optional), language)
    return convert_type(param.type_text, language, optional=param.is_optional)


def convert_return(return_type: str, language: str) -> str:
    return convert_type(return_type, language, is_return=True)


def is_void(return_type: str) -> bool:
    return classify_type(return_type, is_return=True).kind is TypeKind.VOID


__all__ = [
    "LANGUAGES",
    "TYPE_TABLES",
    "TypeKind",
    "TypeShape",
    "classify_type",
    "convert_param",
    "convert_return",
    "convert_type",
    "is_callback_param",
    "is_void",
    "render_type",
]
