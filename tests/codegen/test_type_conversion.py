"""Tests for TypeScript -> JVM/Swift type conversion."""

from __future__ import annotations

import pytest

from tigerlink.codegen import types as type_module
from tigerlink.codegen.types import (
    TypeKind,
    TypeShape,
    classify_type,
    convert_param,
    convert_type,
    render_type,
)
from tigerlink.errors import GenerationError, UnsupportedTypeError
from tigerlink.parsers.models import MethodParam


@pytest.mark.parametrize(
    "type_text, expected",
    [
        ("void", TypeShape(TypeKind.VOID)),
        ("any", TypeShape(TypeKind.ANY)),
        ("unknown", TypeShape(TypeKind.ANY)),
        ("undefined", TypeShape(TypeKind.ANY)),
        ("string", TypeShape(TypeKind.STRING)),
        ("'light'", TypeShape(TypeKind.STRING)),
        ("'light' | 'dark'", TypeShape(TypeKind.STRING)),
        ("number", TypeShape(TypeKind.NUMBER)),
        ("42", TypeShape(TypeKind.NUMBER)),
        ("boolean", TypeShape(TypeKind.BOOLEAN)),
        ("true", TypeShape(TypeKind.BOOLEAN)),
        ("bigint", TypeShape(TypeKind.BIGINT)),
        ("BigInt", TypeShape(TypeKind.BIGINT)),
        ("ArrayBuffer", TypeShape(TypeKind.BYTES)),
        ("Uint8Array", TypeShape(TypeKind.BYTES)),
        ("string[]", TypeShape(TypeKind.ARRAY)),
        ("(string | null)[]", TypeShape(TypeKind.ARRAY)),
        ("Array<{ key: string; value: any }>", TypeShape(TypeKind.ARRAY)),
        ("ReadonlyArray<number>", TypeShape(TypeKind.ARRAY)),
        ("object", TypeShape(TypeKind.MAP)),
        ("Record<string, any>", TypeShape(TypeKind.MAP)),
        ("Map<string, number>", TypeShape(TypeKind.MAP)),
        ("{ title: string; url?: string }", TypeShape(TypeKind.MAP)),
        ("ShareOptions", TypeShape(TypeKind.MAP)),
        ("Lynx.CSSProperties", TypeShape(TypeKind.MAP)),
        ("(value: string) => void", TypeShape(TypeKind.CALLBACK)),
        ("(e: BaseEvent<\"input\", { value: string }>) => void", TypeShape(TypeKind.CALLBACK)),
        ("Function", TypeShape(TypeKind.CALLBACK)),
        ("string | null", TypeShape(TypeKind.STRING, nullable=True)),
        ("string | undefined", TypeShape(TypeKind.STRING, nullable=True)),
        ("(number | null)", TypeShape(TypeKind.NUMBER, nullable=True)),
        ("((v: string) => void) | null", TypeShape(TypeKind.CALLBACK, nullable=True)),
    ],
)
def test_classify_type(type_text: str, expected: TypeShape) -> None:
    assert classify_type(type_text) == expected


@pytest.mark.parametrize("type_text", ["void", "undefined", "Promise<void>"])
def test_void_return_shapes(type_text: str) -> None:
    assert classify_type(type_text, is_return=True).kind is TypeKind.VOID


def test_promise_return_unwraps_to_inner_shape() -> None:
    assert classify_type("Promise<string>", is_return=True) == TypeShape(TypeKind.STRING)


@pytest.mark.parametrize(
    "type_text",
    [
        "symbol",
        "never",
        "[string, number]",
        "string | number",
        "Foo & Bar",
        "foo",
        "",
    ],
)
def test_unsupported_types_raise(type_text: str) -> None:
    with pytest.raises(UnsupportedTypeError):
        classify_type(type_text)


@pytest.mark.parametrize(
    "type_text, language, expected",
    [
        ("string", "kotlin", "String"),
        ("string | null", "kotlin", "String?"),
        ("number", "kotlin", "Double"),
        ("boolean", "kotlin", "Boolean"),
        ("any", "kotlin", "Any?"),
        ("string[]", "kotlin", "ReadableArray"),
        ("Record<string, any>", "kotlin", "ReadableMap"),
        ("number", "java", "double"),
        ("number | null", "java", "Double"),
        ("boolean | undefined", "java", "Boolean"),
        ("string | null", "java", "String"),
        ("ArrayBuffer", "java", "byte[]"),
        ("boolean", "swift", "Bool"),
        ("string | null", "swift", "String?"),
        ("object", "swift", "NSDictionary"),
        ("(v: string) => void", "swift", "(NSString) -> Void"),
    ],
)
def test_convert_type(type_text: str, language: str, expected: str) -> None:
    assert convert_type(type_text, language) == expected


def test_nullable_swift_callback_is_parenthesized() -> None:
    shape = TypeShape(TypeKind.CALLBACK, nullable=True)

    assert render_type(shape, "swift") == "((NSString) -> Void)?"
    assert render_type(shape, "kotlin") == "Callback?"


def test_void_return_per_language() -> None:
    assert convert_type("void", "kotlin", is_return=True) == "Unit"
    assert convert_type("void", "java", is_return=True) == "void"
    assert convert_type("void", "swift", is_return=True) == "Void"


def test_optional_parameters_are_nullable() -> None:
    param = MethodParam(name="prefix", type_text="string", is_optional=True)

    assert convert_param(param, "kotlin") == "String?"
    assert convert_param(param, "java") == "String"
    assert convert_param(MethodParam("limit", "number", True), "java") == "Double"


def test_callback_parameters_by_shape_or_name() -> None:
    by_shape = MethodParam(name="onDone", type_text="(result: string) => void")
    by_name = MethodParam(name="callback", type_text="Function")
    named_any = MethodParam(name="callback", type_text="symbol")

    assert convert_param(by_shape, "kotlin") == "Callback"
    assert convert_param(by_name, "java") == "Callback"
    assert convert_param(named_any, "kotlin") == "Callback"


def test_unsupported_type_error_carries_language() -> None:
    with pytest.raises(UnsupportedTypeError) as exc_info:
        convert_type("symbol", "kotlin")

    assert exc_info.value.language == "kotlin"
    assert exc_info.value.type_text == "symbol"
    assert "kotlin" in str(exc_info.value)


def test_unknown_language_is_a_generation_error() -> None:
    with pytest.raises(GenerationError):
        convert_type("string", "rust")


def test_every_language_maps_every_kind() -> None:
    for table in type_module.TYPE_TABLES.values():
        assert set(table) == set(TypeKind)


def test_incomplete_table_fails_exhaustiveness_check() -> None:
    tables = {lang: dict(table) for lang, table in type_module.TYPE_TABLES.items()}
    del tables["swift"][TypeKind.BYTES]

    with pytest.raises(RuntimeError, match="BYTES"):
        type_module._check_exhaustive(tables)
