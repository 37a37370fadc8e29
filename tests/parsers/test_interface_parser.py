"""Tests for the tree-sitter based TypeScript interface parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from tigerlink.errors import InterfaceParseError
from tigerlink.parsers.interface_parser import InterfaceParser, discover_native_modules

SOURCE = '''
import type { TigerModule } from "@tigermodule/core";

export interface NativeLocalStorageModule extends TigerModule {
  setStorageItem(key: string, value: string): void;
  getStorageItem(key: string, callback: (value: string | null) => void): void;
  clearStorage(): void;
  getKeys(prefix?: string): Promise<string[]>;
}

/**
 * Text input backed by a native edit text.
 * @androidViewType androidx.appcompat.widget.AppCompatEditText
 */
export interface ExplorerInputProps {
  value?: string;
  placeholder: string;
  maxlines?: number;
}

interface AnalyticsService {
  track(event: string, payload?: Record<string, any>): void;
}
'''


@pytest.fixture(scope="module")
def parser() -> InterfaceParser:
    return InterfaceParser()


def test_parses_module_methods(parser: InterfaceParser) -> None:
    parsed = parser.parse_source(SOURCE)

    module = parsed.get("NativeLocalStorageModule")
    assert module is not None
    assert module.extends == ("TigerModule",)
    assert [m.name for m in module.methods] == [
        "setStorageItem",
        "getStorageItem",
        "clearStorage",
        "getKeys",
    ]

    get_item = module.methods[1]
    assert [(p.name, p.type_text) for p in get_item.params] == [
        ("key", "string"),
        ("callback", "(value: string | null) => void"),
    ]
    assert get_item.return_type == "void"

    get_keys = module.methods[3]
    assert get_keys.params[0].is_optional is True
    assert get_keys.return_type == "Promise<string[]>"


def test_parses_props_and_doc_comments(parser: InterfaceParser) -> None:
    parsed = parser.parse_source(SOURCE)

    props = parsed.get("ExplorerInputProps")
    assert props is not None
    assert [(p.name, p.type_text, p.is_optional) for p in props.properties] == [
        ("value", "string", True),
        ("placeholder", "string", False),
        ("maxlines", "number", True),
    ]
    assert len(props.doc_comments) == 1
    assert "@androidViewType androidx.appcompat.widget.AppCompatEditText" in props.doc_comments[0]


def test_classifies_interfaces(parser: InterfaceParser) -> None:
    parsed = parser.parse_source(SOURCE)

    assert [i.name for i in parsed.module_interfaces()] == ["NativeLocalStorageModule"]
    assert [i.name for i in parsed.element_interfaces()] == ["ExplorerInputProps"]
    assert [i.name for i in parsed.service_interfaces(["AnalyticsService", "Missing"])] == [
        "AnalyticsService"
    ]


def test_multiline_types_are_collapsed(parser: InterfaceParser) -> None:
    parsed = parser.parse_source(
        """
export interface Sharing extends TigerModule {
  share(options: {
    title: string;
    url?: string;
  }): void;
}
"""
    )

    method = parsed.get("Sharing").methods[0]
    assert method.params[0].type_text == "{ title: string; url?: string; }"


def test_discover_native_modules_uses_interface_names(parser: InterfaceParser) -> None:
    modules = discover_native_modules(parser.parse_source(SOURCE))

    assert [(m.name, m.class_name) for m in modules] == [
        ("NativeLocalStorageModule", "NativeLocalStorageModule")
    ]


def test_parse_file_reads_from_disk(parser: InterfaceParser, tmp_path: Path) -> None:
    source_file = tmp_path / "module.ts"
    source_file.write_text(SOURCE, encoding="utf-8")

    parsed = parser.parse_file(source_file)

    assert parsed.source_file == source_file
    assert "AnalyticsService" in parsed.interfaces


def test_missing_file_raises_parse_error(parser: InterfaceParser, tmp_path: Path) -> None:
    missing = tmp_path / "src" / "module.ts"

    with pytest.raises(InterfaceParseError) as exc_info:
        parser.parse_file(missing)

    assert exc_info.value.source_file == missing
