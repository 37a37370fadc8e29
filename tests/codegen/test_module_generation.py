"""Tests for native module generation."""

from __future__ import annotations

from pathlib import Path

import pytest

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.modules import generate, generate_native_module
from tigerlink.errors import UnsupportedTypeError
from tigerlink.parsers.models import MethodInfo, MethodParam

METHODS = (
    MethodInfo(
        name="setStorageItem",
        params=(MethodParam("key", "string"), MethodParam("value", "string")),
    ),
    MethodInfo(
        name="getStorageItem",
        params=(
            MethodParam("key", "string"),
            MethodParam("callback", "(value: string | null) => void"),
        ),
    ),
    MethodInfo(name="count", params=(MethodParam("prefix", "string", True),), return_type="number"),
)


def _context(tmp_path: Path, language: str = "kotlin") -> CodegenContext:
    return CodegenContext(
        project_root=tmp_path,
        android_package_name="com.example.storage",
        android_language=language,
    )


def test_context_derives_paths(tmp_path: Path) -> None:
    kotlin = _context(tmp_path)
    java = _context(tmp_path, "java")

    assert kotlin.file_extension == "kt"
    assert kotlin.android_source_dir == "kotlin"
    assert java.file_extension == "java"
    assert kotlin.android_file("Storage", generated=True) == (
        tmp_path / "android/src/main/kotlin/com/example/storage/generated/Storage.kt"
    )
    assert java.android_file("Storage") == (
        tmp_path / "android/src/main/java/com/example/storage/Storage.java"
    )


def test_kotlin_module_files(tmp_path: Path) -> None:
    output = generate_native_module("NativeLocalStorageModule", METHODS, _context(tmp_path))

    package_dir = tmp_path / "android/src/main/kotlin/com/example/storage"
    spec = (package_dir / "generated/NativeLocalStorageModuleSpec.kt").read_text()
    impl = (package_dir / "NativeLocalStorageModule.kt").read_text()

    assert "package com.example.storage.generated" in spec
    assert "abstract class NativeLocalStorageModuleSpec(context: Context) : LynxModule(context)" in spec
    assert "  abstract fun setStorageItem(key: String, value: String)\n" in spec
    assert "  abstract fun getStorageItem(key: String, callback: Callback)\n" in spec
    assert "  abstract fun count(prefix: String?): Double\n" in spec

    assert '@LynxNativeModule(name = "NativeLocalStorageModule")' in impl
    assert "import com.lynx.react.bridge.Callback" in impl
    assert "import com.lynx.react.bridge.ReadableMap" not in impl
    assert 'TODO("Implement return value")' in impl
    assert "override fun setStorageItem(key: String, value: String) {" in impl

    assert len(output.written) == 5
    assert output.preserved == []


def test_java_module_files(tmp_path: Path) -> None:
    generate_native_module("NativeLocalStorageModule", METHODS, _context(tmp_path, "java"))

    package_dir = tmp_path / "android/src/main/java/com/example/storage"
    spec = (package_dir / "generated/NativeLocalStorageModuleSpec.java").read_text()
    impl = (package_dir / "NativeLocalStorageModule.java").read_text()

    assert "public abstract class NativeLocalStorageModuleSpec extends LynxModule {" in spec
    assert "  public abstract void getStorageItem(String key, Callback callback);" in spec
    assert "  public abstract double count(String prefix);" in spec
    assert 'throw new UnsupportedOperationException("Not implemented");' in impl
    assert "import com.lynx.react.bridge.Callback;" in impl


def test_browser_contract(tmp_path: Path) -> None:
    generate_native_module("NativeLocalStorageModule", METHODS, _context(tmp_path))

    contract = (tmp_path / "generated/NativeLocalStorageModule.ts").read_text()

    assert "export interface NativeLocalStorageModuleInterface {" in contract
    assert "  setStorageItem(key: string, value: string): void;" in contract
    assert "  getStorageItem(key: string, callback: (value: string | null) => void): void;" in contract
    assert "  count(prefix?: string): number;" in contract
    assert "export { NativeLocalStorageModuleInterface as NativeLocalStorageModule };" in contract

    web_spec = (tmp_path / "web/src/generated/NativeLocalStorageModuleSpec.ts").read_text()
    web_impl = (tmp_path / "web/src/NativeLocalStorageModule.ts").read_text()
    assert "export abstract class NativeLocalStorageModuleSpec {" in web_spec
    assert "/** @lynxnativemodule name:NativeLocalStorageModule */" in web_impl


def test_promise_void_web_stub_matches_jvm_stub(tmp_path: Path) -> None:
    methods = (MethodInfo(name="sync", return_type="Promise<void>"),)

    generate_native_module("SyncModule", methods, _context(tmp_path))

    web_impl = (tmp_path / "web/src/SyncModule.ts").read_text()
    kotlin_impl = (
        tmp_path / "android/src/main/kotlin/com/example/storage/SyncModule.kt"
    ).read_text()
    assert "  sync(): Promise<void> {\n    // TODO: Implement your web logic here\n  }" in web_impl
    assert "Not implemented" not in web_impl
    assert "  override fun sync() {\n    // TODO: Implement your logic here\n  }" in kotlin_impl


def test_empty_method_list_keeps_contract_valid(tmp_path: Path) -> None:
    generate("EmptyModule", (), _context(tmp_path))

    contract = (tmp_path / "generated/EmptyModule.ts").read_text()

    assert "export interface EmptyModuleInterface {\n  // No methods declared\n}" in contract


def test_regeneration_is_byte_identical_and_preserves_templates(tmp_path: Path) -> None:
    context = _context(tmp_path)
    generate_native_module("NativeLocalStorageModule", METHODS, context)

    contract = tmp_path / "generated/NativeLocalStorageModule.ts"
    spec = tmp_path / "android/src/main/kotlin/com/example/storage/generated/NativeLocalStorageModuleSpec.kt"
    impl = tmp_path / "android/src/main/kotlin/com/example/storage/NativeLocalStorageModule.kt"
    web_impl = tmp_path / "web/src/NativeLocalStorageModule.ts"
    first_contract = contract.read_bytes()
    first_spec = spec.read_bytes()
    impl.write_text("// developer code\n", encoding="utf-8")
    web_impl.write_text("// developer web code\n", encoding="utf-8")

    output = generate_native_module("NativeLocalStorageModule", METHODS, context)

    assert contract.read_bytes() == first_contract
    assert spec.read_bytes() == first_spec
    assert impl.read_text() == "// developer code\n"
    assert web_impl.read_text() == "// developer web code\n"
    assert set(output.preserved) == {impl, web_impl}


def test_unsupported_type_aborts_before_writing(tmp_path: Path) -> None:
    methods = (MethodInfo(name="bad", params=(MethodParam("value", "symbol"),)),)

    with pytest.raises(UnsupportedTypeError):
        generate_native_module("BadModule", methods, _context(tmp_path))

    assert not (tmp_path / "android").exists()
    assert not (tmp_path / "generated").exists()


def test_web_only_context_skips_jvm(tmp_path: Path) -> None:
    context = CodegenContext(project_root=tmp_path, android_package_name=None)

    output = generate_native_module("WebOnly", METHODS, context)

    assert not (tmp_path / "android").exists()
    assert (tmp_path / "generated/WebOnly.ts").exists()
    assert len(output.written) == 3
