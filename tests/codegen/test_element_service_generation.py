"""Tests for element and service generation."""

from __future__ import annotations

from pathlib import Path

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.elements import DEFAULT_ANDROID_VIEW, generate_element
from tigerlink.codegen.services import generate_service
from tigerlink.config.schema import ExtensionManifest
from tigerlink.parsers.models import (
    AndroidViewTypeConfig,
    ElementInfo,
    MethodInfo,
    MethodParam,
    PropertyInfo,
)

EDIT_TEXT = AndroidViewTypeConfig(
    view_type="androidx.appcompat.widget.AppCompatEditText",
    short_name="AppCompatEditText",
    package_name="androidx.appcompat.widget",
    is_validated=True,
)

PROPS = (
    PropertyInfo("value", "string", is_optional=True),
    PropertyInfo("maxlines", "number", is_optional=True),
    PropertyInfo("style", "string | Lynx.CSSProperties", is_optional=True),
)


def _context(tmp_path: Path, language: str = "kotlin") -> CodegenContext:
    return CodegenContext(
        project_root=tmp_path,
        android_package_name="com.rfc.tools",
        android_language=language,
    )


def test_kotlin_element_uses_resolved_view_type(tmp_path: Path) -> None:
    element = ElementInfo(
        name="ExplorerInput",
        tag_name="explorer-input",
        properties=PROPS,
        android_view_type=EDIT_TEXT,
    )

    output = generate_element(element, _context(tmp_path))

    source = (tmp_path / "android/src/main/kotlin/com/rfc/tools/ExplorerInput.kt").read_text()
    assert "import androidx.appcompat.widget.AppCompatEditText" in source
    assert '@LynxElement(name = "explorer-input")' in source
    assert "class ExplorerInput(context: LynxContext) : LynxUI<AppCompatEditText>(context) {" in source
    assert '  @LynxProp(name = "value")\n  fun setValue(value: String?) {' in source
    assert "fun setMaxlines(maxlines: Double?)" in source
    # Mixed union has no JVM mapping; the setter is left out.
    assert "setStyle" not in source
    assert len(output.written) == 4


def test_element_contract_keeps_all_props(tmp_path: Path) -> None:
    element = ElementInfo(name="ExplorerInput", tag_name="explorer-input", properties=PROPS)

    generate_element(element, _context(tmp_path))

    contract = (tmp_path / "generated/ExplorerInput.d.ts").read_text()
    assert '    "explorer-input": {' in contract
    assert "      style?: string | Lynx.CSSProperties;" in contract
    assert "export interface ExplorerInputProps {" in contract
    assert "  value?: string;" in contract


def test_java_element_defaults_to_view(tmp_path: Path) -> None:
    element = ElementInfo(name="Badge", tag_name="badge")

    generate_element(element, _context(tmp_path, "java"))

    source = (tmp_path / "android/src/main/java/com/rfc/tools/Badge.java").read_text()
    assert DEFAULT_ANDROID_VIEW.view_type == "android.view.View"
    assert "import android.view.View;" in source
    assert "public class Badge extends LynxUI<View> {" in source
    assert "// No properties defined" in source


def test_element_template_is_not_overwritten(tmp_path: Path) -> None:
    element = ElementInfo(name="Badge", tag_name="badge")
    target = tmp_path / "android/src/main/kotlin/com/rfc/tools/Badge.kt"
    target.parent.mkdir(parents=True)
    target.write_text("// mine\n", encoding="utf-8")

    output = generate_element(element, _context(tmp_path))

    assert target.read_text() == "// mine\n"
    assert output.preserved == [target]


def test_swift_element_template(tmp_path: Path) -> None:
    props = PROPS + (PropertyInfo("onChange", "(value: string) => void", is_optional=True),)
    element = ElementInfo(name="ExplorerInput", tag_name="explorer-input", properties=props)

    generate_element(element, _context(tmp_path))

    source = (tmp_path / "ios/src/ExplorerInput.swift").read_text()
    assert "public final class ExplorerInput: LynxUI<UIView> {" in source
    assert "    @objc func setValue(_ value: String?) {" in source
    assert "    @objc func setMaxlines(_ maxlines: Double?) {" in source
    assert "    @objc func setOnChange(_ onChange: ((NSString) -> Void)?) {" in source
    assert "setStyle" not in source


def test_web_element_template(tmp_path: Path) -> None:
    element = ElementInfo(name="ExplorerInput", tag_name="explorer-input", properties=PROPS)

    generate_element(element, _context(tmp_path))

    source = (tmp_path / "web/src/ExplorerInput.ts").read_text()
    assert source.startswith('import * as Lynx from "@lynx-js/types";\n')
    assert "/** @lynxelement name:explorer-input */" in source
    assert "export class ExplorerInput extends HTMLElement {" in source
    assert "  setStyle(style?: string | Lynx.CSSProperties): void {" in source


def test_web_element_without_lynx_types_or_props(tmp_path: Path) -> None:
    generate_element(ElementInfo(name="Badge", tag_name="badge"), _context(tmp_path))

    source = (tmp_path / "web/src/Badge.ts").read_text()
    assert "@lynx-js/types" not in source
    assert "  // No properties defined" in source


def test_regeneration_keeps_swift_and_web_templates(tmp_path: Path) -> None:
    element = ElementInfo(name="ExplorerInput", tag_name="explorer-input", properties=PROPS)
    context = _context(tmp_path)
    generate_element(element, context)
    swift = tmp_path / "ios/src/ExplorerInput.swift"
    web = tmp_path / "web/src/ExplorerInput.ts"
    swift.write_text("// swift edits\n", encoding="utf-8")
    web.write_text("// web edits\n", encoding="utf-8")

    output = generate_element(element, context)

    assert swift.read_text() == "// swift edits\n"
    assert web.read_text() == "// web edits\n"
    assert swift in output.preserved
    assert web in output.preserved
    assert output.written == [tmp_path / "generated/ExplorerInput.d.ts"]


def test_ios_output_follows_manifest_platforms(tmp_path: Path) -> None:
    base = {
        "name": "ext-explorer",
        "version": "1.0.0",
        "platforms": {"android": {"packageName": "com.rfc.tools"}},
    }
    without_ios = CodegenContext.from_manifest(ExtensionManifest.from_dict(base), tmp_path)
    with_ios = CodegenContext.from_manifest(
        ExtensionManifest.from_dict(
            {**base, "platforms": {**base["platforms"], "ios": {"sourceDir": "ios/Sources"}}}
        ),
        tmp_path,
    )

    generate_element(ElementInfo(name="Badge", tag_name="badge"), without_ios)
    assert not (tmp_path / "ios").exists()

    generate_element(ElementInfo(name="Badge", tag_name="badge"), with_ios)
    assert (tmp_path / "ios/Sources/Badge.swift").exists()


def test_kotlin_service_and_contract(tmp_path: Path) -> None:
    methods = (
        MethodInfo("track", (MethodParam("event", "string"),)),
        MethodInfo("sessionId", (), "string"),
    )

    generate_service("AnalyticsService", methods, _context(tmp_path))

    source = (tmp_path / "android/src/main/kotlin/com/rfc/tools/AnalyticsService.kt").read_text()
    assert "@LynxService\nobject AnalyticsService {" in source
    assert "  fun track(event: String) {" in source
    assert "  fun sessionId(): String {" in source
    assert 'TODO("Implement return value")' in source

    contract = (tmp_path / "generated/AnalyticsService.ts").read_text()
    assert "  track(event: string): void;" in contract
    assert "export { AnalyticsServiceInterface as AnalyticsService };" in contract


def test_java_service_without_methods(tmp_path: Path) -> None:
    generate_service("SyncService", (), _context(tmp_path, "java"))

    source = (tmp_path / "android/src/main/java/com/rfc/tools/SyncService.java").read_text()
    assert "public class SyncService {" in source
    assert "public static synchronized SyncService getInstance()" in source

    contract = (tmp_path / "generated/SyncService.ts").read_text()
    assert "  // No methods declared" in contract
