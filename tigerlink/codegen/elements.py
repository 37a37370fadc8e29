"""Custom element generation.

Each element gets three templates, written once: a `LynxUI<ViewType>` class on
the JVM side, a `LynxUI<UIView>` Swift class under `ios/src` and an
`HTMLElement` class under `web/src`. A `generated/<Element>.d.ts` contract
declaring its tag and props is rewritten on every run.

Prop setters whose type has no native mapping are left out of the native
templates and reported as warnings; the props stay in the TypeScript files.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.signatures import bridge_imports, capitalize, property_type, ts_property
from tigerlink.codegen.writer import EntityOutput
from tigerlink.errors import UnsupportedTypeError
from tigerlink.parsers.models import AndroidViewTypeConfig, ElementInfo, PropertyInfo
from tigerlink.parsers.view_registry import DEFAULT_VIEW_TYPE

logger = logging.getLogger("tigerlink.codegen.elements")

DEFAULT_ANDROID_VIEW = AndroidViewTypeConfig(
    view_type=DEFAULT_VIEW_TYPE.full_name,
    short_name=DEFAULT_VIEW_TYPE.short_name,
    package_name=DEFAULT_VIEW_TYPE.package,
    is_validated=True,
)


def _setters(
    props: Sequence[PropertyInfo], language: str
) -> Tuple[List[Tuple[PropertyInfo, str]], List[str]]:
    converted: List[Tuple[PropertyInfo, str]] = []
    warnings: List[str] = []
    for prop in props:
        try:
            converted.append((prop, property_type(prop, language)))
        except UnsupportedTypeError as exc:
            warnings.append(f"Prop '{prop.name}' skipped: {exc}")
    return converted, warnings


def render_kotlin_element(
    element: ElementInfo, package_name: str, view: AndroidViewTypeConfig
) -> Tuple[str, List[str]]:
    setters, warnings = _setters(element.properties, "kotlin")
    lines = [
        f"package {package_name}",
        "",
        "import android.content.Context",
        f"import {view.view_type}",
        *bridge_imports((t for _, t in setters), semicolon=False),
        "import com.lynx.tasm.behavior.LynxContext",
        "import com.lynx.tasm.behavior.LynxProp",
        "import com.lynx.tasm.behavior.ui.LynxUI",
        "import com.lynx.tasm.event.LynxCustomEvent",
        "import com.tigermodule.autolink.LynxElement",
        "",
        "/**",
        f" * {element.name} element implementation",
        " */",
        f'@LynxElement(name = "{element.tag_name}")',
        f"class {element.name}(context: LynxContext) : LynxUI<{view.short_name}>(context) {{",
        "",
        f"  override fun createView(context: Context): {view.short_name} {{",
        f"    return {view.short_name}(context)",
        "  }",
    ]
    if not setters:
        lines += ["", "  // No properties defined"]
    for prop, type_name in setters:
        lines += [
            "",
            f'  @LynxProp(name = "{prop.name}")',
            f"  fun set{capitalize(prop.name)}({prop.name}: {type_name}) {{",
            f"    // TODO: Update the view with {prop.name}",
            "  }",
        ]
    lines += [
        "",
        "  protected fun emitEvent(name: String, value: Map<String, Any>? = null) {",
        "    val detail = LynxCustomEvent(sign, name)",
        "    value?.forEach { (key, v) -> detail.addDetail(key, v) }",
        "    lynxContext.eventEmitter.sendCustomEvent(detail)",
        "  }",
        "}",
    ]
    return "\n".join(lines), warnings


def render_java_element(
    element: ElementInfo, package_name: str, view: AndroidViewTypeConfig
) -> Tuple[str, List[str]]:
    setters, warnings = _setters(element.properties, "java")
    lines = [
        f"package {package_name};",
        "",
        "import android.content.Context;",
        f"import {view.view_type};",
        *bridge_imports((t for _, t in setters), semicolon=True),
        "import com.lynx.tasm.behavior.LynxContext;",
        "import com.lynx.tasm.behavior.LynxProp;",
        "import com.lynx.tasm.behavior.ui.LynxUI;",
        "import com.lynx.tasm.event.LynxCustomEvent;",
        "import com.tigermodule.autolink.LynxElement;",
        "import java.util.Map;",
        "",
        "/**",
        f" * {element.name} element implementation",
        " */",
        f'@LynxElement(name = "{element.tag_name}")',
        f"public class {element.name} extends LynxUI<{view.short_name}> {{",
        "",
        f"  public {element.name}(LynxContext context) {{",
        "    super(context);",
        "  }",
        "",
        "  @Override",
        f"  protected {view.short_name} createView(Context context) {{",
        f"    return new {view.short_name}(context);",
        "  }",
    ]
    if not setters:
        lines += ["", "  // No properties defined"]
    for prop, type_name in setters:
        lines += [
            "",
            f'  @LynxProp(name = "{prop.name}")',
            f"  public void set{capitalize(prop.name)}({type_name} {prop.name}) {{",
            f"    // TODO: Update the view with {prop.name}",
            "  }",
        ]
    lines += [
        "",
        "  protected void emitEvent(String name, Map<String, Object> value) {",
        "    LynxCustomEvent detail = new LynxCustomEvent(getSign(), name);",
        "    if (value != null) {",
        "      for (Map.Entry<String, Object> entry : value.entrySet()) {",
        "        detail.addDetail(entry.getKey(), entry.getValue());",
        "      }",
        "    }",
        "    getLynxContext().getEventEmitter().sendCustomEvent(detail);",
        "  }",
        "}",
    ]
    return "\n".join(lines), warnings


def render_swift_element(element: ElementInfo) -> Tuple[str, List[str]]:
    setters, warnings = _setters(element.properties, "swift")
    lines = [
        "import Foundation",
        "import UIKit",
        "",
        "/**",
        f" * {element.name} element implementation",
        " */",
        "@objcMembers",
        f"public final class {element.name}: LynxUI<UIView> {{",
        "",
        "    public override func createView() -> UIView {",
        "        let view = UIView()",
        "        return view",
        "    }",
    ]
    if not setters:
        lines += ["", "    // No properties defined"]
    for prop, type_name in setters:
        lines += [
            "",
            f"    @objc func set{capitalize(prop.name)}(_ {prop.name}: {type_name}) {{",
            f"        // TODO: Update the view with {prop.name}",
            "    }",
        ]
    lines += [
        "",
        "    func emitEvent(name: String, value: [String: Any]? = nil) {",
        "        let detail = LynxCustomEvent(sign: getSign(), name: name)",
        "        if let value = value {",
        "            for (key, v) in value {",
        "                detail.addDetail(key, value: v)",
        "            }",
        "        }",
        "        getLynxContext().getEventEmitter().sendCustomEvent(detail)",
        "    }",
        "}",
    ]
    return "\n".join(lines), warnings


def _needs_lynx_types(props: Sequence[PropertyInfo]) -> bool:
    return any(
        marker in prop.type_text
        for prop in props
        for marker in ("Lynx.", "BaseEvent", "CSSProperties")
    )


def render_web_element(element: ElementInfo) -> str:
    """HTMLElement template; prop types are kept as written in the source."""
    lines: List[str] = []
    if _needs_lynx_types(element.properties):
        lines += ['import * as Lynx from "@lynx-js/types";', ""]
    lines += [
        f"/** @lynxelement name:{element.tag_name} */",
        f"export class {element.name} extends HTMLElement {{",
        "  constructor() {",
        "    super();",
        "  }",
        "",
        "  connectedCallback() {}",
        "",
        "  disconnectedCallback() {}",
        "",
        "  attributeChangedCallback(name: string, oldValue: string, newValue: string) {}",
        "",
        "  static get observedAttributes(): string[] {",
        "    return [];",
        "  }",
    ]
    if not element.properties:
        lines += ["", "  // No properties defined"]
    for prop in element.properties:
        optional = "?" if prop.is_optional else ""
        lines += [
            "",
            f"  set{capitalize(prop.name)}({prop.name}{optional}: {prop.type_text}): void {{",
            f"    // TODO: Update the element with {prop.name}",
            "  }",
        ]
    lines += [
        "",
        "  protected emitEvent(name: string, value?: Record<string, any>): void {",
        "    this.dispatchEvent(",
        "      new CustomEvent(name, { detail: value, bubbles: true, cancelable: true })",
        "    );",
        "  }",
        "}",
    ]
    return "\n".join(lines)


def render_element_contract(element: ElementInfo) -> str:
    props = [f"  {ts_property(p)}" for p in element.properties]
    intrinsic = [f"      {ts_property(p)}" for p in element.properties]
    lines = [
        "/**",
        f" * Generated TypeScript declarations for the {element.name} element",
        " * DO NOT EDIT - This file is auto-generated",
        " */",
        "",
        'import * as Lynx from "@lynx-js/types";',
        "",
        'declare module "@lynx-js/types" {',
        "  interface IntrinsicElements extends Lynx.IntrinsicElements {",
        f'    "{element.tag_name}": {{',
        *intrinsic,
        "    };",
        "  }",
        "}",
        "",
        f"export interface {element.name}Props {{",
        *props,
        "}",
    ]
    return "\n".join(lines)


def generate_element(element: ElementInfo, context: CodegenContext) -> EntityOutput:
    """Generate the JVM template and TypeScript contract of one element."""
    logger.info(
        "Generating element %s <%s> (%d prop(s))",
        element.name,
        element.tag_name,
        len(element.properties),
    )
    output = EntityOutput(kind="element", name=element.name)
    view = element.android_view_type or DEFAULT_ANDROID_VIEW

    if context.android_enabled:
        render = (
            render_java_element
            if context.android_language == "java"
            else render_kotlin_element
        )
        content, warnings = render(element, context.android_package_name or "", view)
        for warning in warnings:
            logger.warning("Element %s: %s", element.name, warning)
        output.template(context.android_file(element.name), content)

    if context.generate_ios:
        content, warnings = render_swift_element(element)
        for warning in warnings:
            logger.warning("Element %s (iOS): %s", element.name, warning)
        output.template(context.ios_src_dir / f"{element.name}.swift", content)

    if context.generate_web:
        output.template(
            context.web_src_dir / f"{element.name}.ts", render_web_element(element)
        )
        output.authoritative(
            context.contracts_dir / f"{element.name}.d.ts",
            render_element_contract(element),
        )

    return output
