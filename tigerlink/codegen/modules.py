"""Native module generation.

For a module class `NativeLocalStorageModule` in package `com.example.storage`:

* JVM contract  `android/src/main/kotlin/com/example/storage/generated/NativeLocalStorageModuleSpec.kt`
* JVM template  `android/src/main/kotlin/com/example/storage/NativeLocalStorageModule.kt`
* web contract  `web/src/generated/NativeLocalStorageModuleSpec.ts`
* web template  `web/src/NativeLocalStorageModule.ts`
* root contract `generated/NativeLocalStorageModule.ts`

Contracts are regenerated on every run; templates are written once and then
belong to the developer.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.signatures import (
    bridge_imports,
    java_params,
    java_return,
    kotlin_params,
    kotlin_return_suffix,
    ts_method,
    ts_params,
)
from tigerlink.codegen.types import is_void
from tigerlink.codegen.writer import EntityOutput
from tigerlink.errors import UnsupportedTypeError
from tigerlink.parsers.models import MethodInfo

logger = logging.getLogger("tigerlink.codegen.modules")

EMPTY_INTERFACE_BODY = "  // No methods declared"


def _banner(title: str) -> List[str]:
    return [
        "/**",
        f" * {title}",
        " * DO NOT EDIT - This file is auto-generated",
        " */",
    ]


# =============================================================================
# JVM target
# =============================================================================


def render_kotlin_spec(
    class_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    spec_name = f"{class_name}Spec"
    lines = [
        f"package {package_name}.generated",
        "",
        "import android.content.Context",
        "import com.lynx.jsbridge.LynxMethod",
        "import com.lynx.jsbridge.LynxModule",
        "import com.lynx.react.bridge.Callback",
        "import com.lynx.react.bridge.ReadableArray",
        "import com.lynx.react.bridge.ReadableMap",
        "import com.lynx.tasm.behavior.LynxContext",
        "",
        *_banner(f"Generated base class for {class_name}"),
        f"abstract class {spec_name}(context: Context) : LynxModule(context) {{",
        "  protected fun getContext(): Context {",
        "    val lynxContext = mContext as LynxContext",
        "    return lynxContext.getContext()",
        "  }",
    ]
    for method in methods:
        lines += [
            "",
            "  @LynxMethod",
            f"  abstract fun {method.name}({kotlin_params(method.params)})"
            f"{kotlin_return_suffix(method)}",
        ]
    lines.append("}")
    return "\n".join(lines)


def render_kotlin_impl(
    class_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    spec_name = f"{class_name}Spec"
    signatures = [kotlin_params(m.params) for m in methods]
    lines = [
        f"package {package_name}",
        "",
        "import android.content.Context",
        f"import {package_name}.generated.{spec_name}",
        *bridge_imports(signatures, semicolon=False),
        "import com.tigermodule.processor.LynxNativeModule",
        "",
        "/**",
        f" * Implementation of {class_name}",
        " * Extend the generated base class and implement your logic",
        " */",
        f'@LynxNativeModule(name = "{class_name}")',
        f"class {class_name}(context: Context) : {spec_name}(context) {{",
    ]
    for method, params in zip(methods, signatures):
        body = (
            "    // TODO: Implement your logic here"
            if is_void(method.return_type)
            else '    TODO("Implement return value")'
        )
        lines += [
            "",
            f"  override fun {method.name}({params}){kotlin_return_suffix(method)} {{",
            body,
            "  }",
        ]
    lines.append("}")
    return "\n".join(lines)


def render_java_spec(
    class_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    spec_name = f"{class_name}Spec"
    lines = [
        f"package {package_name}.generated;",
        "",
        "import android.content.Context;",
        "import com.lynx.jsbridge.LynxMethod;",
        "import com.lynx.jsbridge.LynxModule;",
        "import com.lynx.react.bridge.Callback;",
        "import com.lynx.react.bridge.ReadableArray;",
        "import com.lynx.react.bridge.ReadableMap;",
        "import com.lynx.tasm.behavior.LynxContext;",
        "",
        *_banner(f"Generated base class for {class_name}"),
        f"public abstract class {spec_name} extends LynxModule {{",
        f"  public {spec_name}(Context context) {{",
        "    super(context);",
        "  }",
        "",
        "  protected Context getContext() {",
        "    LynxContext lynxContext = (LynxContext) mContext;",
        "    return lynxContext.getContext();",
        "  }",
    ]
    for method in methods:
        lines += [
            "",
            "  @LynxMethod",
            f"  public abstract {java_return(method)} {method.name}"
            f"({java_params(method.params)});",
        ]
    lines.append("}")
    return "\n".join(lines)


def render_java_impl(
    class_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    spec_name = f"{class_name}Spec"
    signatures = [java_params(m.params) for m in methods]
    lines = [
        f"package {package_name};",
        "",
        "import android.content.Context;",
        f"import {package_name}.generated.{spec_name};",
        *bridge_imports(signatures, semicolon=True),
        "import com.tigermodule.processor.LynxNativeModule;",
        "",
        "/**",
        f" * Implementation of {class_name}",
        " * Extend the generated base class and implement your logic",
        " */",
        f'@LynxNativeModule(name = "{class_name}")',
        f"public class {class_name} extends {spec_name} {{",
        f"  public {class_name}(Context context) {{",
        "    super(context);",
        "  }",
    ]
    for method, params in zip(methods, signatures):
        body = (
            "    // TODO: Implement your logic here"
            if is_void(method.return_type)
            else '    throw new UnsupportedOperationException("Not implemented");'
        )
        lines += [
            "",
            "  @Override",
            f"  public {java_return(method)} {method.name}({params}) {{",
            body,
            "  }",
        ]
    lines.append("}")
    return "\n".join(lines)


# =============================================================================
# Browser/runtime target
# =============================================================================


def render_interface_contract(
    entity_name: str, methods: Sequence[MethodInfo], title: str
) -> str:
    """Root `generated/<Entity>.ts` contract."""
    body = [f"  {ts_method(m)};" for m in methods] or [EMPTY_INTERFACE_BODY]
    lines = [
        *_banner(title),
        "",
        f"export interface {entity_name}Interface {{",
        *body,
        "}",
        "",
        f"export {{ {entity_name}Interface as {entity_name} }};",
    ]
    return "\n".join(lines)


def render_web_spec(class_name: str, methods: Sequence[MethodInfo]) -> str:
    spec_name = f"{class_name}Spec"
    lines = [
        *_banner(f"Generated base class for {class_name}"),
        f"export abstract class {spec_name} {{",
    ]
    members = [f"  abstract {ts_method(m)};" for m in methods]
    lines.append("\n\n".join(members) if members else EMPTY_INTERFACE_BODY)
    lines.append("}")
    return "\n".join(lines)


def _returns_void(method: MethodInfo) -> bool:
    """Void check for web stubs, which keep types the JVM target rejects."""
    try:
        return is_void(method.return_type)
    except UnsupportedTypeError:
        return False


def render_web_impl(class_name: str, methods: Sequence[MethodInfo]) -> str:
    spec_name = f"{class_name}Spec"
    lines = [
        f'import {{ {spec_name} }} from "./generated/{spec_name}.js";',
        "",
        f"/** @lynxnativemodule name:{class_name} */",
        f"export class {class_name} extends {spec_name} {{",
    ]
    blocks = []
    for method in methods:
        body = (
            "    // TODO: Implement your web logic here"
            if _returns_void(method)
            else '    throw new Error("Not implemented");'
        )
        blocks.append(
            f"  {method.name}({ts_params(method.params)}): {method.return_type} {{\n"
            f"{body}\n"
            "  }"
        )
    if blocks:
        lines.append("\n\n".join(blocks))
    lines.append("}")
    return "\n".join(lines)


# =============================================================================
# Entry points
# =============================================================================


def _jvm_files(
    class_name: str, methods: Sequence[MethodInfo], context: CodegenContext
) -> Tuple[str, str]:
    package_name = context.android_package_name or ""
    if context.android_language == "java":
        return (
            render_java_spec(class_name, package_name, methods),
            render_java_impl(class_name, package_name, methods),
        )
    return (
        render_kotlin_spec(class_name, package_name, methods),
        render_kotlin_impl(class_name, package_name, methods),
    )


def generate_native_module(
    class_name: str, methods: Sequence[MethodInfo], context: CodegenContext
) -> EntityOutput:
    """Generate every target for one native module.

    All content is rendered before the first write, so an unsupported type
    leaves no partial output for this module.

    Raises:
        UnsupportedTypeError: A parameter or return type has no JVM mapping.
        GenerationError: A file could not be written.
    """
    logger.info("Generating native module %s (%d method(s))", class_name, len(methods))
    output = EntityOutput(kind="module", name=class_name)

    jvm = _jvm_files(class_name, methods, context) if context.android_enabled else None

    if jvm is not None:
        spec, impl = jvm
        output.authoritative(context.android_file(f"{class_name}Spec", generated=True), spec)
        output.template(context.android_file(class_name), impl)

    if context.generate_web:
        output.authoritative(
            context.web_generated_dir / f"{class_name}Spec.ts",
            render_web_spec(class_name, methods),
        )
        output.template(
            context.web_src_dir / f"{class_name}.ts",
            render_web_impl(class_name, methods),
        )
        output.authoritative(
            context.contracts_dir / f"{class_name}.ts",
            render_interface_contract(
                class_name, methods, f"Generated TypeScript bindings for {class_name}"
            ),
        )

    return output


def generate(
    entity_name: str, methods: Sequence[MethodInfo], context: CodegenContext
) -> EntityOutput:
    """Generate a native module; alias used by the orchestrator and CLI."""
    return generate_native_module(entity_name, methods, context)
