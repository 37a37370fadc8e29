"""Service generation: `@LynxService` JVM template plus a TypeScript contract."""

from __future__ import annotations

import logging
from typing import Sequence

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.modules import render_interface_contract
from tigerlink.codegen.signatures import (
    java_params,
    java_return,
    kotlin_params,
    kotlin_return_suffix,
)
from tigerlink.codegen.types import is_void
from tigerlink.codegen.writer import EntityOutput
from tigerlink.parsers.models import MethodInfo

logger = logging.getLogger("tigerlink.codegen.services")


def render_kotlin_service(
    service_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    lines = [
        f"package {package_name}",
        "",
        "import com.tigermodule.autolink.LynxService",
        "",
        "/**",
        f" * Implementation of {service_name} service",
        " */",
        "@LynxService",
        f"object {service_name} {{",
    ]
    for method in methods:
        body = (
            "    // TODO: Implement " + method.name
            if is_void(method.return_type)
            else '    TODO("Implement return value")'
        )
        lines += [
            "",
            f"  fun {method.name}({kotlin_params(method.params)})"
            f"{kotlin_return_suffix(method)} {{",
            body,
            "  }",
        ]
    lines += ["", "  fun initialize() {", "  }", "}"]
    return "\n".join(lines)


def render_java_service(
    service_name: str, package_name: str, methods: Sequence[MethodInfo]
) -> str:
    lines = [
        f"package {package_name};",
        "",
        "import com.tigermodule.autolink.LynxService;",
        "",
        "/**",
        f" * Implementation of {service_name} service",
        " */",
        "@LynxService",
        f"public class {service_name} {{",
        f"  private static {service_name} instance;",
        "",
        f"  public static synchronized {service_name} getInstance() {{",
        "    if (instance == null) {",
        f"      instance = new {service_name}();",
        "    }",
        "    return instance;",
        "  }",
    ]
    for method in methods:
        body = (
            "    // TODO: Implement " + method.name
            if is_void(method.return_type)
            else '    throw new UnsupportedOperationException("Not implemented");'
        )
        lines += [
            "",
            f"  public {java_return(method)} {method.name}({java_params(method.params)}) {{",
            body,
            "  }",
        ]
    lines += ["", "  public static void initialize() {", "  }", "}"]
    return "\n".join(lines)


def generate_service(
    service_name: str, methods: Sequence[MethodInfo], context: CodegenContext
) -> EntityOutput:
    logger.info("Generating service %s (%d method(s))", service_name, len(methods))
    output = EntityOutput(kind="service", name=service_name)

    if context.android_enabled:
        package_name = context.android_package_name or ""
        if context.android_language == "java":
            content = render_java_service(service_name, package_name, methods)
        else:
            content = render_kotlin_service(service_name, package_name, methods)
        output.template(context.android_file(service_name), content)

    if context.generate_web:
        output.authoritative(
            context.contracts_dir / f"{service_name}.ts",
            render_interface_contract(
                service_name,
                methods,
                f"Generated Service interface for {service_name}",
            ),
        )

    return output
