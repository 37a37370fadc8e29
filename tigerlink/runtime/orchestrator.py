"""Stage sequencing for the two top-level operations.

`run_codegen`   manifest -> interface parse -> view-type annotations -> codegen
`run_autolink`  discovery -> dependency validation -> load order

Configuration, parse and annotation errors abort the run. A generation error
aborts only the entity being generated and is recorded on the report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from tigerlink.codegen.context import CodegenContext
from tigerlink.codegen.elements import DEFAULT_ANDROID_VIEW, generate_element
from tigerlink.codegen.modules import generate_native_module
from tigerlink.codegen.services import generate_service
from tigerlink.codegen.writer import EntityOutput
from tigerlink.config.schema import CodegenSettings, ElementConfig, ExtensionManifest
from tigerlink.errors import DiscoveryError, GenerationError, ViewTypeResolutionError
from tigerlink.graph.models import ExtensionInfo, ResolutionResult
from tigerlink.graph.resolver import DependencyResolver
from tigerlink.parsers.annotations import extract_android_view_type
from tigerlink.parsers.discovery import ExtensionDiscovery
from tigerlink.parsers.interface_parser import (
    InterfaceParser,
    ParsedInterfaces,
    discover_native_modules,
)
from tigerlink.parsers.models import AndroidViewTypeConfig, ElementInfo, InterfaceInfo
from tigerlink.parsers.view_registry import ViewTypeInfo, ViewTypeRegistry
from tigerlink.runtime.config_loader import load_config
from tigerlink.runtime.script_adapter import NodeScriptAdapter, ScriptConfigAdapter

logger = logging.getLogger("tigerlink.runtime.orchestrator")


@dataclass(frozen=True)
class SkippedEntity:
    kind: str
    name: str
    reason: str


@dataclass
class CodegenReport:
    """What one codegen run produced.

    Attributes:
        manifest: The manifest the run was driven by.
        generated: Per-entity output, in generation order.
        skipped: Entities with no matching interface.
        failed: Entities aborted by a generation error.
    """

    manifest: ExtensionManifest
    generated: List[EntityOutput] = field(default_factory=list)
    skipped: List[SkippedEntity] = field(default_factory=list)
    failed: List[SkippedEntity] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass(frozen=True)
class AutolinkReport:
    load_order: Tuple[ExtensionInfo, ...]
    discovery_errors: Tuple[DiscoveryError, ...] = ()
    resolution: Optional[ResolutionResult] = None


def find_module_interface(
    parsed: ParsedInterfaces, name: str, class_name: str
) -> Optional[InterfaceInfo]:
    """Interface for a module: by class name, then name, then `<name>Module`."""
    for candidate in (class_name, name, f"{name}Module"):
        info = parsed.get(candidate)
        if info is not None:
            return info
    return None


def resolve_element_view_type(
    element: ElementConfig,
    interface: Optional[InterfaceInfo],
    registry: ViewTypeRegistry,
) -> Tuple[AndroidViewTypeConfig, Tuple[str, ...]]:
    """Doc-comment directive first, then the manifest, then View.

    Raises:
        AnnotationError: The directive or the manifest value is unusable.
    """
    if interface is not None:
        result = extract_android_view_type(interface.name, interface.doc_comments, registry)
        if result is not None:
            return result.config, result.warnings

    if element.android_view_type:
        validation = registry.validate(element.android_view_type)
        if not validation.is_valid or validation.resolved_type is None:
            raise ViewTypeResolutionError(
                f"Invalid androidViewType for element {element.name}: "
                f"{validation.error_message}",
                element.android_view_type,
            )
        for warning in validation.warnings:
            logger.warning("Element %s: %s", element.name, warning)
        resolved = validation.resolved_type
        config = AndroidViewTypeConfig(
            view_type=resolved.full_name,
            short_name=resolved.short_name,
            package_name=resolved.package,
            is_validated=True,
        )
        return config, validation.warnings

    return DEFAULT_ANDROID_VIEW, ()


def run_codegen(
    project_root: Optional[Path] = None,
    settings: Optional[CodegenSettings] = None,
    *,
    script_adapter: Optional[ScriptConfigAdapter] = None,
    registry: Optional[ViewTypeRegistry] = None,
    parser: Optional[InterfaceParser] = None,
) -> CodegenReport:
    """Generate every module, element and service of one extension.

    Raises:
        ConfigurationError: Manifest missing, unreadable or invalid.
        InterfaceParseError: Interface source missing or unreadable.
        AnnotationError: A view-type directive is malformed or rejected.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    settings = settings or CodegenSettings.default()
    if registry is None:
        registry = ViewTypeRegistry()
        for view_type in settings.custom_view_types:
            registry.register(ViewTypeInfo.from_full_name(view_type))

    adapter = script_adapter or NodeScriptAdapter(
        node_executable=settings.node_executable, timeout=settings.script_timeout
    )
    manifest = load_config(
        root, script_adapter=adapter, allow_scripts=settings.allow_scripts
    ).manifest

    parsed = (parser or InterfaceParser()).parse_file(root / settings.src_file)
    context = CodegenContext.from_manifest(
        manifest,
        root,
        generate_android=settings.generate_android,
        generate_ios=settings.generate_ios,
        generate_web=settings.generate_web,
    )
    report = CodegenReport(manifest=manifest)

    def attempt(kind: str, name: str, build) -> None:
        try:
            report.generated.append(build())
        except GenerationError as exc:
            logger.error("Failed to generate %s %s: %s", kind, name, exc)
            report.failed.append(SkippedEntity(kind, name, str(exc)))

    modules = manifest.native_modules or discover_native_modules(parsed)
    for module in modules:
        interface = find_module_interface(parsed, module.name, module.class_name)
        if interface is None:
            logger.warning("No interface found for module %s, skipping", module.class_name)
            report.skipped.append(
                SkippedEntity("module", module.class_name, "no matching interface")
            )
            continue
        attempt(
            "module",
            module.class_name,
            lambda: generate_native_module(module.class_name, interface.methods, context),
        )

    props_interfaces = {
        info.name: info
        for info in parsed.element_interfaces([e.name for e in manifest.elements])
    }
    for element_config in manifest.elements:
        interface = props_interfaces.get(
            f"{element_config.name}Props"
        ) or props_interfaces.get(element_config.name)
        if interface is None:
            logger.warning(
                "No props interface found for element %s, generating without props",
                element_config.name,
            )
        view, warnings = resolve_element_view_type(element_config, interface, registry)
        element = ElementInfo(
            name=element_config.name,
            tag_name=element_config.resolved_tag_name,
            properties=interface.properties if interface else (),
            android_view_type=view,
            warnings=warnings,
        )
        attempt("element", element.name, lambda: generate_element(element, context))

    service_interfaces = {
        info.name: info for info in parsed.service_interfaces(manifest.services)
    }
    for service_name in manifest.services:
        interface = service_interfaces.get(service_name)
        if interface is None:
            logger.warning(
                "No interface found for service %s, generating an empty template",
                service_name,
            )
        methods = interface.methods if interface else ()
        attempt(
            "service",
            service_name,
            lambda: generate_service(service_name, methods, context),
        )

    logger.info(
        "Codegen finished: %d generated, %d skipped, %d failed",
        len(report.generated),
        len(report.skipped),
        len(report.failed),
    )
    return report


def run_autolink(
    project_root: Optional[Path] = None,
    *,
    strict: bool = True,
    discovery: Optional[ExtensionDiscovery] = None,
    resolver: Optional[DependencyResolver] = None,
) -> AutolinkReport:
    """Discover installed extensions and compute their load order.

    Args:
        project_root: Application root holding node_modules.
        strict: Raise on circular or missing dependencies instead of
            returning a best-effort order.

    Raises:
        DependencyResolutionError: strict and the graph has problems.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    discovered = (discovery or ExtensionDiscovery()).discover(root)
    for error in discovered.errors:
        logger.warning("%s", error)

    resolver = resolver or DependencyResolver()
    if strict:
        resolution = resolver.validate_dependencies(discovered.extensions)
    else:
        resolution = resolver.resolve(discovered.extensions)

    logger.info(
        "Load order: %s",
        " -> ".join(resolution.load_order_names) or "(no extensions)",
    )
    return AutolinkReport(
        load_order=resolution.load_order,
        discovery_errors=discovered.errors,
        resolution=resolution,
    )
