"""Doc-comment directive parsing.

Supports one directive today:

    /**
     * @androidViewType androidx.appcompat.widget.AppCompatEditText
     */
    export interface ExplorerInputProps { ... }

The directive binds an element to a concrete Android view class. Parsing is
two-step: a syntactic split of the dotted name, then resolution against the
:class:`~tigerlink.parsers.view_registry.ViewTypeRegistry`, whose answer
replaces the syntactic guess.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from tigerlink.errors import MalformedAnnotationError, ViewTypeResolutionError
from tigerlink.parsers.models import AndroidViewTypeConfig
from tigerlink.parsers.view_registry import ViewTypeRegistry

logger = logging.getLogger("tigerlink.parsers.annotations")

ANDROID_VIEW_TYPE_TAG = "@androidViewType"

_DIRECTIVE_RE = re.compile(r"@androidViewType\b\s*(\S*)")
_VIEW_TYPE_FORMAT_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_.]*[a-zA-Z0-9_]$")


@dataclass(frozen=True)
class AnnotationParseResult:
    config: AndroidViewTypeConfig
    warnings: Tuple[str, ...] = ()


def clean_doc_comment(block: str) -> str:
    """Strip `/**`, `*/` and leading `*` gutters from a doc comment block."""
    text = block.strip()
    if text.startswith("/**"):
        text = text[3:]
    elif text.startswith("/*"):
        text = text[2:]
    if text.endswith("*/"):
        text = text[:-2]
    lines = [re.sub(r"^\s*\*?\s?", "", line) for line in text.splitlines()]
    return "\n".join(lines).strip()


def is_valid_view_type_format(view_type: str) -> bool:
    """True for dotted Java class names such as `com.example.Widget`."""
    if "." not in view_type:
        return False
    if not _VIEW_TYPE_FORMAT_RE.match(view_type):
        return False
    return ".." not in view_type and not view_type.endswith(".")


def parse_android_view_type_annotation(
    doc_blocks: Iterable[str],
) -> Optional[AndroidViewTypeConfig]:
    """Syntactic parse of the first `@androidViewType` directive.

    Returns:
        An unvalidated AndroidViewTypeConfig, or None when no block carries
        the directive.

    Raises:
        MalformedAnnotationError: The directive body is not a dotted name.
    """
    for block in doc_blocks:
        match = _DIRECTIVE_RE.search(clean_doc_comment(block))
        if not match:
            continue

        view_type = match.group(1)
        if not is_valid_view_type_format(view_type):
            raise MalformedAnnotationError(
                f"Malformed {ANDROID_VIEW_TYPE_TAG} annotation: '{view_type}'. "
                f"Expected format: {ANDROID_VIEW_TYPE_TAG} full.package.ClassName",
                view_type,
            )

        package_name, _, short_name = view_type.rpartition(".")
        return AndroidViewTypeConfig(
            view_type=view_type,
            short_name=short_name,
            package_name=package_name,
            is_validated=False,
        )

    return None


def extract_android_view_type(
    interface_name: str,
    doc_blocks: Iterable[str],
    registry: Optional[ViewTypeRegistry] = None,
) -> Optional[AnnotationParseResult]:
    """Parse and resolve the view-type directive of one interface.

    Registry warnings are logged and returned; they never fail the parse.

    Returns:
        AnnotationParseResult with a validated config, or None when the
        interface carries no directive.

    Raises:
        MalformedAnnotationError: Directive syntax is invalid.
        ViewTypeResolutionError: The registry rejected the view type.
    """
    try:
        parsed = parse_android_view_type_annotation(doc_blocks)
    except MalformedAnnotationError as exc:
        raise MalformedAnnotationError(
            f"Error parsing doc comment for interface {interface_name}: {exc}",
            exc.annotation,
        ) from exc

    if parsed is None:
        return None

    registry = registry or ViewTypeRegistry()
    validation = registry.validate(parsed.view_type)

    if not validation.is_valid or validation.resolved_type is None:
        raise ViewTypeResolutionError(
            f"Error parsing doc comment for interface {interface_name}: "
            f"{validation.error_message}",
            parsed.view_type,
        )

    for warning in validation.warnings:
        logger.warning(
            "Android view type validation for interface %s: %s",
            interface_name,
            warning,
        )

    resolved = validation.resolved_type
    config = parsed.validated(
        view_type=resolved.full_name,
        short_name=resolved.short_name,
        package_name=resolved.package,
    )
    logger.debug("Interface %s bound to %s", interface_name, config.view_type)
    return AnnotationParseResult(config=config, warnings=validation.warnings)
