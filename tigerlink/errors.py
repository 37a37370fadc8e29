"""Exception hierarchy shared by all tigerlink stages.

Configuration and annotation errors describe deterministic input problems and
fail fast. Dependency errors are aggregated into a single failure. Generation
errors abort the entity being generated; files already written stay in place.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from tigerlink.graph.models import CircularDependency


class AutolinkError(Exception):
    """Base class for every error raised by tigerlink."""

    pass


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigurationError(AutolinkError):
    """Manifest could not be located, read or evaluated."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class ManifestValidationError(ConfigurationError):
    """Manifest was readable but violates the manifest schema."""

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        problems: Sequence[str] = (),
    ) -> None:
        super().__init__(message, path)
        self.problems: Tuple[str, ...] = tuple(problems)


# =============================================================================
# Dependency errors
# =============================================================================


class DependencyResolutionError(AutolinkError):
    """Circular or missing extension dependencies.

    The structured findings are attached so callers can inspect them without
    re-parsing the message.
    """

    def __init__(
        self,
        message: str,
        circular_dependencies: Sequence["CircularDependency"] = (),
        missing_dependencies: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        super().__init__(message)
        self.circular_dependencies: Tuple["CircularDependency", ...] = tuple(
            circular_dependencies
        )
        self.missing_dependencies = {
            name: tuple(missing)
            for name, missing in (missing_dependencies or {}).items()
        }


# =============================================================================
# Parse errors
# =============================================================================


class InterfaceParseError(AutolinkError):
    """Interface-definition source could not be read or parsed."""

    def __init__(self, message: str, source_file: Optional[Path] = None) -> None:
        super().__init__(message)
        self.source_file = source_file


class AnnotationError(AutolinkError):
    """Doc-comment directive is present but unusable."""

    pass


class MalformedAnnotationError(AnnotationError):
    """Directive body does not have the `package.ClassName` shape."""

    def __init__(self, message: str, annotation: str) -> None:
        super().__init__(message)
        self.annotation = annotation


class ViewTypeResolutionError(AnnotationError):
    """View type was rejected by the view-type registry."""

    def __init__(self, message: str, view_type: str) -> None:
        super().__init__(message)
        self.view_type = view_type


# =============================================================================
# Generation errors
# =============================================================================


class GenerationError(AutolinkError):
    """Output for an entity could not be produced."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class UnsupportedTypeError(GenerationError):
    """Source type has no mapping in the target language."""

    def __init__(self, type_text: str, language: Optional[str] = None) -> None:
        target = f" for {language}" if language else ""
        super().__init__(f"Unsupported type{target}: '{type_text}'")
        self.type_text = type_text
        self.language = language


# =============================================================================
# Discovery errors
# =============================================================================


class DiscoveryError(AutolinkError):
    """A package under node_modules could not be turned into an extension.

    Discovery collects these instead of raising them so one broken package
    does not hide the rest of the project.
    """

    def __init__(
        self, package_path: Path, reason: str, detail: Optional[str] = None
    ) -> None:
        message = f"Discovery error in {package_path}: {reason}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.package_path = package_path
        self.reason = reason
        self.detail = detail
