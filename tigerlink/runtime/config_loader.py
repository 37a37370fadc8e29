"""Loading of extension manifests and engine settings.

Manifest lookup walks a fixed candidate list and uses the first file that
exists:

* tiger.config.ts / .js / .mjs / .cjs -> evaluated through a
  :class:`~tigerlink.runtime.script_adapter.ScriptConfigAdapter`
* tiger.config.json -> parsed as-is (the canonical declarative format)

Engine settings (`load_codegen_settings`) accept the same kinds of sources as
the rest of the CLI configuration: None, a dict, a TOML/JSON file path or an
inline TOML/JSON string.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from tigerlink.config.schema import CodegenSettings, ExtensionManifest
from tigerlink.errors import ConfigurationError, ManifestValidationError
from tigerlink.runtime.script_adapter import NodeScriptAdapter, ScriptConfigAdapter

logger = logging.getLogger("tigerlink.runtime.config_loader")

# Order of preference.
CONFIG_FILES = (
    "tiger.config.ts",
    "tiger.config.js",
    "tiger.config.mjs",
    "tiger.config.cjs",
    "tiger.config.json",
)
DATA_CONFIG_FILE = "tiger.config.json"

SettingsSource = Union[str, Path, Dict[str, Any], None]


@dataclass(frozen=True)
class ConfigLoadResult:
    """Manifest together with the file it came from."""

    manifest: ExtensionManifest
    config_file: str
    config_path: Path


def find_config_file(project_root: Path) -> Optional[Path]:
    """Return the first existing manifest candidate under project_root."""
    for file_name in CONFIG_FILES:
        candidate = project_root / file_name
        if candidate.is_file():
            return candidate
    return None


def load_config(
    project_root: Optional[Path] = None,
    *,
    script_adapter: Optional[ScriptConfigAdapter] = None,
    allow_scripts: bool = True,
) -> ConfigLoadResult:
    """Locate and load the extension manifest of a project.

    Args:
        project_root: Directory to search; defaults to the working directory.
        script_adapter: Evaluator for script manifests; a
            :class:`NodeScriptAdapter` is used when omitted.
        allow_scripts: When False, script manifests are refused and only
            tiger.config.json is accepted.

    Returns:
        ConfigLoadResult with the validated manifest.

    Raises:
        ConfigurationError: No manifest exists or it cannot be read/evaluated.
        ManifestValidationError: The manifest violates the schema.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    config_path = find_config_file(root)

    if config_path is None:
        expected = "\n".join(f"  - {name}" for name in CONFIG_FILES)
        raise ConfigurationError(
            f"No extension configuration found in {root}. Expected one of:\n"
            f"{expected}\n\nCreate {get_preferred_config_file()} in the extension root.",
            root,
        )

    if config_path.name == DATA_CONFIG_FILE:
        data = _read_json(config_path)
    else:
        if not allow_scripts:
            raise ConfigurationError(
                f"{config_path.name} is an executable configuration and script "
                f"evaluation is disabled. Convert it to {DATA_CONFIG_FILE}.",
                config_path,
            )
        adapter = script_adapter or NodeScriptAdapter()
        logger.info("Evaluating script configuration %s", config_path)
        data = adapter.evaluate(config_path)

    manifest = _to_manifest(data, config_path)
    logger.info("Loaded configuration from %s", config_path.name)
    return ConfigLoadResult(
        manifest=manifest, config_file=config_path.name, config_path=config_path
    )


def load_config_sync(project_root: Optional[Path] = None) -> ConfigLoadResult:
    """Load tiger.config.json only, without considering script manifests.

    Raises:
        ConfigurationError: tiger.config.json is absent or unparsable.
        ManifestValidationError: The manifest violates the schema.
    """
    root = Path(project_root) if project_root is not None else Path.cwd()
    json_path = root / DATA_CONFIG_FILE
    if not json_path.is_file():
        raise ConfigurationError(
            f"{DATA_CONFIG_FILE} not found at {json_path}\n"
            "For TypeScript/JavaScript configs, use load_config().",
            json_path,
        )
    data = _read_json(json_path)
    return ConfigLoadResult(
        manifest=_to_manifest(data, json_path),
        config_file=DATA_CONFIG_FILE,
        config_path=json_path,
    )


def get_preferred_config_file() -> str:
    """Manifest file name written for new projects."""
    return DATA_CONFIG_FILE


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to read {path.name}: {exc}", path) from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            f"Failed to parse {path.name}: {exc}\n"
            "Make sure the file is valid JSON and contains a configuration object.",
            path,
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Failed to parse {path.name}: top-level value must be an object", path
        )
    return data


def _to_manifest(data: Dict[str, Any], path: Path) -> ExtensionManifest:
    try:
        return ExtensionManifest.from_dict(data)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        ]
        details = "\n".join(f"  - {problem}" for problem in problems)
        raise ManifestValidationError(
            f"Invalid configuration in {path.name}:\n{details}", path, problems
        ) from exc


def _parse_settings_text(text: str, fmt: str) -> Dict[str, Any]:
    if fmt == "json":
        return json.loads(text)
    return tomllib.loads(text)


def load_codegen_settings(source: SettingsSource) -> CodegenSettings:
    """Load CodegenSettings from various configuration sources.

    Args:
        source: One of:
            * None: returns CodegenSettings.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        CodegenSettings instance.
    """
    if source is None:
        logger.debug("No settings source provided; using default CodegenSettings")
        return CodegenSettings.default()

    if isinstance(source, dict):
        logger.debug("Loading CodegenSettings from provided dict")
        return CodegenSettings.from_dict(source)

    if isinstance(source, (str, Path)):
        path = Path(source)
        if path.exists():
            text = path.read_text(encoding="utf-8")
            suffix = path.suffix.lower()
            if suffix in {".toml", ".tml"}:
                fmt = "toml"
            elif suffix == ".json":
                fmt = "json"
            else:
                fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading settings from file: %s (fmt=%s)", path, fmt)
        else:
            text = str(source)
            fmt = "json" if text.lstrip().startswith("{") else "toml"
            logger.info("Loading settings from inline %s string", fmt)

        data = _parse_settings_text(text, fmt)
        if not isinstance(data, dict):
            raise ValueError("Top-level settings must be a mapping/dict")
        return CodegenSettings.from_dict(data)

    raise TypeError(f"Unsupported settings source type: {type(source)!r}")


__all__ = [
    "CONFIG_FILES",
    "DATA_CONFIG_FILE",
    "ConfigLoadResult",
    "find_config_file",
    "get_preferred_config_file",
    "load_codegen_settings",
    "load_config",
    "load_config_sync",
]
