"""Evaluation of executable manifests (`tiger.config.ts/.js/.mjs/.cjs`).

Script manifests run arbitrary code, so evaluation is kept behind the
:class:`ScriptConfigAdapter` protocol. The config loader only ever talks to
an adapter; the declarative JSON manifest never goes through here.

The default adapter runs the file in a `node` subprocess and reads the
exported configuration back as JSON on stdout.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Protocol, Sequence, runtime_checkable

from tigerlink.errors import ConfigurationError

logger = logging.getLogger("tigerlink.runtime.script_adapter")

_NO_EXPORT_EXIT_CODE = 3

# Imports the manifest as an ES module and prints its default or `config`
# export. process.argv[1] is the manifest path.
_EVALUATOR = """
const { pathToFileURL } = require("url");
import(pathToFileURL(process.argv[1]).href)
  .then((mod) => {
    const config = mod.default || mod.config;
    if (!config) {
      process.exit(%d);
    }
    process.stdout.write(JSON.stringify(config));
  })
  .catch((err) => {
    process.stderr.write(String((err && err.stack) || err));
    process.exit(1);
  });
""" % _NO_EXPORT_EXIT_CODE


@runtime_checkable
class ScriptConfigAdapter(Protocol):
    """Turns an executable manifest into plain configuration data."""

    def evaluate(self, config_path: Path) -> Dict[str, Any]:
        ...


class NodeScriptAdapter:
    """Evaluate script manifests with Node.js.

    TypeScript manifests rely on Node's built-in type stripping
    (`--experimental-strip-types`, Node 22.6+).
    """

    def __init__(self, node_executable: str = "node", timeout: float = 30.0) -> None:
        self.node_executable = node_executable
        self.timeout = timeout

    def build_command(self, config_path: Path) -> Sequence[str]:
        command = [self.node_executable]
        if config_path.suffix == ".ts":
            command.append("--experimental-strip-types")
        command.extend(["-e", _EVALUATOR, str(config_path)])
        return command

    def evaluate(self, config_path: Path) -> Dict[str, Any]:
        command = self.build_command(config_path)
        logger.debug("Evaluating script manifest: %s", config_path)

        try:
            completed = subprocess.run(
                command,
                cwd=str(config_path.parent),
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Cannot evaluate {config_path.name}: Node.js executable "
                f"'{self.node_executable}' not found. Install Node.js or use "
                "tiger.config.json instead.",
                config_path,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ConfigurationError(
                f"Evaluating {config_path.name} timed out after {self.timeout}s",
                config_path,
            ) from exc

        if completed.returncode == _NO_EXPORT_EXIT_CODE:
            raise ConfigurationError(
                f"Configuration file {config_path.name} must export a default "
                "configuration or named 'config' export",
                config_path,
            )
        if completed.returncode != 0:
            detail = (completed.stderr or "").strip() or f"exit code {completed.returncode}"
            raise ConfigurationError(
                f"Failed to evaluate {config_path.name}: {detail}", config_path
            )

        try:
            data = json.loads(completed.stdout)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Configuration exported by {config_path.name} is not "
                f"JSON-serializable: {exc}",
                config_path,
            ) from exc

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration exported by {config_path.name} must be an object",
                config_path,
            )
        return data


__all__ = ["NodeScriptAdapter", "ScriptConfigAdapter"]
