"""Exception types raised by the CDN failover build step.

WHY: The build step has exactly two ways to fail: a configuration that
cannot be used, and a file whose payload kind the transform cannot
handle. Callers (the CLI, a host build script) need to tell these apart
from programming errors and from each other.

HOW: PluginError carries the plugin name so messages read the same way
no matter which layer reports them. UnsupportedInputKind is the per-file
failure delivered to the pipeline's error channel. ConfigError subclasses
ValueError, matching how the rest of the package reports bad input.

RULES:
- str(PluginError) renders "<plugin>: <message>"
- UnsupportedInputKind is fatal for one file only, never for the build
- ConfigError is raised before any file is processed
"""

from __future__ import annotations

from pathlib import Path


class PluginError(Exception):
    """An error raised by the build step while processing files.

    Attributes:
        plugin: Name of the plugin that raised the error.
        message: Human-readable description of the failure.
    """

    def __init__(self, plugin: str, message: str) -> None:
        super().__init__("{}: {}".format(plugin, message))
        self.plugin = plugin
        self.message = message


class UnsupportedInputKind(PluginError):
    """A file arrived with a streamed (not fully buffered) payload."""

    def __init__(self, plugin: str, path: Path | None = None) -> None:
        super().__init__(plugin, "Streaming not supported")
        self.path = path


class ConfigError(ValueError):
    """The options file or options dict cannot be used."""
