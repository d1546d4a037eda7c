"""Exception types raised by the scan gate."""

from __future__ import annotations


class SbomGateError(Exception):
    """Base class for structural failures that abort a phase."""


class ConfigError(SbomGateError):
    """Raised when the target configuration cannot be interpreted."""


class ToolInvocationError(SbomGateError):
    """Raised when the SBOM generator or the scanning service fails for a target."""

    def __init__(self, tool: str, target: str, detail: str) -> None:
        super().__init__(f"{tool} failed for {target}: {detail}")
        self.tool = tool
        self.target = target
        self.detail = detail


class ResultsManifestNotFound(SbomGateError):
    """Raised when the results-paths file written by run-scan is missing."""

    def __init__(self, path: object) -> None:
        super().__init__(f"scan results paths file not found: {path}")
        self.path = path


class ResultsManifestUnreadable(SbomGateError):
    """Raised when the results-paths file exists but cannot be decoded."""

    def __init__(self, path: object, detail: str) -> None:
        super().__init__(f"scan results paths file {path} is unreadable: {detail}")
        self.path = path
