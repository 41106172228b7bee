# compkit/core/exceptions.py

"""
compkit domain-specific exceptions.

Library code raises these exceptions; the command modules catch them and
translate them into console messages and exit codes.
"""

from typing import Iterable, Optional, Sequence

class CompkitError(Exception):
    """Base exception for all compkit errors."""
    pass

# ==============================================================
# REGISTRY / RESOLUTION ERRORS
# ==============================================================

class RegistryError(CompkitError):
    """Base exception for registry and resolution errors."""
    pass

class RegistryUnavailableError(RegistryError):
    """Raised when the registry index cannot be found or parsed."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(
            f"Component registry unavailable: {reason}\n    → {path}"
        )

class UnknownComponentError(RegistryError):
    """Raised when one or more requested components are not in the registry."""
    def __init__(self, names: Iterable[str], available: Optional[Sequence[str]] = None):
        self.names = list(names)
        self.available = list(available) if available is not None else []
        message = f"Unknown components: {', '.join(self.names)}"
        if self.available:
            message += f"\nAvailable components: {', '.join(self.available)}"
        super().__init__(message)

# ==============================================================
# INSTALL ERRORS
# ==============================================================

class InstallError(CompkitError):
    """Base exception for per-file and package-manager install failures."""
    pass

class SourceFileMissingError(InstallError):
    """Recorded when a registry entry references a file absent on disk."""
    def __init__(self, component: str, path: str):
        self.component = component
        self.path = path
        super().__init__(
            f"Source file not found for '{component}':\n    → {path}"
        )

class CopyFailureError(InstallError):
    """Recorded when writing a specific destination file fails."""
    def __init__(self, path: str, details: str):
        self.path = path
        self.details = details
        super().__init__(f"Failed to copy {path}: {details}")

class InstallCommandFailureError(InstallError):
    """Recorded when the package manager could not be run or exited non-zero."""
    def __init__(self, command: str, details: str):
        self.command = command
        self.details = details
        super().__init__(f"Command '{command}' failed: {details}")

# ==============================================================
# PROMPT ERRORS
# ==============================================================

class NonInteractiveEnvironmentError(CompkitError):
    """Raised when a prompt is required but stdin is not a terminal."""
    def __init__(self, hint: str = "Use --yes to skip prompts."):
        self.hint = hint
        super().__init__(
            f"Prompt failed because the environment is not interactive. {hint}"
        )
