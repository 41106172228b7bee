# compkit/core/models.py

"""
Core models for compkit.

Registry entries are pydantic models validated when the index is loaded.
Runtime results (resolution, plan, outcomes) are plain dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    ConfigDict,
)

# ==============================================================
# ENUMS
# ==============================================================

class ProjectFlavor(str, Enum):
    """Detected flavor of the target project."""
    NEXT = "next"
    REACT = "react"

class InstallDecision(str, Enum):
    """Per-file decision taken by the installation planner."""
    COPY = "copy"
    SKIP_EXISTING = "skip-existing-no-overwrite"
    SKIP_DECLINED = "skip-user-declined"
    SKIP_SOURCE_MISSING = "skip-source-missing"

class FileStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"

# ==============================================================
# REGISTRY ENTRY
# ==============================================================

def _dedupe(values: List[str]) -> List[str]:
    return list(dict.fromkeys(values))

class RegistryEntry(BaseModel):
    """One installable component of the registry index."""

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Unique component name"
    )

    files: List[str] = Field(
        ...,
        description="Source paths relative to the registry root"
    )

    dependencies: List[str] = Field(
        default_factory=list,
        description="External packages required at runtime"
    )

    registry_dependencies: List[str] = Field(
        default_factory=list,
        alias="registryDependencies",
        description="Other registry components this component requires"
    )

    type: Optional[str] = Field(
        default=None,
        description="Registry item type (e.g. registry:ui)"
    )

    description: Optional[str] = Field(
        default=None,
        description="Short human readable description"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v

    @field_validator("dependencies", "registry_dependencies", mode="before")
    @classmethod
    def validate_name_list(cls, v: Any) -> List[str]:
        """Accept null as empty and drop duplicated names, keeping order."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("must be a list of names")
        for item in v:
            if not isinstance(item, str) or not item.strip():
                raise ValueError(f"invalid name: {item!r}")
        return _dedupe([item.strip() for item in v])

# ==============================================================
# RUNTIME RESULTS
# ==============================================================

@dataclass
class ResolutionResult:
    """Closure of requested components and the union of their external packages."""
    components: List[str] = field(default_factory=list)
    external_packages: List[str] = field(default_factory=list)

@dataclass(frozen=True)
class InstallFlags:
    assume_yes: bool = False
    overwrite: bool = False

@dataclass(frozen=True)
class Conflict:
    """A destination file that already exists and would be overwritten."""
    component: str
    source: Path
    destination: Path

@dataclass
class PlannedFile:
    component: str
    source: Path
    destination: Path
    decision: InstallDecision

@dataclass
class FileOutcome:
    path: Path
    status: FileStatus
    decision: Optional[InstallDecision] = None
    component: Optional[str] = None
    error: Optional[Exception] = None

@dataclass(frozen=True)
class ProjectContext:
    """Facts about the target project, computed once per invocation."""
    root: Path
    flavor: ProjectFlavor
    has_utils: bool
    components_dir: Path
    utils_path: Path
    typescript: bool = True
