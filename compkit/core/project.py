# compkit/core/project.py

"""
Target project detection.

Everything the engine needs to know about the target project is captured
once into a ProjectContext at the start of an invocation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Union

from compkit.core.config import ProjectConfig
from compkit.core.console import Console, ConsoleAware
from compkit.core.constants import DEFAULT_COMPONENTS_DIR, UTILS_BASE_PATH
from compkit.core.models import ProjectContext, ProjectFlavor


def detect_project_flavor(project_root: Path, console: Optional[ConsoleAware] = None) -> ProjectFlavor:
    """Next.js when package.json declares `next`, React otherwise."""
    console = console or ConsoleAware()
    package_json = project_root / "package.json"
    if not package_json.exists():
        console.print("[yellow]No package.json found, assuming React project[/]")
        return ProjectFlavor.REACT

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
        dependencies = {**(data.get("dependencies") or {}), **(data.get("devDependencies") or {})}
    except (OSError, ValueError, AttributeError, TypeError) as e:
        console.print(f"[yellow]Error detecting project type, assuming React project:[/] {e}")
        return ProjectFlavor.REACT

    if "next" in dependencies:
        console.log("[blue]Detected Next.js project[/]")
        return ProjectFlavor.NEXT

    console.log("[blue]Detected React project[/]")
    return ProjectFlavor.REACT


def is_typescript_project(project_root: Path) -> bool:
    """JavaScript-only projects ship a jsconfig.json and no tsconfig.json."""
    if (project_root / "tsconfig.json").exists():
        return True
    return not (project_root / "jsconfig.json").exists()


def detect_project_context(
    project_root: Path,
    flavor_override: Optional[Union[str, ProjectFlavor]] = None,
    components_path: Optional[Union[str, Path]] = None,
    config: Optional[ProjectConfig] = None,
    console: Optional[Console] = None,
    verbose: bool = False,
) -> ProjectContext:
    """
    Build the ProjectContext for a target directory.

    Args:
        project_root: Target project directory
        flavor_override: Explicit project flavor (skips detection)
        components_path: Destination directory relative to the project root
            (overrides the project config `target-dir`)
        config: Project configuration; read from project_root when omitted

    Raises:
        ValueError: Unknown project flavor
    """
    root = Path(project_root).resolve()
    config = config or ProjectConfig(root)
    console_awr = ConsoleAware(console, verbose)

    flavor_value = flavor_override or config.get("project-type")
    if flavor_value:
        flavor = ProjectFlavor(flavor_value)
        console_awr.log(f"[blue]Using specified project type:[/] {flavor.value}")
    else:
        flavor = detect_project_flavor(root, console_awr)

    target_dir = components_path or config.get("target-dir") or DEFAULT_COMPONENTS_DIR
    components_dir = (root / target_dir).resolve()

    utils_path = root / UTILS_BASE_PATH
    has_utils = (
        utils_path.with_suffix(".ts").exists()
        or utils_path.with_suffix(".js").exists()
    )

    return ProjectContext(
        root=root,
        flavor=flavor,
        has_utils=has_utils,
        components_dir=components_dir,
        utils_path=utils_path,
        typescript=is_typescript_project(root),
    )
