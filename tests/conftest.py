# tests/conftest.py

import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest


class MockConsole:
    """
    A mock console that captures all output for testing purposes.
    Simulates the rich.Console interface used by ConsoleAware.
    """
    def __init__(self):
        self.logs = []
        self.prints = []

    def log(self, *objects, **kwargs):
        self.logs.append(" ".join(map(str, objects)))

    def print(self, *objects, **kwargs):
        self.prints.append(" ".join(map(str, objects)))

    @property
    def output(self) -> str:
        return "\n".join(self.prints + self.logs)


class ScriptedResponder:
    """Answers prompts from a fixed script and records what was asked."""
    def __init__(self, answers: Optional[List[bool]] = None, default: bool = False):
        self.answers = list(answers or [])
        self.default = default
        self.asked = []

    def __call__(self, item) -> bool:
        self.asked.append(item)
        if self.answers:
            return self.answers.pop(0)
        return self.default


class FakeRunner:
    """Records package-manager invocations instead of running them."""
    def __init__(self, exit_code: int = 0, error: Optional[Exception] = None):
        self.exit_code = exit_code
        self.error = error
        self.calls = []

    def __call__(self, args, cwd) -> int:
        self.calls.append((list(args), Path(cwd)))
        if self.error is not None:
            raise self.error
        return self.exit_code


def write_registry(root: Path, entries: List[dict], sources: Optional[Dict[str, str]] = None) -> Path:
    """Create a registry directory with an index and component source files."""
    (root / "registry").mkdir(parents=True, exist_ok=True)
    (root / "registry" / "index.json").write_text(json.dumps(entries, indent=2), encoding="utf-8")
    for relative_path, content in (sources or {}).items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


BANNER_ENTRIES = [
    {
        "name": "banner",
        "files": ["components/ui/banner.tsx", "components/lib/utils.ts"],
        "dependencies": ["clsx"],
        "registryDependencies": ["types"],
    },
    {
        "name": "types",
        "files": ["components/types/types.ts"],
        "dependencies": [],
    },
    {
        "name": "card",
        "files": ["components/ui/card.tsx"],
        "dependencies": ["clsx", "lucide-react"],
        "registryDependencies": ["types"],
    },
]

BANNER_SOURCES = {
    "components/ui/banner.tsx": "export const Banner = () => null;\n",
    "components/lib/utils.ts": "export const noop = () => {};\n",
    "components/types/types.ts": "export interface Data { heading?: string }\n",
    "components/ui/card.tsx": "export const Card = () => null;\n",
}


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def make_responder():
    return ScriptedResponder


@pytest.fixture
def make_runner():
    return FakeRunner


@pytest.fixture
def make_registry():
    return write_registry


@pytest.fixture
def registry_dir(tmp_path: Path) -> Path:
    return write_registry(tmp_path / "registry-root", BANNER_ENTRIES, BANNER_SOURCES)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    d = tmp_path / "app"
    d.mkdir()
    (d / "package.json").write_text(json.dumps({"name": "app", "dependencies": {"react": "^18.0.0"}}), encoding="utf-8")
    return d
