# compkit/core/global_config.py

import os
from pathlib import Path
from typing import Optional, Any
import yaml

from compkit.core.constants import BUNDLED_REGISTRY_DIR

REGISTRY_ENV_VAR = "COMPKIT_REGISTRY"


def global_config_path() -> Path:
    return Path.home() / ".compkit" / "config.yaml"


def get_registry_path() -> Path:
    """
    Get the component registry root from:
    1. Environment variable COMPKIT_REGISTRY
    2. Global config ~/.compkit/config.yaml (registry.path)
    3. Registry bundled with the installed package
    """

    # 1. Env var (highest priority)
    if env_registry := os.getenv(REGISTRY_ENV_VAR):
        return Path(env_registry).expanduser()

    # 2. Global config
    config = load_global_config()
    registry = config.get("registry") if config else None
    if isinstance(registry, dict) and registry.get("path"):
        return Path(registry["path"]).expanduser()

    # 3. Default
    return BUNDLED_REGISTRY_DIR


def load_global_config() -> Optional[dict]:
    """Load config from ~/.compkit/config.yaml"""
    config_path = global_config_path()

    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return None
    return data if isinstance(data, dict) else None


def set_global(key: str, value: Any):
    """Set global configuration key in ~/.compkit/config.yaml"""
    config_path = global_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config = load_global_config() or {}
    config[key] = value

    config_path.write_text(yaml.dump(config, default_flow_style=False), encoding="utf-8")


def set_global_registry(path: str):
    set_global("registry", {"path": path})
