# ==============================================================
# CONSTANTS
# ==============================================================
from pathlib import Path


BUNDLED_REGISTRY_DIR = Path(__file__).resolve().parent.parent / "component-registry"
REGISTRY_INDEX_JSON = Path("registry/index.json")
REGISTRY_INDEX_YAML = Path("registry/index.yaml")

DEFAULT_COMPONENTS_DIR = Path("components/instant-branding")
UTILS_BASE_PATH = Path("src/lib/utils")
UTILITY_FILE_MARKERS = ("utils.ts", "utils.js")
UTILITY_PACKAGES = ("clsx", "tailwind-merge")
