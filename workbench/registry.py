from __future__ import annotations

import logging
from importlib import import_module
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

MODULES_PATH = Path(__file__).parent.parent / "modules"
MANIFEST_NAME = "module.yaml"


def _normalize_module(data: Dict[str, Any], *, path: Path) -> Dict[str, Any] | None:
    name = str(data.get("name") or "").strip()
    if not name:
        return None

    slug = data.get("slug") or name.replace("_", "-")
    mount = str(data.get("mount") or f"/{slug}")
    if not mount.startswith("/"):
        mount = "/" + mount
    if mount != "/" and mount.endswith("/"):
        mount = mount.rstrip("/")

    public = data.get("public")
    normalized = {**data}
    normalized.update(
        {
            "name": name,
            "slug": slug,
            "mount": mount,
            "public": True if public is None else bool(public),
            "path": path,
        }
    )
    return normalized


def load_manifest(module_dir: Path) -> Dict[str, Any] | None:
    manifest = module_dir / MANIFEST_NAME
    if not manifest.exists():
        return None
    try:
        data = yaml.safe_load(manifest.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError:
        logger.exception("Invalid manifest %s", manifest)
        return None
    if not isinstance(data, dict):
        logger.warning("Manifest %s is not a mapping; skipped.", manifest)
        return None
    return _normalize_module(data, path=module_dir)


def load_modules(modules_path: Path = MODULES_PATH) -> Dict[str, Dict[str, Any]]:
    modules: Dict[str, Dict[str, Any]] = {}
    if not modules_path.exists():
        return modules

    for module_dir in sorted(modules_path.iterdir()):
        if not module_dir.is_dir():
            continue
        meta = load_manifest(module_dir)
        if meta is None:
            continue
        if meta["name"] in modules:
            logger.warning("Duplicate module name %s in %s", meta["name"], module_dir)
            continue
        modules[meta["name"]] = meta
    return modules


def import_attr(path: str) -> Any:
    if ":" not in path:
        raise ValueError(f"Invalid entrypoint '{path}'. Expected module:attr.")
    module_path, attr = path.split(":", 1)
    module = import_module(module_path)
    return getattr(module, attr)
