from __future__ import annotations

import logging
import os
from pathlib import Path

from modules.integral.core.widths import IntWidth, resolve_width

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_WIDTH_NAME = "int64"


def _flag(name: str, default: str = "off") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value in {"1", "true", "yes", "on"}


def templates_auto_reload() -> bool:
    return _flag("INTEGRAL_TEMPLATES_RELOAD", "off")


def shared_templates_dir(root_dir: Path) -> Path:
    env_path = os.getenv("INTEGRAL_SHARED_TEMPLATES")
    if env_path:
        return Path(env_path)
    return root_dir / "workbench" / "templates"


def default_width() -> IntWidth:
    raw = os.getenv("INTEGRAL_DEFAULT_WIDTH", DEFAULT_WIDTH_NAME)
    width, error = resolve_width(raw)
    if error or width is None:
        logger.warning("%s Falling back to %s.", error, DEFAULT_WIDTH_NAME)
        width, _ = resolve_width(DEFAULT_WIDTH_NAME)
    return width


def configure_logging(level: str | None = None) -> None:
    raw = (level or os.getenv("INTEGRAL_LOG_LEVEL", "INFO")).strip().upper()
    numeric = logging.getLevelName(raw)
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(format=LOG_FORMAT, level=numeric)
