from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from workbench.errors import ValidationNormalizeMiddleware
from workbench.registry import import_attr, load_modules
from workbench.settings import configure_logging, templates_auto_reload

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def public_modules() -> list[dict[str, Any]]:
    modules = [
        module for module in load_modules().values() if module.get("public", True)
    ]
    modules.sort(key=lambda item: item.get("title") or item.get("name", ""))
    return modules


def build_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Integral Workbench")
    app.add_middleware(ValidationNormalizeMiddleware)

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.auto_reload = templates_auto_reload()

    @app.get("/", response_class=HTMLResponse)
    def workbench_index(request: Request):
        base_path = request.scope.get("root_path", "").rstrip("/")
        return templates.TemplateResponse(
            request,
            "index.html",
            {"modules": public_modules(), "base_path": base_path},
        )

    for meta in load_modules().values():
        entrypoints = meta.get("entrypoints") or {}
        api_entry = entrypoints.get("api")
        if not api_entry:
            continue

        try:
            subapp = import_attr(api_entry)
        except (ImportError, AttributeError, ValueError):
            logger.exception("Cannot load entrypoint %s for %s", api_entry, meta["name"])
            continue

        app.mount(meta["mount"], subapp)
        logger.info("Mounted %s at %s", meta["name"], meta["mount"])

    return app
