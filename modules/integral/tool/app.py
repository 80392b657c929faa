from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Tuple

from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from modules.integral.core.parse import detect_radix, try_parse_integral
from modules.integral.core.radix import DEFAULT_RADIX, effective_radix, to_radix
from modules.integral.core.widths import IntWidth, resolve_width
from workbench.errors import IntegralError, ValidationNormalizeMiddleware
from workbench.settings import default_width, shared_templates_dir, templates_auto_reload

logger = logging.getLogger(__name__)

app = FastAPI(title="Integral Parser & Radix Converter")
app.add_middleware(ValidationNormalizeMiddleware)

BASE_DIR = Path(__file__).parent
ROOT_DIR = BASE_DIR.parents[2]
SHARED_TEMPLATES = shared_templates_dir(ROOT_DIR)

templates = Jinja2Templates(
    directory=[str(BASE_DIR / "templates"), str(SHARED_TEMPLATES)]
)
templates.env.auto_reload = templates_auto_reload()


@app.exception_handler(IntegralError)
def integral_error_handler(request: Request, exc: IntegralError):
    return JSONResponse(exc.payload(), status_code=exc.status_code)


def _width_from(value: str | None) -> IntWidth:
    if value is None or not value.strip():
        return default_width()
    width, error = resolve_width(value)
    if error or width is None:
        raise IntegralError(error or "Invalid width.")
    return width


def _int_field(value: str | None, *, label: str) -> Tuple[int | None, str | None]:
    if value is None:
        return None, f"{label} is required."
    raw = value.strip().replace("_", "")
    if not raw:
        return None, f"{label} is required."
    try:
        return int(raw, 10), None
    except ValueError:
        return None, f"{label} must be a whole number."


def _renderings(value: int, width: IntWidth) -> Dict[str, str]:
    return {
        "decimal": to_radix(value, 10, width),
        "hex": to_radix(value, 16, width),
        "octal": to_radix(value, 8, width),
        "binary": to_radix(value, 2, width),
    }


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    base_path = request.url.path.rstrip("/")
    return templates.TemplateResponse(
        request,
        "index.html",
        {"base_path": base_path, "default_width": default_width().name},
    )


@app.post("/parse")
def parse(
    text: str | None = Form(None),
    width: str | None = Form(None),
):
    if text is None:
        raise IntegralError("Text is required.")
    kind = _width_from(width)

    value, error = try_parse_integral(text, kind)
    if error:
        logger.info("Parse of %r fell back to zero: %s", text, error)
    number = value if value is not None else 0

    return {
        "input": text,
        "width": kind.name,
        "radix": detect_radix(text),
        "parsed": error is None,
        "error": error,
        "value": number,
        **_renderings(number, kind),
    }


@app.post("/format")
def format_value(
    value: str | None = Form(None),
    radix: int = Form(DEFAULT_RADIX),
    width: str | None = Form(None),
):
    kind = _width_from(width)

    number, error = _int_field(value, label="Value")
    if error or number is None:
        raise IntegralError(error or "Invalid value.")
    if not kind.contains(number):
        raise IntegralError(
            f"Value must be between {kind.min_value} and {kind.max_value} for {kind.name}."
        )

    return {
        "value": number,
        "radix": radix,
        "effective_radix": effective_radix(radix),
        "width": kind.name,
        "converted": to_radix(number, radix, kind),
    }
