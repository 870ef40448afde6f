"""FastAPI service for certificate scanning."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from pydantic import BaseModel

from ..config import load_extraction_config, load_ocr_settings
from ..pipeline.scan import scan_certificate_bytes, scan_certificate_text

LOGGER = logging.getLogger("certscan.api")


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


class ParseRequest(BaseModel):
    text: str
    employee_name: Optional[str] = None


def _load_settings(app: FastAPI) -> None:
    config_path = _get_env("CERTSCAN_CONFIG_PATH")
    path = Path(config_path) if config_path else None
    app.state.extraction_config = load_extraction_config(path)
    app.state.ocr_settings = load_ocr_settings(path)
    LOGGER.info("Loaded configuration from %s", config_path or "packaged defaults")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _load_settings(app)
        yield

    app = FastAPI(title="certscan API", lifespan=lifespan)

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok"}

    @app.post("/scan")
    async def scan(file: UploadFile = File(...), employee_name: str | None = None) -> dict:
        payload = await file.read()
        if not payload:
            raise HTTPException(status_code=400, detail="Empty file payload.")

        ocr = app.state.ocr_settings
        result = scan_certificate_bytes(
            payload,
            fallback_name=employee_name,
            lang=_get_env("CERTSCAN_OCR_LANG") or ocr.lang,
            dpi=ocr.dpi,
            psm=ocr.psm,
            binarize=ocr.binarize,
            config=app.state.extraction_config,
            regex_rules_path=_get_env("CERTSCAN_REGEX_RULES_PATH"),
            regex_debug=_env_bool("CERTSCAN_REGEX_DEBUG", default=False),
        )
        if result.ocr_error:
            LOGGER.warning("Scan of %s needs manual entry: %s", file.filename, result.ocr_error)
        return result.to_dict()

    @app.post("/parse")
    async def parse(request: ParseRequest) -> dict:
        result = scan_certificate_text(
            request.text,
            fallback_name=request.employee_name,
            config=app.state.extraction_config,
            regex_rules_path=_get_env("CERTSCAN_REGEX_RULES_PATH"),
            regex_debug=_env_bool("CERTSCAN_REGEX_DEBUG", default=False),
        )
        return result.to_dict()

    return app


app = create_app()
