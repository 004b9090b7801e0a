"""
HTTP API

FastAPI application exposing preview, export and the template catalog to the
editor front end.

Run with:
    uvicorn vitae.contexts.delivery.api:app --port 8000
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from vitae import __version__
from vitae.contexts.delivery.logger import _log_info, _log_warning, setup_api_logger
from vitae.contexts.rendering.capture_export import CaptureExporter
from vitae.contexts.rendering.exceptions import ExportError
from vitae.contexts.rendering.exporter import Exporter, parse_strategy
from vitae.contexts.rendering.results import ExportStrategy
from vitae.contexts.rendering.server_export import ServerExporter
from vitae.contexts.templating.exceptions import TemplateRenderError
from vitae.contexts.templating.html_generator import ResumeHTMLGenerator
from vitae.contexts.templating.registries import TemplateRegistry, get_default_registry
from vitae.contexts.templating.resume_data_structure import ResumeData
from vitae.utils.timestamp import now

load_dotenv()

LOGS_PATH = os.getenv("VITAE_LOGS_PATH")

app = FastAPI(title="VITAE Resume Export API", version=__version__)


class ResumeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_data: Dict[str, Any] = Field(alias="resumeData")
    template_id: Optional[str] = Field(default=None, alias="templateId")
    title: Optional[str] = None
    style: Optional[Dict[str, Any]] = None


class ExportRequest(ResumeRequest):
    strategy: Optional[str] = None


class TemplateSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str
    category: str
    accent_color: str = Field(alias="accentColor")
    features: List[str]
    suitable_for: List[str] = Field(alias="suitableFor")
    preview: str
    layout_kind: str = Field(alias="layoutKind")
    recommended: bool


# Dependencies, overridden in tests


def get_registry() -> TemplateRegistry:
    return get_default_registry()


def get_generator(registry: TemplateRegistry = Depends(get_registry)) -> ResumeHTMLGenerator:
    return ResumeHTMLGenerator(registry)


@lru_cache(maxsize=None)
def _capture_exporter_for(registry: TemplateRegistry) -> CaptureExporter:
    return CaptureExporter(generator=ResumeHTMLGenerator(registry))


def get_capture_exporter(registry: TemplateRegistry = Depends(get_registry)) -> CaptureExporter:
    # One per registry so its busy guard covers every request
    return _capture_exporter_for(registry)


def get_exporters(
    generator: ResumeHTMLGenerator = Depends(get_generator),
    capture_exporter: CaptureExporter = Depends(get_capture_exporter),
) -> Dict[ExportStrategy, Exporter]:
    return {
        ExportStrategy.SERVER: ServerExporter(generator=generator),
        ExportStrategy.CAPTURE: capture_exporter,
    }


@app.on_event("startup")
def configure_logging() -> None:
    log_dir = Path(LOGS_PATH) / f"api_{now()}" if LOGS_PATH else None
    setup_api_logger(log_dir)
    _log_info(f"VITAE API {__version__} started")


@app.exception_handler(ExportError)
def export_error_handler(request: Request, exc: ExportError) -> JSONResponse:
    _log_warning(f"{request.url.path} failed: [{exc.category.value}] {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok", "version": __version__}


@app.get("/api/templates", response_model=List[TemplateSummary], response_model_by_alias=True)
def list_templates(registry: TemplateRegistry = Depends(get_registry)):
    return [config.to_dict() for config in registry.list_configs()]


@app.post("/api/resumes/preview", response_class=HTMLResponse)
def preview_resume(
    payload: ResumeRequest, generator: ResumeHTMLGenerator = Depends(get_generator)
) -> HTMLResponse:
    resume = ResumeData.from_dict(payload.resume_data)
    try:
        html = generator.generate_document(
            resume, payload.template_id, payload.style, title=payload.title or ""
        )
    except TemplateRenderError as e:
        raise HTTPException(status_code=422, detail=e.message) from e
    return HTMLResponse(content=html)


@app.post("/api/resumes/export")
def export_pdf(
    payload: ExportRequest, exporters: Dict[ExportStrategy, Exporter] = Depends(get_exporters)
) -> Response:
    try:
        strategy = parse_strategy(payload.strategy)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    resume = ResumeData.from_dict(payload.resume_data)
    _log_info(f"Export requested: template={payload.template_id!r} strategy={strategy.value}")
    result = exporters[strategy].export(
        resume, template_id=payload.template_id, style=payload.style, title=payload.title
    )

    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "X-Page-Count": str(result.page_count or 0),
        },
    )
