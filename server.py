"""FastAPI backend for ContractGuard.

Wraps the contractguard/ package as REST API endpoints.
Serves the built frontend in production.
"""

import logging
from datetime import datetime
from pathlib import Path

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from contractguard.config import CORS_ORIGINS, LLM_MODEL, MIN_CONTRACT_LENGTH, get_api_key
from contractguard.errors import (
    ConfigurationError,
    ContractGuardError,
    EmptyResponseError,
    InsufficientTextError,
    MalformedResponseError,
    ReadError,
    UnsupportedFormatError,
    UpstreamError,
)
from contractguard.models import UploadedDocument
from contractguard.output import export_filename, generate_analysis_report, generate_revised_contract
from contractguard.parsing import normalize_payload
from contractguard.pipeline import run_pipeline
from contractguard.plans import PLANS

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent

app = FastAPI(title="ContractGuard API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Most specific first: PdfNotSupportedError is an UnsupportedFormatError
_ERROR_STATUS = [
    (UnsupportedFormatError, 422),
    (InsufficientTextError, 422),
    (ReadError, 400),
    (ConfigurationError, 503),
    (EmptyResponseError, 502),
    (UpstreamError, 502),
    (MalformedResponseError, 502),
]


def error_status(exc: ContractGuardError) -> int:
    for cls, status in _ERROR_STATUS:
        if isinstance(exc, cls):
            return status
    return 500


@app.exception_handler(ContractGuardError)
async def contractguard_error_handler(request: Request, exc: ContractGuardError):
    status = error_status(exc)
    logger.warning("%s %s failed (%d): %s", request.method, request.url.path, status, exc)
    return JSONResponse(
        status_code=status,
        content={"detail": str(exc), "error": exc.__class__.__name__},
    )


# ---------------------------------------------------------------------------
# GET /api/config: LLM availability check
# ---------------------------------------------------------------------------
@app.get("/api/config")
def api_config():
    return {
        "llm_available": bool(get_api_key()),
        "llm_model": LLM_MODEL,
        "min_contract_length": MIN_CONTRACT_LENGTH,
    }


# ---------------------------------------------------------------------------
# GET /api/plans: Pricing catalog
# ---------------------------------------------------------------------------
@app.get("/api/plans")
def api_plans():
    return [p.to_dict() for p in PLANS]


# ---------------------------------------------------------------------------
# POST /api/analyze: Extract + analyze one uploaded contract
# ---------------------------------------------------------------------------
@app.post("/api/analyze")
def api_analyze(file: UploadFile = File(...)):
    document = UploadedDocument(
        content=file.file.read(),
        mime_type=file.content_type or "",
        filename=file.filename or "contract",
        uploaded_at=datetime.now(),
    )
    result = run_pipeline(document)
    return {
        "file_name": document.filename,
        "uploaded_at": document.uploaded_at.isoformat(),
        "result": result.to_dict(),
    }


# ---------------------------------------------------------------------------
# POST /api/export/{report,revised}: Plain-text downloads
# ---------------------------------------------------------------------------
def _load_export_body(body: dict):
    payload = body.get("result")
    if not isinstance(payload, dict):
        raise HTTPException(status_code=422, detail="Request body must include a 'result' object")
    try:
        result = normalize_payload(payload, payload.get("originalText") or "")
    except MalformedResponseError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    file_name = body.get("file_name") or "contract"
    uploaded_at = body.get("uploaded_at")
    try:
        uploaded_at = datetime.fromisoformat(uploaded_at) if uploaded_at else datetime.now()
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail="'uploaded_at' must be an ISO timestamp") from e
    return result, file_name, uploaded_at


def _attachment(text: str, name: str) -> PlainTextResponse:
    return PlainTextResponse(
        text,
        headers={"Content-Disposition": f'attachment; filename="{name}"'},
    )


@app.post("/api/export/report")
def api_export_report(body: dict):
    result, file_name, uploaded_at = _load_export_body(body)
    report = generate_analysis_report(result, file_name, uploaded_at)
    return _attachment(report, export_filename("Analysis", file_name))


@app.post("/api/export/revised")
def api_export_revised(body: dict):
    result, file_name, _ = _load_export_body(body)
    revised = generate_revised_contract(result.original_text, result)
    return _attachment(revised, export_filename("Revised", file_name))


# ---------------------------------------------------------------------------
# Serve frontend static files in production
# ---------------------------------------------------------------------------
_frontend_dist = BASE_DIR / "frontend" / "dist"
if _frontend_dist.exists():
    app.mount("/assets", StaticFiles(directory=str(_frontend_dist / "assets")), name="assets")

    from fastapi.responses import FileResponse

    @app.get("/{full_path:path}")
    async def serve_spa(full_path: str):
        file_path = _frontend_dist / full_path
        if full_path and file_path.exists() and file_path.is_file():
            return FileResponse(str(file_path))
        return FileResponse(str(_frontend_dist / "index.html"))
