from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.datastructures import UploadFile as FormFile

from .config import Settings, require_hf_token
from .errors import AnalyzerError, InputError, InternalError
from .normalizer import demo_result, normalize
from .report import REPORT_FILENAME, build_report
from .schemas import AnalysisResult, ReportRequest
from .upstream import HuggingFaceClient
from .utils import draw_findings_on_image, load_image

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ("image/jpeg", "image/png")


async def _form_file(request: Request) -> Optional[UploadFile]:
    form = await request.form()
    value = form.get("file")
    if value is None:
        return None
    if not isinstance(value, FormFile):
        raise InputError("Invalid file upload", detail="Field 'file' must be a file, not a text value")
    return value


async def _read_image_upload(request: Request) -> tuple[str, bytes]:
    file = await _form_file(request)
    if file is None:
        raise InputError()
    if file.content_type not in ACCEPTED_CONTENT_TYPES:
        raise InputError(
            "Unsupported file type",
            detail=f"Expected one of {', '.join(ACCEPTED_CONTENT_TYPES)}, got {file.content_type}",
        )
    return file.filename or "", await file.read()


def create_app(
    settings: Settings | None = None,
    client: Any | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    classifier = client or HuggingFaceClient(model_url=settings.model_url, timeout=settings.timeout)

    app = FastAPI(title="Dental X-ray Analyzer API")

    @app.exception_handler(AnalyzerError)
    async def analyzer_error_handler(request: Request, exc: AnalyzerError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request body", "detail": jsonable_encoder(exc.errors())},
        )

    async def analyze_with_fallback(contents: bytes) -> AnalysisResult:
        try:
            payload = await run_in_threadpool(classifier.classify, contents)
        except Exception as exc:
            logger.warning("Classification failed, returning demo result: %s", exc)
            return demo_result()
        return normalize(payload)

    @app.get("/")
    def health_check():
        return {"status": "ok"}

    @app.post("/api/analyze")
    async def proxy_analyze(request: Request):
        try:
            token = require_hf_token()
            file = await _form_file(request)
            if file is None:
                raise InputError()
            contents = await file.read()
            body = await run_in_threadpool(classifier.forward, contents, token)
            # Relayed as-is; only checked to be parseable JSON.
            json.loads(body)
            return Response(content=body, media_type="application/json")
        except AnalyzerError:
            raise
        except Exception as exc:
            logger.exception("Unexpected failure while proxying upload")
            raise InternalError(str(exc)) from exc

    @app.post("/analyze", response_model=AnalysisResult)
    async def analyze_image(request: Request):
        filename, contents = await _read_image_upload(request)
        logger.info("Analyzing %s (%d bytes)", filename, len(contents))
        return await analyze_with_fallback(contents)

    @app.post("/analyze/overlay")
    async def analyze_overlay(request: Request):
        _, contents = await _read_image_upload(request)
        load_image(contents)
        result = await analyze_with_fallback(contents)
        png_bytes = draw_findings_on_image(contents, result.findings)
        return Response(content=png_bytes, media_type="image/png")

    @app.post("/report")
    def export_report(request: ReportRequest):
        text = build_report(request.result, filename=request.filename)
        return PlainTextResponse(
            text,
            headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
        )

    return app


app = create_app()
