import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from backend.app.routes import summary
from backend.app.services.agent_registry import agent_registry
from backend.app.services.exceptions import (
    PipelineError,
    InvalidUploadError,
    ExtractionError,
    EmptyDocumentError,
    SummarizationError,
    TranslationError,
    UnsupportedLanguageError,
    NotFoundError,
    AuthenticationError,
)
from shared.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidUploadError: 400,
    ExtractionError: 400,
    EmptyDocumentError: 400,
    UnsupportedLanguageError: 400,
    AuthenticationError: 401,
    NotFoundError: 404,
    SummarizationError: 502,
    TranslationError: 502,
}

app = FastAPI(title="Policy Summaries")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials="*" not in settings.cors_origins,
)

@app.on_event("startup")
async def _startup():
    # Provider client only; the store is opened per operation
    await agent_registry.init()

@app.on_event("shutdown")
async def _shutdown():
    await agent_registry.close()

@app.exception_handler(PipelineError)
async def _pipeline_error(request: Request, exc: PipelineError):
    status = ERROR_STATUS.get(type(exc), 500)
    if status >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status} {type(exc).__name__}")
    return JSONResponse(
        status_code=status,
        content={"error": {"kind": type(exc).__name__, "message": exc.message, "details": exc.details}},
    )

@app.exception_handler(RequestValidationError)
async def _request_validation_error(request: Request, exc: RequestValidationError):
    # Malformed bodies share the pipeline error contract instead of FastAPI's default 422
    errors = [
        {"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg", ""), "type": e.get("type", "")}
        for e in exc.errors()
    ]
    fields = {e["loc"][1] for e in errors if len(e["loc"]) > 1 and e["loc"][0] == "body"}
    if settings.upload_field_name in fields:
        err = InvalidUploadError("Invalid upload: not_a_file", {"reason": "not_a_file", "errors": errors})
    elif "language" in fields or (request.url.path.startswith("/summary/translate/") and not fields - {"language"}):
        err = UnsupportedLanguageError(
            "Unsupported language: a language name is required",
            {"language": None, "supported": list(settings.supported_languages), "errors": errors},
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> 400 RequestValidationError")
        return JSONResponse(
            status_code=400,
            content={"error": {"kind": "RequestValidationError", "message": "Malformed request", "details": {"errors": errors}}},
        )
    return await _pipeline_error(request, err)

@app.get("/healthz")
async def healthz():
    return {"status": "ok", "env": settings.app_env}

app.include_router(summary.router)
