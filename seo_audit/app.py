# app.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .core.errors import AuditError, ValidationError
from .core.orchestrator import AuditOrchestrator, build_orchestrator
from .models.schema import AuditRequest

log = logging.getLogger("seo-audit")


def create_app(
    orchestrator: Optional[AuditOrchestrator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="SEO + AI Audit API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.orchestrator = orchestrator or build_orchestrator(settings)

    @app.exception_handler(AuditError)
    async def audit_error_handler(request: Request, exc: AuditError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def bad_body_handler(request: Request, exc: RequestValidationError):
        log.warning("Rejected malformed request body: %s", exc.errors())
        return JSONResponse(status_code=400, content={"error": ValidationError.message})

    # ---------- health endpoints ----------
    @app.get("/")
    async def read_root():
        return {"message": "SEO + AI backend is running"}

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    # ---------- main audit endpoint ----------
    @app.post("/api/seo-check")
    async def seo_check(request: AuditRequest):
        result = await app.state.orchestrator.perform_audit(request.url)
        return result.model_dump(by_alias=True)

    return app


app = create_app()


def run():
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run("seo_audit.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
