"""
Bible Quiz Server

Backend FastAPI para quizzes bíblicos de dez perguntas:
- Perguntas de completar lacuna geradas pelo Claude
- Sessões de quiz persistidas no AgentFS
- Autenticação via bearer JWT
- Respostas de erro estruturadas
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app_state
from config import get_settings
from core.exceptions import AppError, ValidationError
from core.logger import get_logger, setup_logging
from quiz.router import router as quiz_router

logger = get_logger("server")


# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Gerencia o ciclo de vida da app."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info(f"Iniciando Bible Quiz ({settings.environment})...")
    yield
    await app_state.cleanup()


app = FastAPI(
    title="Bible Quiz",
    description="Bible quiz backend powered by Claude",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLERS
# =============================================================================


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Renderiza erros de domínio como `{status, message}` com o status HTTP correspondente."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Campos ausentes ou malformados na requisição -> 400 ValidationError."""
    fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in exc.errors()]
    error = ValidationError(
        "Invalid or missing request fields",
        details={"fields": [f for f in fields if f]},
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Erros inesperados -> 500 `{status: error, message}` (detalhes ficam só no log)."""
    logger.exception(f"{request.method} {request.url.path} -> erro não tratado {type(exc).__name__}: {exc}")
    error = AppError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/api/health")
async def health():
    """Health check."""
    return {"status": "ok", "message": "Server is running"}


app.include_router(quiz_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
