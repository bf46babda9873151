from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sensorhub.api import auth, devices, profiles, readings
from sensorhub.core.config import settings
from sensorhub.core.errors import SensorHubError
from sensorhub.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title="sensorhub")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(profiles.router)
app.include_router(devices.router)
app.include_router(readings.router)


@app.exception_handler(SensorHubError)
def tratar_erro_dominio(request: Request, exc: SensorHubError):
    # 409 constraint / 403 acesso negado / 422 enum inválido / 404
    logger.info("erro_dominio", path=request.url.path, erro=type(exc).__name__, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.on_event("startup")
def on_startup():
    if settings.AUTO_CREATE_TABLES:
        from sensorhub.db.init_db import init_db

        init_db()
        logger.info("tabelas_criadas")
