import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config as settings
from .api.routes_cv import router as cv_router
from .api.routes_relay import router as relay_router
from .schemas import HealthOut

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="CV ATS Optimizer Backend")

if settings.is_development():
    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/health", response_model=HealthOut)
def health():
    return HealthOut(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


app.include_router(cv_router)
app.include_router(relay_router)


if __name__ == "__main__":
    import uvicorn

    logger.info("Backend API server running on http://%s:%s", settings.HOST, settings.PORT)
    logger.info("CORS enabled for: %s", ", ".join(settings.allowed_origins()))
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
