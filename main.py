from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from heartwise.config import settings
from heartwise.dependencies import build_controller
from heartwise.errors import SourceUnavailable
from heartwise.routes import dashboard_routes, heart_routes
from heartwise.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    controller = build_controller()
    # The dashboard reads the heart rate once at startup
    try:
        controller.load_heart_rate()
    except SourceUnavailable as e:
        logger.warning(f"Heart rate unavailable at startup, keeping {controller.heart_rate} bpm: {e}")
    app.state.controller = controller
    yield


app = FastAPI(title="HeartWise Watch", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include the heart risk and dashboard routes
app.include_router(heart_routes.router)
app.include_router(dashboard_routes.router)


@app.get("/health")
def health():
    return {"status": "ok", "inference_backend": settings.INFERENCE_BACKEND}
