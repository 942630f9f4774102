import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from creator_dashboard.config.settings import settings
from creator_dashboard.routes import analytics, assistant, youtube


def setup_logging():
    """Configure the root logger once for the API process."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger(__name__)


logger = setup_logging()

missing = settings.missing_keys()
if missing:
    logger.warning("Missing configuration: %s", ", ".join(missing))

app = FastAPI(
    title=settings.APP_NAME,
    description="YouTube channel search, statistics and Creative Coach assistant",
    version=settings.APP_VERSION,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins(),
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)

# Routers
app.include_router(youtube.router, prefix="/youtube", tags=["YouTube"])
app.include_router(assistant.router, prefix="/assistant", tags=["Assistant"])
app.include_router(analytics.router, prefix="/analytics", tags=["Analytics"])


@app.get("/")
def root():
    return {"message": "Creator Dashboard API is running!"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
