import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shopledger.api.v1.api import api_router
from shopledger.core.config import settings
from shopledger.db.mongo import MongoDatabase
from shopledger.repositories.memory_storage import MemoryStorage
from shopledger.repositories.mongo_storage import MongoStorage
from shopledger.services.locks import EntityLocks

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await open_storage(app)
    try:
        yield
    finally:
        await close_storage(app)


app = FastAPI(
    lifespan=lifespan,
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.PROJECT_VERSION,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def open_storage(app: FastAPI):
    """Open the configured store and the per-entity locks for this instance."""
    app.state.locks = EntityLocks()
    app.state.mongodb = None

    if settings.STORAGE_BACKEND == "memory":
        app.state.storage = MemoryStorage()
        logger.warning("Using in-memory storage, data is lost on restart")
        return

    mongodb = MongoDatabase(settings.MONGODB_URL, settings.DATABASE_NAME)
    db = await mongodb.connect()
    app.state.mongodb = mongodb
    app.state.storage = MongoStorage(db, use_transactions=settings.MONGODB_USE_TRANSACTIONS)


async def close_storage(app: FastAPI):
    await app.state.storage.close()
    if app.state.mongodb is not None:
        await app.state.mongodb.close()


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.PROJECT_NAME}"}


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "storage": settings.STORAGE_BACKEND,
        "version": settings.PROJECT_VERSION,
    }


app.include_router(api_router, prefix=settings.API_V1_STR)
