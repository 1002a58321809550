from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Config
from app.core.dependencies import memory_store, use_memory_backend
from app.core.logging import get_logger, setup_logging
from app.data.seed import seed_catalog, seed_memory_store
from app.db.database import AsyncSessionLocal, engine, init_db
from app.exceptions import register_exception_handlers
from app.routers.carts import router as carts_router
from app.routers.categories import router as categories_router
from app.routers.products import router as products_router


setup_logging(Config.LOG_LEVEL)
logger = get_logger(__name__)

api_prefix = Config.API_PREFIX
swagger_docs_url = f"{api_prefix}/docs"
openapi_url = f"{api_prefix}/openapi.json"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if use_memory_backend():
        logger.info("Using the in-memory repository backend")
        if Config.SEED_DATABASE:
            seed_memory_store(memory_store)
    else:
        await init_db()
        if Config.SEED_DATABASE:
            async with AsyncSessionLocal() as db:
                await seed_catalog(db)

    yield

    await engine.dispose()


app = FastAPI(
    docs_url=swagger_docs_url,
    redoc_url=None,
    openapi_url=openapi_url,
    title="Shop API",
    description="Product catalog and session scoped shopping cart.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['GET', 'POST', 'PUT', 'DELETE'],
    allow_headers=["*"],
)

# Register endpoints
app.include_router(products_router, prefix=f'{api_prefix}/products', tags=["Products"])
app.include_router(categories_router, prefix=f'{api_prefix}/categories', tags=["Categories"])
app.include_router(carts_router, prefix=f'{api_prefix}/carts', tags=["Carts"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# Register custom exceptions
register_exception_handlers(app)
