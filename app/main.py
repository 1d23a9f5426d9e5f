from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth_router import router as auth_router
from app.catalog.models import CATALOG_TABLES
from app.catalog.router import build_catalog_router
from app.config import settings
from app.database import close_database, init_database
from app.exception_handlers import register_exception_handlers
from app.filaments.router import router as filaments_router
from app.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_database()
    yield
    await close_database()


app = FastAPI(
    title="Filament Inventory",
    description="3D printer filament inventory with bulk import, export and batch editing",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(filaments_router, prefix="/api/v1/filaments", tags=["filaments"])
for kind, table in CATALOG_TABLES.items():
    app.include_router(
        build_catalog_router(kind), prefix=f"/api/v1/{table.path}", tags=[table.path]
    )


@app.get("/api/v1/health")
async def health():
    from app.database import check_health

    await check_health()
    return {"status": "healthy"}
