import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from companies import router as companies_router
from core import db
from core.errors import register_error_handlers
from core.logging import configure_logging
from invoices import router as invoices_router

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "").strip() or DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One store client per process; handlers get it through `db.get_db`.
    database = db.Database(db.database_url())
    await database.connect()
    app.state.db = database
    try:
        yield
    finally:
        await database.close()


configure_logging()

app = FastAPI(title="biztime", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(companies_router.router, tags=["companies"])
app.include_router(invoices_router.router, tags=["invoices"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "biztime api"}
