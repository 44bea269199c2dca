import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from starlette.middleware.sessions import SessionMiddleware

from costume_rental.api.api import api_router
from costume_rental.core.common_deps import DatabaseDep
from costume_rental.core.config import settings
from costume_rental.core.database import async_engine
from costume_rental.core.exception_handlers import EXCEPTION_HANDLERS
from costume_rental.models import Base
from costume_rental.schemas.responses import HealthCheckResponse, ServiceInfoResponse

API_VERSION = "1.0.0"

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Costume Rental API",
    description="Costume and accessory rental storefront with admin dashboard",
    version=API_VERSION,
)

# Register exception handlers
for exception_class, handler in EXCEPTION_HANDLERS.items():
    app.add_exception_handler(exception_class, handler)


@app.on_event("startup")
async def startup():
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE_NAME,
    max_age=settings.SESSION_MAX_AGE,
    same_site="lax",
    https_only=settings.SESSION_HTTPS_ONLY,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/", response_model=ServiceInfoResponse)
def read_root():
    return {"message": "Costume Rental API", "version": API_VERSION}


@app.get("/health", response_model=HealthCheckResponse)
async def health_check(db: DatabaseDep):
    await db.execute(text("SELECT 1"))
    return HealthCheckResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=API_VERSION,
        database="connected",
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
