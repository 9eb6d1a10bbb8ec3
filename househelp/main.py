from contextlib import asynccontextmanager

from fastapi import FastAPI

from househelp.api.v1 import (
    analytics,
    invoices,
    languages,
    locations,
    matching,
    notifications,
    payments,
    pricing,
    reviews,
)
from househelp.core.config import settings
from househelp.core.logging import configure_logging
from househelp.wiring import dependencies

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await dependencies.shutdown()


app = FastAPI(title="HouseHelp", version="1.0.0", lifespan=lifespan)

app.include_router(pricing.router, prefix="/api/v1", tags=["pricing"])
app.include_router(locations.router, prefix="/api/v1", tags=["locations"])
app.include_router(notifications.router, prefix="/api/v1", tags=["notifications"])
app.include_router(reviews.router, prefix="/api/v1", tags=["reviews"])
app.include_router(payments.router, prefix="/api/v1", tags=["payments"])
app.include_router(languages.router, prefix="/api/v1", tags=["languages"])
app.include_router(invoices.router, prefix="/api/v1", tags=["invoices"])
app.include_router(analytics.router, prefix="/api/v1", tags=["analytics"])
app.include_router(matching.router, prefix="/api/v1", tags=["matching"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
