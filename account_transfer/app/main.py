import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.exceptions import register_exception_handlers
from .api.routes import router as accounts_router, transfer_router
from .core.config import get_settings
from .core.db import init_db, reset_engine

settings = get_settings()
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    fault_account_id = get_settings().fault_injection_account_id
    if fault_account_id is not None:
        logger.warning(
            "fault_injection.enabled",
            extra={"account_id": fault_account_id},
        )
    yield
    reset_engine()

app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.include_router(accounts_router)
app.include_router(transfer_router)
register_exception_handlers(app)

@app.get("/health")
def read_health() -> dict[str, str]:
    return {"status": "ok"}
