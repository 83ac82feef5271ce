import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gw_dashboard.api.groundwater import router as groundwater_router
from gw_dashboard.api.snapshot_store import snapshot_store
from gw_dashboard.utils.logger import setup_logger

setup_logger()
logger = logging.getLogger("gw_dashboard.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle manager: builds the first snapshot on startup.
    """
    logger.info("Starting Groundwater Dashboard API...")
    snapshot_store.get()
    yield
    logger.info("Shutting down Groundwater Dashboard API...")


app = FastAPI(title="Groundwater Dashboard Analytics", version="1.0.0", lifespan=lifespan)

# The dashboard is served from a different origin (Expo web / device)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(groundwater_router)


@app.get("/health")
def health_check():
    return {"status": "active", "service": "Groundwater Dashboard Analytics"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8300)
