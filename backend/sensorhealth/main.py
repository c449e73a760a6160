import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sensorhealth.config import CORS_ORIGINS
from sensorhealth.dependencies import get_notifier, get_throttled_broadcaster
from sensorhealth.logging_config import setup_logging
from sensorhealth.routes.devices import router as devices_router
from sensorhealth.routes.readings import router as readings_router
from sensorhealth.routes.sensor_types import router as sensor_types_router
from sensorhealth.routes.sensors import router as sensors_router

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Sensor Health Service", version="0.1.0")
logger.info("FastAPI app created")

app.include_router(sensor_types_router)
app.include_router(readings_router)
app.include_router(sensors_router)
app.include_router(devices_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("Sensor Health Service starting up")
    logger.info("API docs available at http://localhost:8000/docs")


@app.on_event("shutdown")
async def shutdown_event():
    # Let in-flight notifications finish so the last status changes reach dashboards
    await get_notifier().drain()
    await get_throttled_broadcaster().flush()
    logger.info("Sensor Health Service shut down")


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
