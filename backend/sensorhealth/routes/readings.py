"""Reading ingestion route."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sensorhealth.config import INGEST_TIMEOUT
from sensorhealth.database import get_db
from sensorhealth.dependencies import get_notifier
from sensorhealth.exceptions import ReadingValidationError, SensorNotFoundError
from sensorhealth.schemas import IngestRequest, IngestResponse, ReadingOut
from sensorhealth.services.cascade import CascadeNotifier
from sensorhealth.services.device_service import get_device_sensor
from sensorhealth.services.pipeline import process_reading

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/readings", tags=["readings"])


@router.post("", response_model=IngestResponse, status_code=201)
async def ingest(
    payload: IngestRequest,
    refresh: bool = Query(True, description="Recompute sensor health after storing"),
    session: AsyncSession = Depends(get_db),
    notifier: CascadeNotifier = Depends(get_notifier),
) -> IngestResponse:
    """Validate, classify and store one reading, then refresh the sensor's health."""
    try:
        sensor = await get_device_sensor(session, payload.sensor_instance_id)
    except SensorNotFoundError:
        raise HTTPException(status_code=404, detail="Sensor not found")

    try:
        outcome = await process_reading(
            session,
            sensor,
            payload.value,
            payload.timestamp,
            notifier,
            refresh=refresh,
            timeout=INGEST_TIMEOUT,
        )
    except ReadingValidationError as e:
        raise HTTPException(status_code=422, detail={"kind": e.kind.value, "message": e.message})
    except TimeoutError:
        raise HTTPException(status_code=504, detail="Ingest timed out")

    return IngestResponse(
        reading=ReadingOut.model_validate(outcome.reading),
        status=outcome.status,
    )
