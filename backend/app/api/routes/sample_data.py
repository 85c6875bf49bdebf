import logging

from fastapi import APIRouter, Depends

from app.api.responses import failure_response
from app.core.database import Database, get_database
from app.schemas.reference import SampleDataResponse
from app.services.reference_data import ReferenceDataService
from app.services.timing import timed

router = APIRouter()
logger = logging.getLogger(__name__)


def load_sample_data(database: Database) -> dict:
    with database.session() as db:
        return ReferenceDataService(db).sample_data()


@router.get("", response_model=SampleDataResponse)
def get_sample_data(database: Database = Depends(get_database)):
    """Customers, stores, employees and available menu items for building orders."""
    result = timed(load_sample_data, database)
    if not result.succeeded:
        return failure_response(result, logger, "Loading sample data")

    return SampleDataResponse(**result.data)
