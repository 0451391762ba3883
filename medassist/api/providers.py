import logging
from typing import List
from fastapi import APIRouter

from medassist.api.loader import load_sample_data
from medassist.schemas.records import Provider

logger = logging.getLogger(__name__)
router = APIRouter(tags=["providers"])


@router.get("/providers", response_model=List[Provider], response_model_by_alias=True)
async def list_providers():
    """Returns the list of doctors/providers."""
    logger.info("GET /providers - Request received")
    providers = [Provider.model_validate(item) for item in load_sample_data()["providers"]]
    logger.info(f"Responded with {len(providers)} providers")
    return providers
