import logging
from typing import List
from fastapi import APIRouter

from medassist.api.loader import load_sample_data
from medassist.schemas.records import Article

logger = logging.getLogger(__name__)
router = APIRouter(tags=["articles"])


@router.get("/articles", response_model=List[Article], response_model_by_alias=True)
async def list_articles():
    """Returns the list of health articles."""
    logger.info("GET /articles - Request received")
    articles = [Article.model_validate(item) for item in load_sample_data()["articles"]]
    logger.info(f"Responded with {len(articles)} articles")
    return articles
