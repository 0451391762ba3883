from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime, timezone
from .db import Base


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class CachedArticle(Base):
    """
    Locally cached article for offline reading.

    Rows are overwritten by id on every successful remote fetch and never
    expire; `last_updated` records when the row was last written.
    """
    __tablename__ = "articles"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=False, default="")
    summary = Column(Text, nullable=False, default="")
    content = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=False, default="")
    date = Column(String, nullable=False, default="", index=True)  # ISO date, sorts lexically
    last_updated = Column(DateTime, default=_utcnow, nullable=False)
