from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def get_engine(database_url: str = None) -> Engine:
    """Create an engine for the local cache database (settings URL by default)."""
    if database_url is None:
        from medassist.config.system_settings import system_settings
        database_url = system_settings.DATABASE_URL

    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    return create_engine(database_url)
