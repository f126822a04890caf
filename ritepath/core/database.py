# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""SQLAlchemy engine factory. The caller owns the engine's lifecycle."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from ritepath.core.config import Settings


def build_engine(config: Settings) -> Engine:
    return create_engine(
        config.DATABASE_URL,
        pool_pre_ping=True,
        pool_size=config.POOL_SIZE,
        max_overflow=config.MAX_OVERFLOW,
        pool_recycle=config.POOL_RECYCLE,
    )
