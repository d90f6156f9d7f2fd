import ssl
from typing import AsyncGenerator

import structlog
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from focusflow.config import settings

logger = structlog.get_logger()


def get_connect_args():
    """Get connection arguments"""
    connect_args = {
        "timeout": 30,
        "command_timeout": 30,
    }

    if settings.ENVIRONMENT == "prod":
        ssl_context = ssl.create_default_context()
        ssl_context.check_hostname = False
        ssl_context.verify_mode = ssl.CERT_NONE
        connect_args.update(
            {
                "ssl": ssl_context,
                "server_settings": {
                    "application_name": "focusflow",
                    "client_encoding": "utf8",
                },
            }
        )

    return connect_args


engine = create_async_engine(
    settings.DATABASE_URI,
    echo=settings.DB_ECHO_QUERIES,
    poolclass=NullPool,
    connect_args=get_connect_args(),
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except HTTPException as http_exc:
            await session.rollback()
            raise http_exc
        except Exception as e:
            await session.rollback()
            logger.error("Database error", error=str(e))
            raise
