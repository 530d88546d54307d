from contextlib import asynccontextmanager
from pathlib import Path
import logging

from sqlalchemy import event, Engine, inspect
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession

import config
from models.base import Base

"""
Imports of these models are needed to correctly create tables in the database.
For more information see https://stackoverflow.com/questions/7478403/sqlalchemy-classes-across-files
"""
from models.product import Product
from models.order import Order
from models.orderItem import OrderItem
from models.userRole import UserRole

# SQL echo stays off, SQLAlchemy loggers are silenced in utils/logging_config.py
sql_echo = False

url = config.DB_URL
engine = create_async_engine(url, echo=sql_echo)
session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

if url.startswith("sqlite") and "/data/" in url:
    data_folder = Path("data")
    if data_folder.exists() is False:
        data_folder.mkdir()


@asynccontextmanager
async def get_db_session() -> AsyncSession:
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    if "sqlite" not in type(dbapi_connection).__module__.lower():
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _missing_tables(sync_conn) -> list[str]:
    existing = set(inspect(sync_conn).get_table_names())
    return [name for name in Base.metadata.tables if name not in existing]


async def create_db_and_tables():
    async with engine.begin() as conn:
        missing = await conn.run_sync(_missing_tables)
        if missing:
            logging.info(f"[DB] Creating tables: {', '.join(missing)}")
            await conn.run_sync(Base.metadata.create_all)
