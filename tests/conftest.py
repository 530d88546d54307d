"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from fakeredis import FakeRedis
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.TOKEN = "123456:ABC-DEF1234ghIkl-zyx57W2v1u123ew11"  # Test bot token
config_mock.ADMIN_CHAT_ID = -1001234567890  # Test admin chat
config_mock.ALLOWED_USER_ID = 123456789  # Test operator
config_mock.NOTIFY_CHAT_ID = -1001234567890
config_mock.BOT_LANGUAGE = "ru"  # For Localizator
config_mock.DB_URL = "sqlite+aiosqlite:///:memory:"  # In-memory test database
config_mock.CART_STORAGE_KEY = "cart-storage"
config_mock.DELIVERY_COST = 300.0
config_mock.WEBHOOK_URL = ""
config_mock.WEBHOOK_PATH = "/webhook"
config_mock.WEBHOOK_SECRET_TOKEN = "test_webhook_secret"
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5

sys.modules['config'] = config_mock

OPERATOR_ID = config_mock.ALLOWED_USER_ID
ADMIN_CHAT_ID = config_mock.ADMIN_CHAT_ID


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite shared by all sessions)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Import and create all tables
    from db import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine, monkeypatch):
    """Point db.get_db_session() at the test database."""
    import db

    maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    monkeypatch.setattr(db, "session_maker", maker)
    return maker


@pytest_asyncio.fixture
async def test_session(test_session_maker):
    """Create test database session."""
    async with test_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Cart Storage Fixtures
# ============================================================================

@pytest.fixture
def redis_client():
    """Create fake Redis client for testing (no real Redis server needed)."""
    client = FakeRedis()
    yield client
    client.flushall()


@pytest.fixture
def cart_repository(redis_client):
    from repositories.cart import CartRepository
    return CartRepository(redis_client, storage_key="cart-storage")


@pytest.fixture
def notices():
    """Collects cart confirmation texts."""
    return []


@pytest.fixture
def cart(cart_repository, notices):
    from services.cart import CartService
    return CartService(cart_repository, on_notice=notices.append)


# ============================================================================
# Catalog Fixtures
# ============================================================================

@pytest.fixture
def small_cake():
    """Weight-priced cake declared lighter than the minimum sellable weight."""
    from models.product import ProductDTO
    from enums.product_category import ProductCategory
    return ProductDTO(id="cake-napoleon", name="Наполеон", description="Слоёный торт",
                      price=3000.0, category=ProductCategory.CAKES, weight="1.5 кг")


@pytest.fixture
def big_cake():
    from models.product import ProductDTO
    from enums.product_category import ProductCategory
    return ProductDTO(id="cake-medovik", name="Медовик", description="Медовый торт",
                      price=6000.0, category=ProductCategory.CAKES, weight="3 кг")


@pytest.fixture
def cupcake():
    """Piece-priced product that still declares a weight label."""
    from models.product import ProductDTO
    from enums.product_category import ProductCategory
    return ProductDTO(id="cupcake-vanilla", name="Ванильный капкейк", description="",
                      price=250.0, category=ProductCategory.CUPCAKES, weight="0.1 кг")


# ============================================================================
# Admin Fixtures
# ============================================================================

ADMIN_USER_ID = "a1b2c3d4-0000-0000-0000-0000000000ad"


@pytest_asyncio.fixture
async def admin_user(test_session):
    """Storefront account holding the admin role; returns its user id."""
    from enums.app_role import AppRole
    from models.userRole import UserRoleDTO
    from repositories.userRole import UserRoleRepository

    await UserRoleRepository.create(UserRoleDTO(user_id=ADMIN_USER_ID, role=AppRole.ADMIN), test_session)
    await test_session.commit()
    return ADMIN_USER_ID
