"""
Unit Tests: ProductRepository and UserRoleRepository

Tests for repositories/product.py and repositories/userRole.py against the
in-memory database.
"""

from datetime import datetime

import pytest

from enums.app_role import AppRole
from enums.product_category import ProductCategory
from models.product import ProductDTO
from models.userRole import UserRoleDTO
from repositories.product import ProductRepository
from repositories.userRole import UserRoleRepository


class TestProductRepository:

    @pytest.mark.asyncio
    async def test_created_at_defaults_to_now(self, test_session, cupcake):
        product = await ProductRepository.create(cupcake, test_session)

        assert product.created_at is not None
        assert product.in_stock is True

    @pytest.mark.asyncio
    async def test_get_in_stock_filters_and_orders(self, test_session):
        for index, (category, in_stock) in enumerate([
            (ProductCategory.CAKES, True),
            (ProductCategory.BENTO_CAKES, True),
            (ProductCategory.CAKES, False),
            (ProductCategory.CAKES, True),
        ]):
            await ProductRepository.create(ProductDTO(
                id=f"product-{index}", name=f"Товар {index}", price=100.0, category=category,
                in_stock=in_stock, created_at=datetime(2024, 5, 1 + index)), test_session)

        in_stock = await ProductRepository.get_in_stock(test_session)
        cakes = await ProductRepository.get_in_stock(test_session, ProductCategory.CAKES)

        assert [product.id for product in in_stock] == ["product-3", "product-1", "product-0"]
        assert [product.id for product in cakes] == ["product-3", "product-0"]

    @pytest.mark.asyncio
    async def test_update_and_delete_report_missing_rows(self, test_session, cupcake):
        await ProductRepository.create(cupcake, test_session)

        assert await ProductRepository.update(cupcake.id, {"price": 300.0}, test_session) is True
        assert await ProductRepository.update("missing", {"price": 300.0}, test_session) is False
        assert await ProductRepository.delete(cupcake.id, test_session) is True
        assert await ProductRepository.delete(cupcake.id, test_session) is False


class TestUserRoleRepository:

    @pytest.mark.asyncio
    async def test_has_role(self, test_session):
        await UserRoleRepository.create(UserRoleDTO(user_id="user-1", role=AppRole.ADMIN), test_session)
        await UserRoleRepository.create(UserRoleDTO(user_id="user-2", role=AppRole.USER), test_session)

        assert await UserRoleRepository.has_role("user-1", AppRole.ADMIN, test_session) is True
        assert await UserRoleRepository.has_role("user-2", AppRole.ADMIN, test_session) is False
        assert await UserRoleRepository.has_role("user-3", AppRole.ADMIN, test_session) is False
