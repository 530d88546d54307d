from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from enums.product_category import ProductCategory
from models.product import Product, ProductDTO


class ProductRepository:
    @staticmethod
    async def create(product_dto: ProductDTO, session: AsyncSession) -> ProductDTO:
        product = Product(**product_dto.model_dump(exclude_none=True))
        session.add(product)
        await session.flush()
        await session.refresh(product)
        return ProductDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_by_id(product_id: str, session: AsyncSession) -> ProductDTO | None:
        stmt = select(Product).where(Product.id == product_id)
        product = await session.execute(stmt)
        product = product.scalar()
        if product is not None:
            return ProductDTO.model_validate(product, from_attributes=True)
        return None

    @staticmethod
    async def get_by_ids(product_ids: list[str], session: AsyncSession) -> list[ProductDTO]:
        if not product_ids:
            return []
        stmt = select(Product).where(Product.id.in_(product_ids))
        products = await session.execute(stmt)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def get_all(session: AsyncSession) -> list[ProductDTO]:
        stmt = select(Product).order_by(Product.created_at.desc())
        products = await session.execute(stmt)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def get_in_stock(session: AsyncSession, category: ProductCategory | None = None) -> list[ProductDTO]:
        stmt = select(Product).where(Product.in_stock == True)
        if category is not None:
            stmt = stmt.where(Product.category == category)
        stmt = stmt.order_by(Product.created_at.desc())
        products = await session.execute(stmt)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def update(product_id: str, values: dict, session: AsyncSession) -> bool:
        """Returns False when no product with this id exists."""
        stmt = update(Product).where(Product.id == product_id).values(**values)
        result = await session.execute(stmt)
        return result.rowcount > 0

    @staticmethod
    async def delete(product_id: str, session: AsyncSession) -> bool:
        """Returns False when no product with this id exists."""
        stmt = delete(Product).where(Product.id == product_id)
        result = await session.execute(stmt)
        return result.rowcount > 0
