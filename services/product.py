import logging
import uuid

from pydantic import BaseModel, Field, ValidationError, field_validator
from sqlalchemy.exc import SQLAlchemyError

from db import get_db_session
from enums.bot_entity import BotEntity
from enums.notification_type import NotificationType
from enums.product_category import ProductCategory
from exceptions import ProductNotFoundException, ProductStoreException, ProductValidationException
from models.product import ProductDTO
from repositories.product import ProductRepository
from services.notification import NotificationService
from utils.localizator import Localizator
from utils.permission_utils import require_admin

logger = logging.getLogger(__name__)

# Form field -> message shown next to that field
FIELD_ERROR_KEYS = {
    "name": "product_name_required",
    "price": "product_price_invalid",
    "category": "product_category_invalid",
}


class ProductFormDTO(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    price: float = Field(ge=0)
    image: str | None = None
    category: ProductCategory = ProductCategory.CAKES
    weight: str | None = None
    in_stock: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValueError("product name is required")
        return name

    @field_validator("image", "weight")
    @classmethod
    def blank_is_none(cls, value: str | None) -> str | None:
        if value is None or len(value.strip()) == 0:
            return None
        return value.strip()


class ProductService:
    """Storefront catalog and the admin panel product management."""

    @staticmethod
    async def get_catalog(category: ProductCategory | None = None) -> list[ProductDTO]:
        """
        Products shown in the storefront: in stock only, newest first.

        Raises:
            ProductStoreException: The catalog could not be loaded
        """
        try:
            async with get_db_session() as session:
                return await ProductRepository.get_in_stock(session, category)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching catalog: {e}")
            raise ProductStoreException("get_catalog", str(e)) from e

    @staticmethod
    async def get_all_products(admin_user_id: str | None) -> list[ProductDTO]:
        """
        Every product, in stock or not, for the admin product table.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            ProductStoreException: The products could not be loaded
        """
        await require_admin(admin_user_id)
        try:
            async with get_db_session() as session:
                return await ProductRepository.get_all(session)
        except SQLAlchemyError as e:
            logger.error(f"Error fetching products: {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "products_load_failed"), str(e))
            raise ProductStoreException("get_products", str(e)) from e

    @staticmethod
    def validate_form(form_data: dict) -> ProductFormDTO:
        """
        Raises:
            ProductValidationException: errors maps each invalid field to its localized message
        """
        try:
            return ProductFormDTO.model_validate(form_data)
        except ValidationError as e:
            errors = {}
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "form"
                if field in errors:
                    continue
                key = FIELD_ERROR_KEYS.get(field)
                errors[field] = Localizator.get_text(BotEntity.ADMIN, key) if key else error["msg"]
            raise ProductValidationException(errors) from e

    @staticmethod
    async def create_product(form_data: dict, admin_user_id: str | None) -> ProductDTO:
        """
        Add a product to the catalog.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            ProductValidationException: The form is invalid
            ProductStoreException: The catalog rejected the product
        """
        await require_admin(admin_user_id)
        form = ProductService.validate_form(form_data)
        product_dto = ProductDTO(id=str(uuid.uuid4()), **form.model_dump())
        try:
            async with get_db_session() as session:
                product = await ProductRepository.create(product_dto, session)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error creating product '{form.name}': {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "product_save_failed"), str(e))
            raise ProductStoreException("create_product", str(e)) from e

        logger.info(f"[Catalog] Product {product.id} '{product.name}' created by {admin_user_id}")
        NotificationService.admin_notice(NotificationType.SUCCESS,
                                         Localizator.get_text(BotEntity.ADMIN, "product_created"), product.name)
        return product

    @staticmethod
    async def update_product(product_id: str, form_data: dict, admin_user_id: str | None) -> None:
        """
        Replace the editable fields of a product with the submitted form.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            ProductValidationException: The form is invalid
            ProductNotFoundException: No product with this id
            ProductStoreException: The catalog rejected the update
        """
        await require_admin(admin_user_id)
        form = ProductService.validate_form(form_data)
        try:
            async with get_db_session() as session:
                updated = await ProductRepository.update(product_id, form.model_dump(), session)
                if updated:
                    await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error updating product {product_id}: {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "product_save_failed"), str(e))
            raise ProductStoreException("update_product", str(e)) from e

        if not updated:
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "product_save_failed"),
                                             Localizator.get_text(BotEntity.COMMON, "error_product_not_found"))
            raise ProductNotFoundException(product_id)

        logger.info(f"[Catalog] Product {product_id} updated by {admin_user_id}")
        NotificationService.admin_notice(NotificationType.SUCCESS,
                                         Localizator.get_text(BotEntity.ADMIN, "product_updated"), form.name)

    @staticmethod
    async def delete_product(product_id: str, admin_user_id: str | None) -> None:
        """
        Remove a product from the catalog. Placed orders keep their line items.

        Raises:
            AdminAccessDeniedException: Caller is not an admin
            ProductNotFoundException: No product with this id
            ProductStoreException: The catalog rejected the delete
        """
        await require_admin(admin_user_id)
        try:
            async with get_db_session() as session:
                deleted = await ProductRepository.delete(product_id, session)
                if deleted:
                    await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting product {product_id}: {e}")
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "product_delete_failed"), str(e))
            raise ProductStoreException("delete_product", str(e)) from e

        if not deleted:
            NotificationService.admin_notice(NotificationType.ERROR,
                                             Localizator.get_text(BotEntity.ADMIN, "product_delete_failed"),
                                             Localizator.get_text(BotEntity.COMMON, "error_product_not_found"))
            raise ProductNotFoundException(product_id)

        logger.info(f"[Catalog] Product {product_id} deleted by {admin_user_id}")
        NotificationService.admin_notice(NotificationType.SUCCESS,
                                         Localizator.get_text(BotEntity.ADMIN, "product_deleted"))
