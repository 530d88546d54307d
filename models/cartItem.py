from pydantic import BaseModel, ConfigDict, Field

from models.product import ProductDTO


class CartItemDTO(ProductDTO):
    """
    A product placed in the cart.

    Cart items live in the cart storage only, they have no table.
    Unknown fields from older snapshots are ignored and a missing
    custom_weight means the declared base weight is used.
    """
    model_config = ConfigDict(extra="ignore")

    quantity: int = Field(default=1, ge=1)
    custom_weight: float | None = None  # kg


class CartSnapshotDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: list[CartItemDTO] = []
