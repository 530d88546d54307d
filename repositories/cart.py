import logging

from pydantic import ValidationError
from redis import Redis, RedisError

import config
from exceptions.cart import CartStorageException
from models.cartItem import CartItemDTO, CartSnapshotDTO

logger = logging.getLogger(__name__)


class CartRepository:
    """
    Durable keyed storage for the cart snapshot.

    The whole cart is written as one JSON document under a fixed key on every
    mutation, so a restart always sees the last complete state. The Redis
    client belongs to the embedding storefront and is passed in.
    """

    def __init__(self, redis: Redis, storage_key: str | None = None):
        self.redis = redis
        self.storage_key = storage_key or config.CART_STORAGE_KEY

    def load(self) -> list[CartItemDTO]:
        try:
            raw = self.redis.get(self.storage_key)
        except RedisError as e:
            raise CartStorageException(self.storage_key, str(e)) from e
        if raw is None:
            return []
        try:
            return CartSnapshotDTO.model_validate_json(raw).items
        except ValidationError as e:
            logger.warning(f"[Cart] Discarding unreadable snapshot under '{self.storage_key}': {e}")
            return []

    def save(self, items: list[CartItemDTO]) -> None:
        snapshot = CartSnapshotDTO(items=items)
        try:
            self.redis.set(self.storage_key, snapshot.model_dump_json(exclude_none=True))
        except RedisError as e:
            raise CartStorageException(self.storage_key, str(e)) from e
