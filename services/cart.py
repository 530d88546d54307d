import logging
from typing import Callable

from enums.bot_entity import BotEntity
from enums.product_category import is_piece_priced
from models.cartItem import CartItemDTO
from models.product import ProductDTO
from repositories.cart import CartRepository
from utils.localizator import Localizator
from utils.weight import MIN_CUSTOM_WEIGHT, WEIGHT_STEP, parse_base_weight, normalize_custom_weight

logger = logging.getLogger(__name__)


def _log_notice(text: str) -> None:
    logger.info(f"[Cart] {text}")


class CartService:
    """
    The shopping cart of one storefront client.

    Items are keyed by product id, at most one item per product. Every
    mutation writes the full snapshot through the CartRepository before
    returning; when the save fails the cart keeps its previous contents.
    The total is computed on demand and never cached.

    Confirmation texts ("item added", "quantity increased", "item removed")
    go to on_notice, which the UI wires to its toast; by default they are logged.
    """

    def __init__(self, repository: CartRepository, on_notice: Callable[[str], None] | None = None):
        self.repository = repository
        self.on_notice = on_notice or _log_notice
        self._items: dict[str, CartItemDTO] = {}
        for item in repository.load():
            self._items[item.id] = item

    @property
    def items(self) -> list[CartItemDTO]:
        return [item.model_copy() for item in self._items.values()]

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def get_item(self, product_id: str) -> CartItemDTO | None:
        item = self._items.get(product_id)
        return item.model_copy() if item is not None else None

    def add_item(self, product: ProductDTO) -> None:
        items = self._working_copy()
        existing_item = items.get(product.id)
        if existing_item is not None:
            existing_item.quantity += 1
            self._commit(items)
            self._notify("cart_quantity_increased")
            return

        new_item = CartItemDTO(**product.model_dump(), quantity=1)
        # Small cakes are baked at the minimum sellable weight; heavier ones keep their own
        if product.weight and not is_piece_priced(product.category):
            base_weight = parse_base_weight(product.weight)
            if base_weight < MIN_CUSTOM_WEIGHT:
                new_item.custom_weight = MIN_CUSTOM_WEIGHT

        items[product.id] = new_item
        self._commit(items)
        self._notify("cart_item_added")

    def remove_item(self, product_id: str) -> None:
        items = self._working_copy()
        items.pop(product_id, None)
        self._commit(items)
        self._notify("cart_item_removed")

    def update_quantity(self, product_id: str, quantity: int) -> None:
        if quantity < 1:
            self.remove_item(product_id)
            return

        items = self._working_copy()
        item = items.get(product_id)
        if item is not None:
            item.quantity = quantity
        self._commit(items)

    def update_weight(self, product_id: str, weight: float) -> None:
        items = self._working_copy()
        item = items.get(product_id)
        if item is not None:
            item.custom_weight = normalize_custom_weight(weight)
        self._commit(items)

    def reset_weight(self, product_id: str) -> None:
        items = self._working_copy()
        item = items.get(product_id)
        if item is not None:
            item.custom_weight = None
        self._commit(items)

    def increase_weight(self, product_id: str) -> None:
        item = self._items.get(product_id)
        current_weight = self.get_current_weight(item) if item is not None else None
        if current_weight is None:
            return
        self.update_weight(product_id, current_weight + WEIGHT_STEP)

    def decrease_weight(self, product_id: str) -> None:
        """
        Step the weight down by WEIGHT_STEP. Going below the declared base
        weight reverts the item to its base weight.
        """
        item = self._items.get(product_id)
        current_weight = self.get_current_weight(item) if item is not None else None
        if current_weight is None:
            return
        new_weight = current_weight - WEIGHT_STEP
        if new_weight < parse_base_weight(item.weight):
            self.reset_weight(product_id)
        elif new_weight >= MIN_CUSTOM_WEIGHT:
            self.update_weight(product_id, new_weight)

    def clear_cart(self) -> None:
        self._commit({})

    def get_total(self) -> float:
        return sum((self.get_item_price(item) for item in self._items.values()), 0.0)

    @staticmethod
    def get_item_price(item: CartItemDTO) -> float:
        if is_piece_priced(item.category):
            return item.price * item.quantity

        if item.custom_weight is not None and item.weight:
            base_weight = parse_base_weight(item.weight)
            if base_weight > 0:
                # Always rescaled from the declared base weight, never from a previous custom weight
                adjusted_price = (item.price / base_weight) * item.custom_weight
                return adjusted_price * item.quantity

        return item.price * item.quantity

    @staticmethod
    def get_price_per_kg(item: CartItemDTO) -> float | None:
        if is_piece_priced(item.category) or not item.weight:
            return None
        base_weight = parse_base_weight(item.weight)
        if base_weight <= 0:
            return None
        return item.price / base_weight

    @staticmethod
    def get_current_weight(item: CartItemDTO) -> float | None:
        if item.custom_weight is not None:
            return item.custom_weight
        if item.weight:
            return parse_base_weight(item.weight)
        return None

    def _working_copy(self) -> dict[str, CartItemDTO]:
        return {product_id: item.model_copy() for product_id, item in self._items.items()}

    def _commit(self, items: dict[str, CartItemDTO]) -> None:
        # The in-memory cart only changes once the snapshot is stored
        self.repository.save(list(items.values()))
        self._items = items

    def _notify(self, localization_key: str) -> None:
        self.on_notice(Localizator.get_text(BotEntity.USER, localization_key))
