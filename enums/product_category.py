from enum import Enum


class ProductCategory(str, Enum):
    """
    Catalog categories.

    Cakes are priced by weight: the listed price corresponds to the
    declared base weight and is rescaled for a custom weight.
    Every other category is sold per piece.
    """

    CAKES = "cakes"
    CUPCAKES = "cupcakes"
    MACARONS = "macarons"
    PHOTO_PRINT = "photo-print"
    BENTO_CAKES = "bento-cakes"


PIECE_PRICED_CATEGORIES: frozenset[ProductCategory] = frozenset({
    ProductCategory.CUPCAKES,
    ProductCategory.MACARONS,
    ProductCategory.PHOTO_PRINT,
    ProductCategory.BENTO_CAKES,
})


def is_piece_priced(category: ProductCategory | str) -> bool:
    """Single source of truth for the piece-priced / weight-priced split."""
    try:
        return ProductCategory(category) in PIECE_PRICED_CATEGORIES
    except ValueError:
        return False
