"""Services for catalog business logic."""

from .exceptions import (
    CatalogServiceError,
    CategoryNotFoundError,
    ProductNotFoundError,
    DuplicateCategoryError,
    DuplicateProductError,
    CategoryInUseError,
    InvalidProductError,
)
from .category_management import (
    create_category,
    update_category,
    delete_category,
    get_category_by_id,
    list_categories,
)
from .product_management import (
    create_product,
    update_product,
    delete_product,
    get_product_by_id,
)
from .product_search import (
    list_products,
    get_showcase_products_by_category,
)

__all__ = [
    # Exceptions
    'CatalogServiceError',
    'CategoryNotFoundError',
    'ProductNotFoundError',
    'DuplicateCategoryError',
    'DuplicateProductError',
    'CategoryInUseError',
    'InvalidProductError',
    # Categories
    'create_category',
    'update_category',
    'delete_category',
    'get_category_by_id',
    'list_categories',
    # Products
    'create_product',
    'update_product',
    'delete_product',
    'get_product_by_id',
    'list_products',
    'get_showcase_products_by_category',
]
