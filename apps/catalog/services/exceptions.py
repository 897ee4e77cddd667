"""Domain-specific exceptions for catalog services."""


class CatalogServiceError(Exception):
    """Base exception for catalog services."""
    pass


class CategoryNotFoundError(CatalogServiceError):
    """Raised when a category does not exist."""
    pass


class ProductNotFoundError(CatalogServiceError):
    """Raised when a product does not exist."""
    pass


class DuplicateCategoryError(CatalogServiceError):
    """Raised when a category name is already taken."""
    pass


class DuplicateProductError(CatalogServiceError):
    """Raised when a product name is already taken."""
    pass


class CategoryInUseError(CatalogServiceError):
    """Raised when deleting a category that still has active products."""
    pass


class InvalidProductError(CatalogServiceError):
    """Raised when plate variant or deal composition rules are violated."""
    pass
