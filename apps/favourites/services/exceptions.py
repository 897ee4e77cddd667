"""
Domain-specific exceptions for favourites app.
"""


class FavouritesServiceError(Exception):
    """Base exception for all favourites service errors."""
    pass


class FavouriteNotFoundError(FavouritesServiceError):
    """Raised when a favourite does not exist or belongs to someone else."""
    pass


class FavouriteProductNotFoundError(FavouritesServiceError):
    """Raised when the product to favourite does not exist."""
    pass
