"""
Favourites app services layer.
"""

from .exceptions import (
    FavouritesServiceError,
    FavouriteNotFoundError,
    FavouriteProductNotFoundError,
)

from .favourite_management import (
    toggle_favourite,
    list_favourites,
    delete_favourite,
)


__all__ = [
    # Exceptions
    'FavouritesServiceError',
    'FavouriteNotFoundError',
    'FavouriteProductNotFoundError',

    # Favourite Management
    'toggle_favourite',
    'list_favourites',
    'delete_favourite',
]
