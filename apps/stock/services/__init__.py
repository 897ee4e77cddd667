"""
Stock app services layer.

Daily regular stock batches, the daily stock locator used by order
settlement, and per-day summaries.
"""

from .exceptions import (
    StockServiceError,
    NoStockError,
    InsufficientStockError,
    RegularStockNotFoundError,
    InvalidStockLineError,
    StockInUseError,
    InsufficientPermissionsError,
)

from .business_day import (
    business_day_bounds,
    business_date_for,
)

from .daily_stock_locator import (
    LINE_LOCK_ORDER,
    find_batches,
    query_batches,
)

from .stock_management import (
    create_regular_stock,
    update_regular_stock,
    delete_regular_stock,
    get_regular_stock_by_id,
    list_regular_stocks,
)

from .daily_summary import (
    get_daily_stock_summary,
)


__all__ = [
    # Exceptions
    'StockServiceError',
    'NoStockError',
    'InsufficientStockError',
    'RegularStockNotFoundError',
    'InvalidStockLineError',
    'StockInUseError',
    'InsufficientPermissionsError',

    # Business day
    'business_day_bounds',
    'business_date_for',

    # Locator
    'LINE_LOCK_ORDER',
    'find_batches',
    'query_batches',

    # Stock management
    'create_regular_stock',
    'update_regular_stock',
    'delete_regular_stock',
    'get_regular_stock_by_id',
    'list_regular_stocks',

    # Summary
    'get_daily_stock_summary',
]
