"""
Orders app services layer.

The stock settlement engine: demand aggregation, allocation against
daily stock batches, reversal, and the order lifecycle built on them.
"""

from .exceptions import (
    OrdersServiceError,
    OrderValidationError,
    OrderStateError,
    NotFoundError,
    OrderNotFoundError,
    OrderProductNotFoundError,
    InsufficientPermissionsError,
    NoStockError,
    InsufficientStockError,
)

from .demand import (
    DemandItem,
    PlainDemand,
    PlateDemand,
    PlateGroup,
    aggregate_demand,
    iter_unfulfilled,
)

from .allocation import (
    LOW_STOCK_THRESHOLD,
    AllocationResult,
    LedgerEntry,
    allocate,
)

from .reversal import (
    revert_order_stock,
)

from .order_management import (
    create_order,
    update_order,
    cancel_order,
    mark_order_paid,
    complete_order,
)

from .order_queries import (
    get_order_by_id,
    list_orders,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderValidationError',
    'OrderStateError',
    'NotFoundError',
    'OrderNotFoundError',
    'OrderProductNotFoundError',
    'InsufficientPermissionsError',
    'NoStockError',
    'InsufficientStockError',

    # Demand
    'DemandItem',
    'PlainDemand',
    'PlateDemand',
    'PlateGroup',
    'aggregate_demand',
    'iter_unfulfilled',

    # Allocation
    'LOW_STOCK_THRESHOLD',
    'AllocationResult',
    'LedgerEntry',
    'allocate',

    # Reversal
    'revert_order_stock',

    # Lifecycle
    'create_order',
    'update_order',
    'cancel_order',
    'mark_order_paid',
    'complete_order',

    # Queries
    'get_order_by_id',
    'list_orders',
]
