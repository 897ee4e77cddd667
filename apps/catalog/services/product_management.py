"""
Product CRUD operations service.

Enforces the catalog rules the stock settlement relies on:
- a plate variant has both a parent product and a plate type
- a parent product is never itself a plate variant
- a deal never lists itself, a plate variant or another deal as a component
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from django.db import transaction

from ..models import Category, Product, DealComponent
from .exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    DuplicateProductError,
    InvalidProductError,
)

logger = logging.getLogger(__name__)


def _check_unique_name(name: str, exclude_id: Optional[UUID] = None) -> None:
    queryset = Product.objects.filter(name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(id=exclude_id)
    if queryset.exists():
        raise DuplicateProductError(f"Product name '{name}' already exists")


def _resolve_category(category_id: UUID) -> Category:
    try:
        return Category.objects.get(id=category_id, is_active=True)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")


def _resolve_parent(
    parent_product_id: Optional[UUID],
    plate_type: str,
    product_id: Optional[UUID] = None
) -> Optional[Product]:
    if bool(parent_product_id) != bool(plate_type):
        raise InvalidProductError(
            "A plate variant needs both a parent product and a plate type"
        )
    if not parent_product_id:
        return None

    if product_id is not None and str(parent_product_id) == str(product_id):
        raise InvalidProductError("A product cannot be its own parent")

    try:
        parent = Product.objects.get(id=parent_product_id, is_active=True)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Parent product with ID {parent_product_id} not found")

    if parent.parent_product_id is not None:
        raise InvalidProductError(f"'{parent.name}' is itself a plate variant")

    if product_id is not None and Product.objects.filter(parent_product_id=product_id).exists():
        raise InvalidProductError("A product with plate variants cannot become a variant")

    return parent


def _replace_deal_components(product: Product, deal_products: List[Dict[str, Any]]) -> None:
    merged: Dict[str, int] = {}
    for entry in deal_products:
        component_id = str(entry['product_id'])
        quantity = int(entry.get('quantity', 1))
        if component_id == str(product.id):
            raise InvalidProductError("A deal cannot contain itself")
        if quantity < 1:
            raise InvalidProductError("Deal component quantity must be at least 1")
        merged[component_id] = merged.get(component_id, 0) + quantity

    components = Product.objects.filter(id__in=list(merged), is_active=True)
    found = {str(component.id): component for component in components}
    missing = [component_id for component_id in merged if component_id not in found]
    if missing:
        raise ProductNotFoundError(f"Deal component(s) not found: {', '.join(missing)}")

    for component in found.values():
        if component.parent_product_id is not None:
            raise InvalidProductError(
                f"'{component.name}' is a plate variant and cannot be a deal component"
            )
        if component.deal_components.exists():
            raise InvalidProductError(f"'{component.name}' is a deal and cannot be nested in another deal")
    if product.included_in_deals.exists():
        raise InvalidProductError(f"'{product.name}' is a component of another deal")

    product.deal_components.all().delete()
    DealComponent.objects.bulk_create([
        DealComponent(deal=product, product=found[component_id], quantity=quantity)
        for component_id, quantity in merged.items()
    ])


@transaction.atomic
def create_product(
    *,
    name: str,
    category_id: UUID,
    price: Decimal,
    sub_category: str = '',
    description: str = '',
    manufacturing_cost: Decimal = Decimal('0.00'),
    unit: str = '',
    image_url: str = '',
    parent_product_id: Optional[UUID] = None,
    plate_type: str = '',
    is_stockable: bool = False,
    stock: int = 0,
    is_showcase: bool = False,
    deal_products: Optional[List[Dict[str, Any]]] = None
) -> Product:
    """
    Create a catalog product.

    Args:
        name: Unique product name
        category_id: Owning category
        price: Unit selling price
        parent_product_id: Base dish when this is a plate variant
        plate_type: 'full' or 'half' for plate variants
        is_stockable: Track availability with the product's own counter
        stock: Initial stock counter
        deal_products: Bundle composition as [{'product_id', 'quantity'}]

    Returns:
        Created Product instance

    Raises:
        DuplicateProductError: If name is taken
        CategoryNotFoundError: If category doesn't exist
        ProductNotFoundError: If parent or a deal component doesn't exist
        InvalidProductError: If plate/deal rules are violated
    """
    name = name.strip()
    _check_unique_name(name)
    category = _resolve_category(category_id)
    parent = _resolve_parent(parent_product_id, plate_type)

    product = Product.objects.create(
        name=name,
        category=category,
        sub_category=sub_category,
        description=description,
        price=price,
        manufacturing_cost=manufacturing_cost,
        unit=unit,
        image_url=image_url,
        parent_product=parent,
        plate_type=plate_type,
        is_stockable=is_stockable,
        stock=stock,
        is_showcase=is_showcase,
    )

    if deal_products:
        _replace_deal_components(product, deal_products)

    logger.info("Product %s created (%s)", product.id, product.name)
    return product


def get_product_by_id(*, product_id: UUID, include_inactive: bool = False) -> Product:
    """
    Get a product with its category, parent and deal components.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    queryset = (
        Product.objects
        .select_related('category', 'parent_product')
        .prefetch_related('deal_components__product')
    )
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    try:
        return queryset.get(id=product_id)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product with ID {product_id} not found")


_SIMPLE_FIELDS = (
    'sub_category',
    'description',
    'price',
    'manufacturing_cost',
    'unit',
    'image_url',
    'is_stockable',
    'stock',
    'is_showcase',
)


@transaction.atomic
def update_product(*, product_id: UUID, **changes) -> Product:
    """
    Update a product with the fields provided.

    Accepts the same keyword arguments as create_product. Plate settings
    are validated as a pair using the stored value for whichever half is
    not being changed.

    Raises:
        ProductNotFoundError: If product doesn't exist
        DuplicateProductError: If new name is taken
        InvalidProductError: If plate/deal rules are violated
    """
    try:
        product = Product.objects.select_for_update().get(id=product_id, is_active=True)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product with ID {product_id} not found")

    update_fields = ['updated_at']

    if changes.get('name') is not None:
        name = changes['name'].strip()
        _check_unique_name(name, exclude_id=product.id)
        product.name = name
        update_fields.append('name')

    if changes.get('category_id') is not None:
        product.category = _resolve_category(changes['category_id'])
        update_fields.append('category')

    if 'parent_product_id' in changes or 'plate_type' in changes:
        parent_id = changes.get('parent_product_id', product.parent_product_id)
        plate_type = changes.get('plate_type', product.plate_type) or ''
        product.parent_product = _resolve_parent(parent_id, plate_type, product_id=product.id)
        product.plate_type = plate_type
        update_fields.extend(['parent_product', 'plate_type'])

    for field in _SIMPLE_FIELDS:
        if changes.get(field) is not None:
            setattr(product, field, changes[field])
            update_fields.append(field)

    product.save(update_fields=update_fields)

    if changes.get('deal_products') is not None:
        _replace_deal_components(product, changes['deal_products'])

    return product


@transaction.atomic
def delete_product(*, product_id: UUID) -> Product:
    """
    Soft-delete a product.

    The product is renamed to "Deleted <name>" so the original name can be
    reused, and is deactivated. Historical orders keep their snapshot.

    Raises:
        ProductNotFoundError: If product doesn't exist
    """
    try:
        product = Product.objects.select_for_update().get(id=product_id, is_active=True)
    except Product.DoesNotExist:
        raise ProductNotFoundError(f"Product with ID {product_id} not found")

    product.name = f"Deleted {product.name}"[:200]
    product.is_active = False
    product.save(update_fields=['name', 'is_active', 'updated_at'])

    logger.info("Product %s deleted", product.id)
    return product
