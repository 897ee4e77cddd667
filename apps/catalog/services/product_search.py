"""Product listing and showcase grouping."""

from typing import Dict, List, Optional
from uuid import UUID

from django.db.models import Prefetch, QuerySet

from ..models import Category, Product


def list_products(
    *,
    name: Optional[str] = None,
    category_id: Optional[UUID] = None,
    has_parent: Optional[bool] = None,
    is_showcase: Optional[bool] = None
) -> QuerySet:
    """
    Filter active products, cheapest first.

    Args:
        name: Case-insensitive name fragment
        category_id: Restrict to one category
        has_parent: True for plate variants only, False for base products only
        is_showcase: Restrict by showcase flag

    Returns:
        QuerySet of Product
    """
    queryset = (
        Product.objects
        .filter(is_active=True)
        .select_related('category', 'parent_product')
        .prefetch_related('deal_components__product')
    )

    if name:
        queryset = queryset.filter(name__icontains=name)
    if category_id:
        queryset = queryset.filter(category_id=category_id)
    if has_parent is not None:
        queryset = queryset.filter(parent_product__isnull=not has_parent)
    if is_showcase is not None:
        queryset = queryset.filter(is_showcase=is_showcase)

    return queryset.order_by('price', 'name')


def get_showcase_products_by_category() -> List[Dict]:
    """
    Group active showcase products under their active categories.

    Categories without showcase products are left out.

    Returns:
        List of {'category': Category, 'products': [Product, ...]}
    """
    showcase = Product.objects.filter(is_active=True, is_showcase=True).order_by('price', 'name')
    categories = (
        Category.objects
        .filter(is_active=True)
        .prefetch_related(Prefetch('products', queryset=showcase, to_attr='showcase_products'))
        .order_by('name')
    )

    return [
        {'category': category, 'products': category.showcase_products}
        for category in categories
        if category.showcase_products
    ]
