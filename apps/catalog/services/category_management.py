"""Category CRUD operations service."""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction

from ..models import Category
from .exceptions import (
    CategoryNotFoundError,
    DuplicateCategoryError,
    CategoryInUseError,
)

logger = logging.getLogger(__name__)


def _clean_sub_categories(sub_categories: Optional[List[str]]) -> List[str]:
    cleaned = []
    for label in sub_categories or []:
        label = str(label).strip()
        if label and label not in cleaned:
            cleaned.append(label)
    return cleaned


@transaction.atomic
def create_category(
    *,
    name: str,
    sub_categories: Optional[List[str]] = None,
    image_url: str = ''
) -> Category:
    """
    Create a new category.

    Args:
        name: Unique category name
        sub_categories: Optional list of sub-category labels
        image_url: Optional image URL

    Returns:
        Created Category instance

    Raises:
        DuplicateCategoryError: If name is taken
    """
    name = name.strip()
    if Category.objects.filter(name__iexact=name).exists():
        raise DuplicateCategoryError(f"Category '{name}' already exists")

    return Category.objects.create(
        name=name,
        sub_categories=_clean_sub_categories(sub_categories),
        image_url=image_url,
    )


def get_category_by_id(*, category_id: UUID) -> Category:
    try:
        return Category.objects.get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")


def list_categories(*, name: Optional[str] = None, include_inactive: bool = False):
    queryset = Category.objects.all()
    if not include_inactive:
        queryset = queryset.filter(is_active=True)
    if name:
        queryset = queryset.filter(name__icontains=name)
    return queryset.order_by('name')


@transaction.atomic
def update_category(
    *,
    category_id: UUID,
    name: Optional[str] = None,
    sub_categories: Optional[List[str]] = None,
    image_url: Optional[str] = None,
    is_active: Optional[bool] = None
) -> Category:
    """
    Update category fields that were provided.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        DuplicateCategoryError: If the new name is taken
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")

    update_fields = ['updated_at']

    if name is not None:
        name = name.strip()
        if Category.objects.filter(name__iexact=name).exclude(id=category.id).exists():
            raise DuplicateCategoryError(f"Category '{name}' already exists")
        category.name = name
        update_fields.append('name')

    if sub_categories is not None:
        category.sub_categories = _clean_sub_categories(sub_categories)
        update_fields.append('sub_categories')

    if image_url is not None:
        category.image_url = image_url
        update_fields.append('image_url')

    if is_active is not None:
        category.is_active = is_active
        update_fields.append('is_active')

    category.save(update_fields=update_fields)
    return category


@transaction.atomic
def delete_category(*, category_id: UUID) -> None:
    """
    Deactivate a category.

    Refused while any active product still belongs to it.

    Raises:
        CategoryNotFoundError: If category doesn't exist
        CategoryInUseError: If active products reference it
    """
    try:
        category = Category.objects.select_for_update().get(id=category_id)
    except Category.DoesNotExist:
        raise CategoryNotFoundError(f"Category with ID {category_id} not found")

    product_count = category.products.filter(is_active=True).count()
    if product_count:
        raise CategoryInUseError(
            f"Category '{category.name}' still has {product_count} active product(s)"
        )

    category.is_active = False
    category.save(update_fields=['is_active', 'updated_at'])
    logger.info("Category %s deactivated", category.id)
