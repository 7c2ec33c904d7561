# storefront/adapters/inbound/api/v1/endpoints/category_endpoint.py

from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.application.use_cases.category_use_cases import AsyncCategoryService
from storefront.adapters.inbound.api.deps import get_session
from storefront.adapters.outbound.security.permissions import require_admin
from storefront.application.dtos.category_dto import (
    CategoryCreate,
    CategoryOutput,
    CategoryTreeNode,
    CategoryUpdate,
    CategoryWithChildrenOutput,
    CategoryWithParentOutput,
)

router = APIRouter()

CYCLE_ERROR_EXAMPLE = {
    "detail": "Moving this category under the selected parent would create a cycle",
    "code": "CYCLE_DETECTED",
    "errors": {"category_id": "...", "parent_id": "..."}
}


@router.post(
    "/",
    response_model=CategoryOutput,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    summary="Create Category - Admin only",
    responses={
        404: {"description": "Parent category not found"},
        409: {"description": "A category with this name already exists"},
    }
)
async def create_category(
        data: CategoryCreate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCategoryService(db).create_category(data)


@router.get(
    "/",
    response_model=None,
    summary="List Categories",
    responses={200: {"model": List[CategoryWithChildrenOutput]}},
    description="""
    Lists categories ordered by display order and name.

    - `include_inactive=false` (default) hides inactive categories unless `is_active` is given
    - `only_root=true` returns top-level categories only
    - `include_children=true` embeds the direct children of each category
    """,
)
async def list_categories(
        name: Optional[str] = Query(None, description="Exact name match"),
        parent_id: Optional[UUID] = Query(None),
        is_active: Optional[bool] = Query(None),
        include_inactive: bool = Query(False),
        only_root: bool = Query(False),
        include_children: bool = Query(False),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCategoryService(db).list_categories(
        name=name,
        parent_id=parent_id,
        is_active=is_active,
        include_inactive=include_inactive,
        only_root=only_root,
        include_children=include_children,
    )


@router.get(
    "/tree",
    response_model=List[CategoryTreeNode],
    summary="Category Tree - Nested active categories",
)
async def get_category_tree(db: AsyncSession = Depends(get_session)):
    return await AsyncCategoryService(db).get_category_tree()


@router.get("/root", response_model=List[CategoryOutput], summary="Root Categories")
@router.get("/without-parent", response_model=List[CategoryOutput], summary="Categories Without Parent")
async def get_root_categories(db: AsyncSession = Depends(get_session)):
    return await AsyncCategoryService(db).get_root_categories()


@router.get(
    "/with-products",
    response_model=List[CategoryOutput],
    summary="Categories With Products",
)
async def get_categories_with_products(db: AsyncSession = Depends(get_session)):
    return await AsyncCategoryService(db).get_categories_with_products()


@router.get(
    "/with-parent",
    response_model=List[CategoryWithParentOutput],
    summary="Categories With Parent",
)
async def get_categories_with_parent(db: AsyncSession = Depends(get_session)):
    return await AsyncCategoryService(db).get_categories_with_parent()


@router.get(
    "/{category_id}",
    response_model=None,
    summary="Get Category",
    responses={
        200: {"model": CategoryWithChildrenOutput},
        404: {"description": "Category not found"},
    },
)
async def get_category(
        category_id: UUID,
        include_children: bool = Query(False),
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCategoryService(db).get_category(category_id, include_children=include_children)


@router.get(
    "/{category_id}/children",
    response_model=List[CategoryOutput],
    summary="Category Children - Active direct children",
    responses={404: {"description": "Category not found"}},
)
async def get_children(
        category_id: UUID,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCategoryService(db).get_children(category_id)


@router.patch(
    "/{category_id}",
    response_model=CategoryOutput,
    dependencies=[Depends(require_admin)],
    summary="Update Category - Admin only",
    description=(
            "Partially updates a category. Changing `parent_id` is rejected when "
            "the category would become its own ancestor."
    ),
    responses={
        400: {
            "description": "Self parent or cycle in the hierarchy",
            "content": {"application/json": {"example": CYCLE_ERROR_EXAMPLE}}
        },
        404: {"description": "Category or parent not found"},
        409: {"description": "A category with this name already exists"},
    }
)
async def update_category(
        category_id: UUID,
        data: CategoryUpdate,
        db: AsyncSession = Depends(get_session),
):
    return await AsyncCategoryService(db).update_category(category_id, data)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    summary="Delete Category - Admin only",
    responses={
        400: {"description": "Category still has subcategories or products"},
        404: {"description": "Category not found"},
    }
)
async def delete_category(
        category_id: UUID,
        db: AsyncSession = Depends(get_session),
):
    await AsyncCategoryService(db).delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
