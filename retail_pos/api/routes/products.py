"""Catalog product endpoints."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response

from retail_pos.api.dependencies import (
    StaffIdentity,
    get_app_settings,
    get_cat_store,
    get_current_staff,
    require_admin,
)
from retail_pos.application.dto.requests import (
    CreateProductRequest,
    UpdateProductRequest,
)
from retail_pos.application.dto.responses import (
    ErrorResponse,
    LowStockResponse,
    ProductListResponse,
    ProductResponse,
)
from retail_pos.config import Settings
from retail_pos.core.entities.product import Product, ProductStatus
from retail_pos.core.exceptions import ProductNotFoundError
from retail_pos.infrastructure.storage.sqlite import SQLiteCatalogStore

router = APIRouter(prefix="/api/products", tags=["products"])


def product_to_response(product: Product) -> ProductResponse:
    """Convert a Product entity to response DTO."""
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        category=product.category,
        sale_price=product.sale_price,
        stock_quantity=product.stock_quantity,
        status=product.status.value,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: str | None = None,
    category: str | None = None,
    product_status: ProductStatus | None = Query(default=None, alias="status"),
    _staff: StaffIdentity = Depends(get_current_staff),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductListResponse:
    """List products, optionally filtered by name/category search and status."""
    products = await store.list_products(
        search=search, category=category, status=product_status
    )
    return ProductListResponse(
        products=[product_to_response(p) for p in products],
        total=len(products),
    )


@router.get(
    "/alert/low-stock",
    response_model=LowStockResponse,
    responses={403: {"model": ErrorResponse}},
)
async def low_stock_alert(
    threshold: int | None = Query(default=None, ge=0),
    _admin: StaffIdentity = Depends(require_admin),
    store: SQLiteCatalogStore = Depends(get_cat_store),
    settings: Settings = Depends(get_app_settings),
) -> LowStockResponse:
    """Products at or below the low-stock threshold."""
    threshold = settings.report.low_stock_threshold if threshold is None else threshold
    products = await store.list_low_stock(threshold)
    return LowStockResponse(
        threshold=threshold,
        products=[product_to_response(p) for p in products],
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    _staff: StaffIdentity = Depends(get_current_staff),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductResponse:
    """Get a product by ID."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return product_to_response(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={403: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    _admin: StaffIdentity = Depends(require_admin),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductResponse:
    """Add a product to the catalog."""
    product = await store.create_product(Product(**request.model_dump()))
    return product_to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def update_product(
    product_id: int,
    request: UpdateProductRequest,
    _admin: StaffIdentity = Depends(require_admin),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductResponse:
    """Update selected product fields."""
    changes = request.model_dump(exclude_unset=True, exclude_none=True)
    product = await store.update_product(product_id, changes)
    return product_to_response(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse, "description": "Product is on existing invoices"},
    },
)
async def delete_product(
    product_id: int,
    _admin: StaffIdentity = Depends(require_admin),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> Response:
    """Delete a product that has never been sold."""
    await store.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
