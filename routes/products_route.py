import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from microservices.product_microservice import CATEGORIES, filter_products, paginate, sort_products
from routes.dependencies import get_client, require_vendor
from schemas.product_schemas import CatalogFiltersSchema, DeleteProductSchema, UpdateStockSchema
from services.catalog_service import PAGE_SIZE
from services.products_service import add_product, delete_product, get_product, get_products, get_products_by_vendor, images_to_links, update_product_stock


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/products")


@router.get("/view")
async def get_view(client=Depends(get_client)):
    # current window of this tab's catalog view
    await client.catalog.ensure_loaded()
    return {"status": "success", **client.catalog.state()}


@router.post("/view/filters")
async def set_view_filters(filters: CatalogFiltersSchema, client=Depends(get_client)):
    await client.catalog.ensure_loaded()
    client.catalog.set_filters(search_term=filters.search, category=filters.category,
                               price_range=filters.price_range, stock=filters.stock,
                               sort_key=filters.sort_by)
    return {"status": "success", **client.catalog.state()}


@router.post("/view/load-more")
async def load_more(client=Depends(get_client)):
    await client.catalog.ensure_loaded()
    client.catalog.load_more()
    return {"status": "success", **client.catalog.state()}


@router.post("/view/refresh")
async def refresh_view(client=Depends(get_client)):
    await client.catalog.load_all()
    return {"status": "success", **client.catalog.state()}


@router.get("/products-query")
async def products_query(category: str = "", search: str = "", price_range: str = "", stock: str = "",
                         sort_by: str = "newest", page: int = Query(1, ge=1), per_page: int = Query(PAGE_SIZE, ge=1)):
    # stateless version of the catalog view
    try:
        products = await get_products()
    except Exception:
        logger.exception("Error loading products")
        products = []
    filtered = sort_products(filter_products(products, search, category, price_range, stock), sort_by)
    window = paginate(filtered, per_page, page)
    next_page = page + 1 if len(window) < len(filtered) else None
    return {"products": window, "nextPage": next_page, "length": len(filtered)}


@router.get("/fetch-product")
async def fetch_product(id: str):
    # fetch product data using its id
    product = await get_product(id)
    return {"status": "success", "product": product}


@router.get("/by-vendor")
async def products_by_vendor(vendor_id: str):
    products = await get_products_by_vendor(vendor_id)
    return {"status": "success", "products": products}


@router.post("/upload-product")
async def upload_product(
    name: str = Form(...),
    description: str = Form(""),
    price: float = Form(..., ge=0),
    originalPrice: Optional[float] = Form(None),
    stock: int = Form(0, ge=0),
    category: str = Form(""),
    images: List[UploadFile] = File(...),
    vendor=Depends(require_vendor),
):
    category = category.strip().lower() or "other"
    if category not in CATEGORIES:
        raise HTTPException(status_code=400, detail="Unknown category")
    image_urls = await images_to_links(images)
    product_id = await add_product({
        "name": name,
        "description": description,
        "price": price,
        "originalPrice": originalPrice,
        "stock": stock,
        "category": category,
        "images": image_urls,
        "vendorId": vendor["id"],
    })
    return {"status": "success", "message": "Product uploaded successfully.", "product_id": product_id}


@router.post("/delete-product")
async def remove_product(data: DeleteProductSchema, vendor=Depends(require_vendor)):
    await delete_product(data.product_id, vendor["id"])
    return {"status": "success"}


@router.post("/update-stock")
async def update_stock(data: UpdateStockSchema, vendor=Depends(require_vendor)):
    if await update_product_stock(data.product_id, data.stock, vendor["id"]):
        return {"status": "success"}
    raise HTTPException(status_code=404, detail="No product found for the given id")
