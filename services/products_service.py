import logging
from datetime import datetime, timezone
from fastapi import HTTPException
from microservices.image_microservice import encode_image
from microservices.product_microservice import with_vendor_fields
from mongomanager import product_collection, serialize, to_object_id
from services.vendors_service import get_vendor_by_id


logger = logging.getLogger(__name__)

CART_FIELDS = ("id", "name", "price", "images", "vendorId", "vendorName", "stock", "category")


async def get_products():
    # whole catalog, newest first, joined with vendor display fields
    documents = await product_collection.find({}).sort("createdAt", -1).to_list(None)
    vendors = {}
    products = []
    for document in documents:
        product = serialize(document)
        vendor_id = product.get("vendorId")
        if not vendor_id:
            logger.warning("Product %s is missing vendorId", product["id"])
            continue
        if vendor_id not in vendors:
            vendors[vendor_id] = await get_vendor_by_id(vendor_id)
        products.append(with_vendor_fields(product, vendors[vendor_id]))
    return products


async def get_product(id: str):
    object_id = to_object_id(id)
    if object_id is None:
        raise HTTPException(status_code=404, detail="No product found for the given id")
    product = await product_collection.find_one({"_id": object_id})
    if not product:
        raise HTTPException(status_code=404, detail="No product found for the given id")
    product = serialize(product)
    vendor = await get_vendor_by_id(product.get("vendorId", ""))
    return with_vendor_fields(product, vendor)


async def get_cart_product(product_id: str):
    # cart line items carry the stored price, never a client supplied one
    product = await get_product(product_id)
    return {field: product.get(field) for field in CART_FIELDS if field in product}


async def get_products_by_vendor(vendor_id: str):
    products = await product_collection.find({"vendorId": vendor_id}).sort("createdAt", -1).to_list(None)
    return [serialize(product) for product in products]


async def images_to_links(images):
    image_urls = []
    for image in images:
        content = await image.read()
        image_urls.append(encode_image(content, image.content_type))
    return image_urls


async def add_product(product_data: dict):
    now = datetime.now(timezone.utc)
    product = {**product_data, "createdAt": now, "updatedAt": now}
    result = await product_collection.insert_one(product)
    logger.info("Product added with ID: %s", result.inserted_id)
    return str(result.inserted_id)


async def _owned_product(product_id: str, vendor_id: str):
    object_id = to_object_id(product_id)
    product = await product_collection.find_one({"_id": object_id}) if object_id else None
    if not product:
        raise HTTPException(status_code=404, detail="No product found for the given id")
    if product.get("vendorId") != vendor_id:
        raise HTTPException(status_code=403, detail="Product belongs to another vendor")
    return object_id


async def delete_product(product_id: str, vendor_id: str):
    object_id = await _owned_product(product_id, vendor_id)
    await product_collection.delete_one({"_id": object_id})
    logger.info("Product %s deleted", product_id)
    return True


async def update_product_stock(product_id: str, new_stock: int, vendor_id: str = None):
    if vendor_id is not None:
        object_id = await _owned_product(product_id, vendor_id)
    else:
        object_id = to_object_id(product_id)
    if object_id is None:
        return False
    result = await product_collection.update_one(
        {"_id": object_id},
        {"$set": {"stock": max(0, new_stock), "updatedAt": datetime.now(timezone.utc)}})
    return result.matched_count > 0
