from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from microservices.orders_microservice import CUSTOM_ORDER_STATUSES, custom_order_document
from routes.dependencies import get_current_user, get_optional_user, require_admin
from schemas.custom_orders_schemas import CustomOrderStatusSchema
from services.custom_orders_service import add_custom_order, get_custom_orders, get_custom_orders_by_user, update_custom_order_status
from services.products_service import images_to_links

router = APIRouter(prefix="/custom-orders")


@router.post("/submit")
async def submit_custom_order(
    productName: str = Form(""),
    description: str = Form(""),
    category: str = Form(""),
    priceRange: str = Form(""),
    images: Optional[List[UploadFile]] = File(None),
    user=Depends(get_optional_user),
):
    # guests may ask too, signed in users get the request linked to them
    order = custom_order_document(productName, description, category, priceRange, [], user)
    order["images"] = await images_to_links([image for image in images or [] if image.filename])
    order_id = await add_custom_order(order)
    return {"status": "success", "message": "Your request has been submitted!", "order_id": order_id}


@router.get("/list")
async def list_custom_orders(status: Optional[str] = None, admin=Depends(require_admin)):
    if status and status not in CUSTOM_ORDER_STATUSES:
        raise HTTPException(status_code=400, detail="Unknown status")
    return {"status": "success", "orders": await get_custom_orders(status)}


@router.get("/mine")
async def my_custom_orders(user=Depends(get_current_user)):
    return {"status": "success", "orders": await get_custom_orders_by_user(user["uid"])}


@router.post("/status")
async def set_custom_order_status(data: CustomOrderStatusSchema, admin=Depends(require_admin)):
    await update_custom_order_status(data.order_id, data.status)
    return {"status": "success"}
