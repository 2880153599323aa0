from fastapi import APIRouter, Depends, HTTPException
from routes.dependencies import get_client, get_current_user, require_vendor
from schemas.orders_schemas import CustomerInfoSchema, DeleteOrderSchema, UpdateOrderStatusSchema
from services.orders_service import delete_order, get_order, get_order_tracking, get_orders_by_customer, get_orders_by_vendor, place_orders, update_order_status, whatsapp_checkout
from services.vendors_service import get_vendor_by_uid

router = APIRouter(prefix="/orders")


async def check_order_access(order_id: str, user):
    # admins manage every order, vendors only their own
    if user.get("role") == "admin":
        return
    order = await get_order(order_id)
    vendor = await get_vendor_by_uid(user["uid"]) if user.get("role") == "vendor" else None
    if vendor is None or order.get("vendorId") != vendor["id"]:
        raise HTTPException(status_code=403, detail="Not allowed to manage this order")


@router.post("/checkout")
async def checkout(customer: CustomerInfoSchema, client=Depends(get_client)):
    order_ids = await place_orders(customer, client.cart)
    return {"status": "success", "order_ids": order_ids, "cart": client.cart.snapshot(), "messages": client.toasts.drain()}


@router.post("/whatsapp-checkout")
async def checkout_with_whatsapp(customer: CustomerInfoSchema, client=Depends(get_client)):
    # stores the orders and hands back the wa.me link for the vendor
    result = await whatsapp_checkout(customer, client.cart)
    client.toasts.push("Order placed! WhatsApp opened with order details.")
    return {"status": "success", **result, "cart": client.cart.snapshot(), "messages": client.toasts.drain()}


@router.get("/mine")
async def my_orders(user=Depends(get_current_user)):
    return {"status": "success", "orders": await get_orders_by_customer(user["email"])}


@router.get("/by-vendor")
async def vendor_orders(vendor=Depends(require_vendor)):
    return {"status": "success", "orders": await get_orders_by_vendor(vendor["id"])}


@router.get("/tracking")
async def order_tracking(order_id: str):
    return {"status": "success", "tracking": await get_order_tracking(order_id)}


@router.post("/status")
async def set_order_status(data: UpdateOrderStatusSchema, user=Depends(get_current_user)):
    await check_order_access(data.order_id, user)
    await update_order_status(data.order_id, data.status)
    return {"status": "success"}


@router.post("/delete-order")
async def remove_order(data: DeleteOrderSchema, user=Depends(get_current_user)):
    await check_order_access(data.order_id, user)
    if await delete_order(data.order_id):
        return {"status": "success"}
    return {"status": "failure"}
