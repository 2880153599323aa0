from fastapi import APIRouter, Depends
from routes.dependencies import get_client
from schemas.cart_schemas import AddCartItemSchema, RemoveCartItemSchema, UpdateQuantitySchema
from services.products_service import get_cart_product

router = APIRouter(prefix="/cart")


def cart_response(client):
    return {"status": "success", "cart": client.cart.snapshot(), "messages": client.toasts.drain()}


@router.get("/get-cart")
async def get_cart(client=Depends(get_client)):
    return cart_response(client)


@router.post("/add-cart-item")
async def add_cart_item(req: AddCartItemSchema, client=Depends(get_client)):
    # adds item to cart. if item already in cart, increase its quantity
    product = await get_cart_product(req.product_id)
    await client.cart.add_item(product, req.quantity)
    return cart_response(client)


@router.post("/delete-cart-item")
async def delete_cart_item(req: RemoveCartItemSchema, client=Depends(get_client)):
    await client.cart.remove_item(req.product_id)
    return cart_response(client)


@router.post("/update-quantity")
async def update_quantity(req: UpdateQuantitySchema, client=Depends(get_client)):
    # a quantity of zero or less removes the item
    await client.cart.update_quantity(req.product_id, req.quantity)
    return cart_response(client)


@router.post("/clear")
async def clear_cart(client=Depends(get_client)):
    await client.cart.clear()
    return cart_response(client)


@router.post("/open")
async def open_cart(client=Depends(get_client)):
    client.cart.open()
    return cart_response(client)


@router.post("/close")
async def close_cart(client=Depends(get_client)):
    client.cart.close()
    return cart_response(client)
