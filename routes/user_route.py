from fastapi import APIRouter, Depends
from routes.dependencies import get_current_user
from schemas.user_schemas import EditDetailsSchema, FavoriteSchema
from services.users_service import edit_user, toggle_favorite

router = APIRouter(prefix="/user")


@router.get("/fetch-user")
async def fetch_user(user=Depends(get_current_user)):
    return {"status": "success", "user": user}


@router.post("/edit-user-details")
async def edit_details(data: EditDetailsSchema, user=Depends(get_current_user)):
    if await edit_user(user["uid"], data):
        return {"status": "success"}
    return {"status": "failure"}


@router.post("/favorites/toggle")
async def favorite(data: FavoriteSchema, user=Depends(get_current_user)):
    is_favorite = await toggle_favorite(user["uid"], data.product_id)
    message = "Added to favorites" if is_favorite else "Removed from favorites"
    return {"status": "success", "favorite": is_favorite, "message": message}
