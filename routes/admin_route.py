from fastapi import APIRouter, Depends
from routes.dependencies import require_admin
from schemas.admin_schemas import SlideshowSchema
from services.admin_service import get_visitor_count, increment_visitor_count, load_slideshow, update_slideshow

router = APIRouter(prefix="/admin")


@router.get("/slideshow")
async def slideshow():
    return {"status": "success", "slideshow": await load_slideshow()}


@router.post("/slideshow")
async def save_slideshow(data: SlideshowSchema, admin=Depends(require_admin)):
    await update_slideshow(data)
    return {"status": "success", "message": "Slideshow updated"}


@router.post("/visit")
async def visit():
    await increment_visitor_count()
    return {"status": "success"}


@router.get("/visitor-count")
async def visitor_count():
    return {"status": "success", "count": await get_visitor_count()}
