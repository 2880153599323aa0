from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from routes.dependencies import get_current_user, require_admin
from schemas.user_schemas import RegisterSchema
from schemas.vendor_schemas import VendorLikeSchema, VendorStatusSchema, VerifyVendorSchema
from services.auth_service import signup_user
from services.products_service import images_to_links
from services.vendors_service import add_vendor, get_vendor_by_email, get_vendor_profile, get_vendors, get_verified_vendors, update_vendor_likes, update_vendor_status, verify_vendor

router = APIRouter(prefix="/vendors")


@router.post("/register")
async def register_vendor(
    ownerName: str = Form(""),
    businessName: str = Form(""),
    email: str = Form(""),
    phone: str = Form(""),
    category: str = Form(""),
    description: str = Form(""),
    password: str = Form(""),
    confirmPassword: str = Form(""),
    profileImage: Optional[UploadFile] = File(None),
):
    # user account first, then the vendor record waiting for admin approval
    if not businessName.strip():
        raise HTTPException(status_code=400, detail="Please fill in all required fields")
    account = RegisterSchema(name=ownerName, email=email, phone=phone,
                             password=password, confirm_password=confirmPassword)
    image_url = ""
    if profileImage is not None and profileImage.filename:
        image_url = (await images_to_links([profileImage]))[0]
    details = {"businessName": businessName, "category": category,
               "description": description, "profileImage": image_url}
    user = await signup_user(account, role="vendor", extra=details)
    vendor_id = await add_vendor({
        **details,
        "email": user["email"],
        "ownerName": ownerName,
        "phone": phone,
        "uid": user["uid"],
    })
    return {"status": "success", "message": "Vendor registration successful! Please wait for admin approval.", "vendor_id": vendor_id}


@router.get("/list")
async def list_vendors():
    return {"status": "success", "vendors": await get_vendors()}


@router.get("/verified")
async def list_verified_vendors():
    return {"status": "success", "vendors": await get_verified_vendors()}


@router.get("/by-email")
async def vendor_by_email(email: str):
    vendor = await get_vendor_by_email(email)
    if vendor is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return {"status": "success", "vendor": vendor}


@router.get("/profile")
async def vendor_profile(vendor_id: str):
    # vendor details with its products
    return {"status": "success", "vendor": await get_vendor_profile(vendor_id)}


@router.post("/verify")
async def verify(data: VerifyVendorSchema, admin=Depends(require_admin)):
    await verify_vendor(data.vendor_id)
    return {"status": "success", "message": "Vendor verified successfully!"}


@router.post("/status")
async def set_status(data: VendorStatusSchema, admin=Depends(require_admin)):
    await update_vendor_status(data.vendor_id, data.status)
    action = "activated" if data.status == "active" else "deactivated"
    return {"status": "success", "message": f"Vendor {action} successfully!"}


@router.post("/like")
async def like_vendor(data: VendorLikeSchema, user=Depends(get_current_user)):
    changed = await update_vendor_likes(data.vendor_id, user["uid"], data.like)
    return {"status": "success", "changed": changed}
