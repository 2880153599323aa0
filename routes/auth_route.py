from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import JSONResponse
from microservices.users_microservice import deleteCookie
from routes.dependencies import get_client, get_current_identity
from schemas.user_schemas import EmailSchema, RegisterSchema, ResetPasswordSchema, SignInSchema
from services.auth_service import refresh_access_token, reset_password, send_password_reset, signin_user, signup_user
from services.session_service import SessionStatus

router = APIRouter(prefix="/auth")


@router.post("/signup")
async def signup(data: RegisterSchema):
    # customers only, vendors register through /vendors/register
    profile = await signup_user(data)
    return {"status": "success", "message": "Signup successful", "user": profile}


@router.post("/signin")
async def signin(data: SignInSchema, response: Response, client=Depends(get_client)):
    result = await signin_user(data, response)
    # the session loads the profile as soon as the identity arrives
    await client.auth_stream.sign_in(result["user"])
    if client.session.status != SessionStatus.AUTHENTICATED:
        # no profile, no session: neither the token nor the refresh cookie go out
        failure = JSONResponse(status_code=401, content={
            "status": "failure",
            "detail": "Could not load your profile. Please sign in again.",
            "session": client.session.snapshot(),
        })
        deleteCookie(failure)
        return failure
    return {"status": "success", **result, "session": client.session.snapshot()}


@router.post("/signout")
async def signout(response: Response, client=Depends(get_client)):
    await client.session.logout()
    deleteCookie(response)
    return {"status": "success", "session": client.session.snapshot(), "messages": client.toasts.drain()}


@router.get("/me")
async def me(identity=Depends(get_current_identity)):
    return {"status": "success", "user": identity}


@router.get("/generate-access-token")
def generate_access_token(request: Request):
    new_token = refresh_access_token(request)
    if new_token:
        return {"status_code": 200, "status": "success", "token": new_token}
    return {"status_code": 401, "status": "failure", "token": None}


@router.post("/forgot-password")
async def forgot_password(background_tasks: BackgroundTasks, data: EmailSchema):
    # sends a reset link by email in the background
    await send_password_reset(background_tasks, data.email)
    return {"status": "success", "message": "Password reset email sent! Check your inbox."}


@router.post("/reset-password")
async def confirm_reset(data: ResetPasswordSchema):
    return await reset_password(data)
