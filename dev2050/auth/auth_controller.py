# dev2050/auth/auth_controller.py

from fastapi import APIRouter, Request

from dev2050.auth import schemas
from dev2050.auth.dependencies import ensure_admin_password
from dev2050.common.rate_limit import limiter
from dev2050.common.utils.global_messages import GlobalMessages

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/verify", response_model=schemas.PasswordVerifyResponse)
@limiter.limit("5/minute")
async def verify(request: Request, body: schemas.PasswordVerifyRequest):
    """
    Password gate for the image management dashboard.
    """
    ensure_admin_password(body.password)
    return schemas.PasswordVerifyResponse(success=True, message=GlobalMessages.PASSWORD_VERIFIED)
