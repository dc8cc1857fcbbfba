from fastapi import HTTPException, status

from dev2050.auth.auth_service import verify_password
from dev2050.common.utils.global_messages import GlobalMessages

def ensure_admin_password(password: str) -> None:
    if not verify_password(password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=GlobalMessages.INVALID_PASSWORD
        )
