# dev2050/auth/schemas.py

from pydantic import BaseModel

class PasswordVerifyRequest(BaseModel):
    password: str

class PasswordVerifyResponse(BaseModel):
    success: bool
    message: str
