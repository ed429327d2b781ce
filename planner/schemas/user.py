from pydantic import BaseModel, EmailStr, ConfigDict, Field
from datetime import datetime

# bcrypt ne hashe que les 72 premiers octets
PASSWORD_MAX_BYTES = 72

class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=PASSWORD_MAX_BYTES)

class UserResponse(BaseModel):
    id: int
    email: str
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(max_length=PASSWORD_MAX_BYTES)

class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
