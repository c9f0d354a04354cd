"""
DTOs de autenticación.
"""
from pydantic import BaseModel, Field


class AuthLoginRequestDTO(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponseDTO(BaseModel):
    access_token: str
    token_type: str = "bearer"
