# backend/app/schemas/user_schema.py

"""
Esquemas Pydantic para usuarios y autenticación.

UserPublic nunca incluye el hash de la contraseña; es la forma en que el
dueño de un producto aparece en las respuestas.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserPublic(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    user: UserPublic
