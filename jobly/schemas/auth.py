from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class RegisterRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: EmailStr


class Token(BaseModel):
    token: str


class TokenData(BaseModel):
    username: Optional[str] = None
    is_admin: bool = False


class UserResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool = False


class UserEnvelope(BaseModel):
    user: UserResponse
