from pydantic import BaseModel, ConfigDict, EmailStr, Field
from twilight.schemas.common_schema import ResultResponse


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    firstname: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSignin(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    id: int
    username: str
    firstname: str
    email: EmailStr


class SigninResponse(ResultResponse):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")
    user: UserRead


class AccessTokenResponse(ResultResponse):
    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., alias="accessToken")


class MeResponse(ResultResponse):
    user: UserRead


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
