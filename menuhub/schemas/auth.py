from pydantic import BaseModel, EmailStr, Field


class SignupPayload(BaseModel):
    phone_number: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginPayload(BaseModel):
    phone_number: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SmsCodeRequest(BaseModel):
    phone_number: str = Field(..., min_length=1)


class SmsCodeVerify(BaseModel):
    phone_number: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)


class EmailCodeRequest(BaseModel):
    email: EmailStr


class EmailCodeVerify(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str
