from pydantic import BaseModel, Field


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    # Length policy is enforced by the reset service so it reports WEAK_PASSWORD
    password: str


class MessageResponse(BaseModel):
    message: str
