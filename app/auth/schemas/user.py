from pydantic import BaseModel


class UserResponse(BaseModel):
    id: str
    email: str
    role: str

    class Config:
        from_attributes = True
