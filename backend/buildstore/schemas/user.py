from pydantic import BaseModel, Field


class UserIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., max_length=255)
