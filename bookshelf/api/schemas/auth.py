"""Login request and response schemas."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Username/password login request."""

    username: str = Field(..., description="Account username")
    password: str = Field(..., description="Account password")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "admin",
                    "password": "password",
                }
            ]
        }
    }


class LoginResponse(BaseModel):
    """Successful login envelope."""

    status: str = "success"
    message: str
