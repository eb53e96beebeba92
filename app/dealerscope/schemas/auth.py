from pydantic import BaseModel, EmailStr


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "email": "gm@example.com",
                "password": "Secret123",
            }
        }
    }

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    model_config = {
        "json_schema_extra": {
            "example": {
                "access_token": "<jwt>",
                "token_type": "bearer",
                "user_id": "6a0c6b1e-6f0e-4a47-9b3c-2c7f7d3b1f00",
                "trace_id": "trace-123",
            }
        }
    }

    access_token: str
    token_type: str = "bearer"
    user_id: str
    trace_id: str
