from typing import Optional

from pydantic import ConfigDict

from feedback_api.schemas.base import ApiInput, ApiModel


class SignupIn(ApiInput):
    # presence is checked by the endpoint so it can answer with a domain message
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginIn(ApiInput):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(ApiModel):
    # Allows building straight from SQLAlchemy rows
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str = "user"


class AuthOut(ApiModel):
    message: str
    token: str
    user: UserOut
