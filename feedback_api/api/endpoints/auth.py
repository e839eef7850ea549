# feedback_api/api/endpoints/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from feedback_api.api.deps.auth import UNAUTHORIZED, get_current_user_id
from feedback_api.api.deps.services import get_password_hasher, get_token_service, get_user_gateway
from feedback_api.core.passwords import PasswordHasher, is_valid_email, is_valid_password
from feedback_api.core.security import TokenService
from feedback_api.models.user import User
from feedback_api.schemas.auth import AuthOut, LoginIn, SignupIn, UserOut
from feedback_api.services.users import CreateUserStatus, UserGateway

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

DUPLICATE_EMAIL = "User already exists with this email"


def _auth_out(message: str, token: str, user: User) -> AuthOut:
    return AuthOut(message=message, token=token, user=UserOut.model_validate(user))


@router.post("/signup", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
def signup(
    data: SignupIn,
    users: UserGateway = Depends(get_user_gateway),
    passwords: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    name = (data.name or "").strip()
    email = (data.email or "").strip().lower()
    password = data.password or ""
    if not name or not email or not password.strip():
        raise HTTPException(status_code=400, detail="All fields are required")

    if not is_valid_password(password):
        raise HTTPException(status_code=400, detail="Password must be at least 6 characters long")
    if not is_valid_email(email):
        raise HTTPException(status_code=400, detail="Please enter a valid email address")

    if users.exists(email):
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL)

    result = users.create(name=name, email=email, password_hash=passwords.hash(password))
    if result.status is CreateUserStatus.DUPLICATE_EMAIL:
        # lost a race with a concurrent signup for the same address
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL)
    if result.status is not CreateUserStatus.CREATED:
        raise HTTPException(status_code=500, detail="Error creating user")

    user = result.user
    return _auth_out("User created successfully", tokens.issue(user.id, user.email), user)


@router.post("/login", response_model=AuthOut)
def login(
    data: LoginIn,
    users: UserGateway = Depends(get_user_gateway),
    passwords: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    email = (data.email or "").strip().lower()
    password = data.password or ""
    if not email or not password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required")

    # unknown email and wrong password get the same answer
    user = users.find_by_email(email)
    if user is None or not passwords.verify(password, user.password):
        logger.info("Failed login for %s", email)
        raise HTTPException(status_code=401, detail="Invalid email or password")

    logger.info("User %s logged in", user.id)
    return _auth_out("Login successful", tokens.issue(user.id, user.email), user)


@router.get("/me", response_model=UserOut)
def me(
    user_id: int = Depends(get_current_user_id),
    users: UserGateway = Depends(get_user_gateway),
):
    """Returns the user behind the bearer token."""
    user = users.find_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
    return UserOut.model_validate(user)
