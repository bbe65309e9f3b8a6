"""User registration endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from auth import TokenStore, User, get_current_user, get_token_store

router = APIRouter()


class RegisterRequest(BaseModel):
    """Request body for registering a new API user."""
    username: str


class RegisterResponse(BaseModel):
    """Response after registering a new user."""
    api_key: str
    user_id: str
    username: str


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register_user(
    body: RegisterRequest,
    tokens: TokenStore = Depends(get_token_store),
) -> RegisterResponse:
    """Register a new player and return their API key."""
    if not body.username.strip():
        raise HTTPException(status_code=400, detail="Username is required")

    try:
        api_key, user = tokens.register(body.username)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return RegisterResponse(api_key=api_key, user_id=user.user_id, username=user.username)


@router.get("/me", response_model=User)
def whoami(user: User = Depends(get_current_user)) -> User:
    """Return the authenticated user."""
    return user
