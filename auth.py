"""API key authentication for Skirmish Server."""

import json
import os
import secrets
from pathlib import Path
from uuid import uuid4

from fastapi import HTTPException, Request
from pydantic import BaseModel


class User(BaseModel):
    """A registered API user."""
    user_id: str
    username: str


class TokenStore:
    """Maps API keys to users, optionally persisted to a JSON file.

    Args:
        path: File to persist to, or None to keep keys in memory only.
    """

    def __init__(self, path: str | None = None) -> None:
        self.path = path
        self._tokens: dict[str, User] = {}

    def load(self) -> dict[str, User]:
        """Load the token store from its JSON file, if there is one."""
        self._tokens.clear()
        if self.path is None or not Path(self.path).exists():
            return self._tokens
        with open(self.path) as f:
            data = json.load(f)
        self._tokens.update({key: User(**value) for key, value in data.items()})
        return self._tokens

    def save(self) -> None:
        """Persist the token store to its JSON file (atomic write)."""
        if self.path is None:
            return
        tmp_path = self.path + ".tmp"
        data = {key: user.model_dump() for key, user in self._tokens.items()}
        with open(tmp_path, "w") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    def register(self, username: str) -> tuple[str, User]:
        """Create a user with a fresh API key and persist it.

        Args:
            username: Display name, unique across users.

        Returns:
            (api_key, user) tuple.

        Raises:
            ValueError: If the username is already registered.
        """
        username = username.strip()
        if not username:
            raise ValueError("Username is required")
        for user in self._tokens.values():
            if user.username == username:
                raise ValueError(f"Username '{username}' already exists")

        api_key = "sk_" + secrets.token_hex(32)
        user = User(user_id=str(uuid4()), username=username)
        self._tokens[api_key] = user
        self.save()
        return api_key, user

    def get_user(self, api_key: str) -> User | None:
        """Look up a user by raw API key."""
        return self._tokens.get(api_key)


def get_token_store(request: Request) -> TokenStore:
    """FastAPI dependency: the app's token store."""
    return request.app.state.tokens


def get_current_user(request: Request) -> User:
    """FastAPI dependency: extract and validate Bearer token.

    Usage:
        @router.post("/endpoint")
        def endpoint(user: User = Depends(get_current_user)):
            ...

    Raises:
        HTTPException 401: If token is missing or invalid.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")

    token = auth_header[len("Bearer "):]
    user = get_token_store(request).get_user(token)
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid API key")

    return user
