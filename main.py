"""FastAPI app entry point for Skirmish Server."""

import logging

from fastapi import FastAPI

from api.game import router as game_router
from api.stats import router as stats_router
from api.users import router as users_router
from auth import TokenStore
from config import LOG_LEVEL, STATS_FILE, TOKENS_FILE
from storage.stats import JsonStatsRepository, StatsRepository


def create_app(
    stats: StatsRepository | None = None,
    tokens: TokenStore | None = None,
) -> FastAPI:
    """Build the app around its storage collaborators.

    Args:
        stats: Where finished games are recorded. Defaults to a JSON file
            at STATS_FILE.
        tokens: API key store. Defaults to a JSON file at TOKENS_FILE.

    Returns:
        The configured FastAPI application.
    """
    app = FastAPI(
        title="Skirmish Server",
        description="Turn-based tactical combat on a 16x16 grid",
        version="0.1.0",
    )

    if stats is None:
        stats = JsonStatsRepository(STATS_FILE)
        stats.load()
    if tokens is None:
        tokens = TokenStore(TOKENS_FILE)
        tokens.load()
    app.state.stats = stats
    app.state.tokens = tokens

    app.include_router(users_router, prefix="/auth", tags=["Auth"])
    app.include_router(game_router, prefix="/game", tags=["Game"])
    app.include_router(stats_router, prefix="/stats", tags=["Stats"])

    @app.get("/")
    def root() -> dict:
        """Root endpoint returning server info."""
        return {"name": "Skirmish Server", "version": "0.1.0", "status": "running"}

    @app.get("/health")
    def health() -> dict:
        """Health check endpoint."""
        return {"healthy": True}

    return app


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
