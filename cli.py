import asyncio

import typer
import uvicorn

from post_api.core.config import settings
from post_api.core.database import database
from post_api.core.logging_config import setup_logging

# Register table models on the metadata
import post_api.apps.blog.models  # noqa: F401

app = typer.Typer(help="Management CLI for the post API.")


# ---------------------------
# Commands
# ---------------------------
@app.command()
def init_db():
    """Create all tables that do not exist yet."""
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    asyncio.run(_run(database.create_all))
    print(f"✅ Tables created on {settings.DATABASE_URL}")


@app.command()
def drop_db(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Drop all tables."""
    if not yes:
        typer.confirm(f"Drop every table on {settings.DATABASE_URL}?", abort=True)
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    asyncio.run(_run(database.drop_all))
    print("🗑️  Tables dropped")


@app.command()
def serve(
    host: str = typer.Option(settings.HOST, help="Bind address"),
    port: int = typer.Option(settings.PORT, help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload"),
):
    """Run the API with uvicorn."""
    uvicorn.run(
        "post_api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


async def _run(operation):
    try:
        await operation()
    finally:
        await database.disconnect()


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
