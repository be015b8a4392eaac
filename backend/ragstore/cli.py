"""Typer commands for loading and querying the knowledge base from a shell."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ragstore.domain.entities import ReconcileResult
from ragstore.domain.exceptions import IngestionError, RetrievalError, StoreError, ValidationError
from ragstore.infrastructure.database.session import init_models, session_scope
from ragstore.infrastructure.dependencies import build_embedding_provider, build_services
from ragstore.infrastructure.logging.log_config import setup_logging

console = Console()
app = typer.Typer(help="Chunk, embed and search a pgvector-backed knowledge base.")


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    setup_logging()


async def _load_directory(directory: Path, pattern: str) -> list[Path]:
    provider = build_embedding_provider()
    files = sorted(p for p in directory.glob(pattern) if p.is_file())
    for path in files:
        content = path.read_text(encoding="utf-8")
        # One transaction per file: a failure keeps the files loaded before it.
        async with session_scope() as session:
            await build_services(session, embedding_provider=provider).ingestion.ingest(content)
        console.print(f"Loaded {path.name}")
    return files


async def _ask(query: str, min_similarity: float | None, limit: int | None):
    async with session_scope() as session:
        services = build_services(session)
        return await services.retrieval.retrieve(query, min_similarity=min_similarity, limit=limit)


async def _reconcile(limit: int) -> ReconcileResult:
    async with session_scope() as session:
        return await build_services(session).reconciliation.reembed_orphaned(limit=limit)


@app.command("load")
def load_command(
    directory: Path = typer.Argument(..., help="Directory holding the text files to ingest"),
    pattern: str = typer.Option("*.txt", "--pattern", help="Glob selecting files inside DIRECTORY"),
) -> None:
    """Ingest every matching file as one resource."""
    if not directory.is_dir():
        console.print(f"❌ {directory} is not a directory")
        raise typer.Exit(1)

    try:
        asyncio.run(_load_directory(directory, pattern))
    except (ValidationError, IngestionError, StoreError) as exc:
        console.print(f"❌ {exc}")
        raise typer.Exit(1) from exc
    console.print("Finished loading sample data")


@app.command("ask")
def ask_command(
    query: str = typer.Argument(..., help="Question to look up"),
    min_similarity: float | None = typer.Option(None, "--min-similarity", help="Relevance floor"),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Maximum number of results"),
) -> None:
    """Print the chunks most relevant to QUERY."""
    try:
        results = asyncio.run(_ask(query, min_similarity, limit))
    except (ValidationError, RetrievalError, StoreError) as exc:
        console.print(f"❌ {exc}")
        raise typer.Exit(1) from exc

    if not results:
        console.print("ℹ️ No relevant information found.")
        return

    table = Table(title="Relevant knowledge")
    table.add_column("Similarity", justify="right")
    table.add_column("Content")
    for result in results:
        table.add_row(f"{result.similarity:.3f}", result.content)
    console.print(table)


@app.command("reconcile")
def reconcile_command(
    limit: int = typer.Option(100, "--limit", min=1, help="Maximum resources to repair"),
) -> None:
    """Re-embed resources that have no chunks."""
    try:
        result = asyncio.run(_reconcile(limit))
    except (IngestionError, StoreError) as exc:
        console.print(f"❌ {exc}")
        raise typer.Exit(1) from exc
    console.print(f"Re-embedded {result.repaired} resources")
    for resource_id in result.skipped_ids:
        console.print(f"Skipped {resource_id}: content yields no chunks")


@app.command("init-db")
def init_db_command() -> None:
    """Create the vector extension (PostgreSQL) and all tables."""
    asyncio.run(init_models())
    console.print("Database initialised")


if __name__ == "__main__":
    app()
