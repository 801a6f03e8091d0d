"""Command line entrypoint: run the server or follow review statuses."""

import asyncio
import logging

import httpx
import typer
import uvicorn

from .config import settings
from .services.api_client import CodeReviewApiClient
from .services.formatters import StatusTag
from .services.status_reconciler import StatusReconciler
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(help="Code review frontend.", no_args_is_help=True)


@app.command()
def serve(
    host: str = typer.Option(settings.host, help="Interface to bind"),
    port: int = typer.Option(settings.port, help="Port to listen on"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the web frontend."""
    uvicorn.run(
        "codereview_frontend.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def _print_tag(tag: StatusTag) -> None:
    typer.echo(f"{tag.review_id}: {tag.text}")


async def _watch(review_ids: list[str], interval: float) -> int:
    """Poll ``review_ids`` until none is in flight. Returns how many failed."""
    async with CodeReviewApiClient(
        settings.api_base_url,
        timeout=settings.api_timeout_seconds,
    ) as client:
        tags = []
        for review_id in review_ids:
            try:
                status = await client.get_code_review_status(review_id)
            except httpx.HTTPError as e:
                typer.echo(f"Could not load code review {review_id}: {e}", err=True)
                raise typer.Exit(code=2) from e
            tag = StatusTag.for_status(review_id, status)
            _print_tag(tag)
            tags.append(tag)

        reconciler = StatusReconciler(
            tags,
            client.get_code_review_status,
            interval=interval,
            on_change=_print_tag,
        )
        if reconciler.start() is not None:
            await reconciler.wait()

    return sum(1 for tag in tags if tag.text == "Failed")


@app.command()
def watch(
    review_ids: list[str] = typer.Argument(..., help="Code review IDs to follow"),
    interval: float = typer.Option(
        settings.status_poll_interval_seconds,
        help="Seconds between status checks",
    ),
) -> None:
    """Follow code review statuses until every review has finished."""
    setup_logging(settings.log_level)
    failed = asyncio.run(_watch(review_ids, interval))
    if failed:
        typer.echo(f"{failed} of {len(review_ids)} code reviews failed")
        raise typer.Exit(code=1)
    typer.echo("All code reviews finished")


if __name__ == "__main__":
    app()
