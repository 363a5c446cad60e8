"""CLI output formatting and helpers."""

import json
from datetime import datetime

import typer

from friends.core import Board, open_board


def board(ctx: typer.Context) -> Board:
    """Open the board once per invocation, honouring --backend."""
    if ctx.obj.get("board") is None:
        ctx.obj["board"] = open_board(backend=ctx.obj.get("backend"))
    return ctx.obj["board"]


def format_local_time(timestamp: str | None) -> str:
    """Format ISO timestamp as readable local time."""
    if not timestamp:
        return "never"
    try:
        dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return dt.astimezone().strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, TypeError):
        return timestamp


def output_json(data, ctx: typer.Context):
    """Output data as JSON if requested. Returns True if output, False otherwise."""
    if ctx.obj.get("json_output"):
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return True
    return False


def should_output(ctx: typer.Context) -> bool:
    """Check if output should be printed (not quiet mode)."""
    return not ctx.obj.get("quiet_output")


def echo_if_output(msg: str, ctx: typer.Context):
    """Echo message only if not in quiet mode."""
    if should_output(ctx):
        typer.echo(msg)


def fail(e: Exception, ctx: typer.Context) -> typer.Exit:
    """Report an error in the active output mode and return the exit to raise."""
    output_json({"status": "error", "message": str(e)}, ctx) or echo_if_output(f"❌ {e}", ctx)
    return typer.Exit(code=1)
