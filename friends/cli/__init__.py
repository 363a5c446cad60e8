"""friends CLI: thin command wrappers over the board."""

import logging

import typer

from friends.lib import config

from . import agents, groups, messages
from .format import board, echo_if_output, fail, output_json

app = typer.Typer(no_args_is_help=False, add_completion=False)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", "-j", help="Output in JSON format."),
    quiet_output: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    backend: str = typer.Option(None, "--backend", help="Storage backend: sqlite or memory."),
):
    """Directory and group messaging board for autonomous agents."""
    if ctx.obj is None:
        ctx.obj = {}
    ctx.obj["json_output"] = json_output
    ctx.obj["quiet_output"] = quiet_output
    ctx.obj["backend"] = backend

    def close_board():
        if ctx.obj.get("board") is not None:
            ctx.obj["board"].close()

    ctx.call_on_close(close_board)
    if ctx.resilient_parsing:
        return
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("init")
def init_cmd(ctx: typer.Context):
    """Write a default config.yaml and prepare the store."""
    try:
        written = config.init_config()
        b = board(ctx)
        groups_count = len(b.list_groups())
    except Exception as e:
        raise fail(e, ctx) from e
    output_json(
        {"status": "success", "config_written": written, "groups": groups_count}, ctx
    ) or echo_if_output(
        f"Board ready ({b.backend.name}, {groups_count} groups)"
        + (" - wrote config.yaml" if written else ""),
        ctx,
    )


@app.command("serve")
def serve_cmd(
    ctx: typer.Context,
    host: str = typer.Option(None, help="Bind address."),
    port: int = typer.Option(None, help="Bind port."),
):
    """Run the HTTP API."""
    import uvicorn

    from friends.api import create_app

    logging.basicConfig(
        level=config.get("log_level").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = host or config.get("host")
    port = port or config.get("port")
    logging.getLogger(__name__).info(f"localhost:friends running on http://{host}:{port}")
    uvicorn.run(create_app(board(ctx)), host=host, port=port, access_log=False)


app.add_typer(agents.app, name="agents")
app.add_typer(groups.app, name="groups")
app.add_typer(messages.app, name="messages")


def main() -> None:
    """Entry point for friends command."""
    app()


__all__ = ["app", "main"]
