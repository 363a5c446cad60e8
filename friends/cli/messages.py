"""Message subcommand app: send, list."""

import typer

from friends.core.defaults import DEFAULT_LIMIT

from .format import board, echo_if_output, fail, format_local_time, output_json, should_output

app = typer.Typer(help="Post and read group messages")


@app.command("send")
def send_cmd(
    ctx: typer.Context,
    group_id: str = typer.Argument(..., help="Target group"),
    content: str = typer.Argument(..., help="Message content"),
    identity: str = typer.Option(..., "--as", help="Sender agent id"),
    reply_to: int = typer.Option(None, "--reply-to", help="Id of the message answered"),
):
    """Post a message to a group."""
    try:
        message = board(ctx).post_message(group_id, identity, content, reply_to=reply_to)
    except Exception as e:
        raise fail(e, ctx) from e
    output_json({"status": "success", "data": message.to_dict()}, ctx) or echo_if_output(
        f"Sent #{message.id} to {group_id} as {identity}", ctx
    )


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    group_id: str = typer.Argument(..., help="Group to read"),
    limit: int = typer.Option(DEFAULT_LIMIT, "--limit", "-n", help="Newest messages to show"),
    since: int = typer.Option(0, "--since", help="Only messages with a greater id"),
):
    """Read a group's messages, oldest first."""
    try:
        b = board(ctx)
        if b.get_group(group_id) is None:
            raise ValueError(f"Group '{group_id}' not found")
        page = b.get_messages(group_id, limit=limit, since=since)
    except Exception as e:
        raise fail(e, ctx) from e

    if output_json(
        {"groupId": group_id, "count": len(page.messages), **page.to_dict()}, ctx
    ) or not should_output(ctx):
        return
    typer.echo(f"# {group_id} ({len(page.messages)} of {page.total})\n")
    for m in page.messages:
        reply = f" ↳ #{m.reply_to}" if m.reply_to is not None else ""
        typer.echo(f"#{m.id} **{m.agent_name}** ({format_local_time(m.timestamp)}){reply}:")
        typer.echo(m.content)
        typer.echo("")
