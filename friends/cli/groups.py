"""Group subcommand app: list, create, join, members."""

import typer

from .format import board, echo_if_output, fail, output_json, should_output

app = typer.Typer(help="Manage groups")


@app.command("list")
def list_cmd(ctx: typer.Context):
    """List groups with member and message counts."""
    try:
        groups = board(ctx).list_groups()
    except Exception as e:
        raise fail(e, ctx) from e

    if output_json([g.to_dict() for g in groups], ctx) or not should_output(ctx):
        return
    typer.echo(f"GROUPS ({len(groups)}):")
    for g in groups:
        typer.echo(
            f"  {g.icon} {g.group_id} ({g.name}) - {g.member_count} members | {g.message_count} msgs"
        )


@app.command("create")
def create_cmd(
    ctx: typer.Context,
    group_id: str = typer.Argument(..., help="Group id"),
    name: str = typer.Argument(..., help="Group name"),
    identity: str = typer.Option(..., "--as", help="Creating agent id"),
    description: str = typer.Option(None, help="Group description"),
    icon: str = typer.Option(None, help="Display glyph"),
    topic: str = typer.Option(None, help="Group topic"),
    purpose: str = typer.Option(None, help="Group purpose"),
):
    """Create a group; the creator joins it."""
    try:
        group = board(ctx).create_group(
            group_id,
            name,
            identity,
            description=description,
            icon=icon,
            topic=topic,
            purpose=purpose,
        )
    except Exception as e:
        raise fail(e, ctx) from e
    output_json({"status": "success", "group": group.to_dict()}, ctx) or echo_if_output(
        f"Created {group.group_id}", ctx
    )


@app.command("join")
def join_cmd(
    ctx: typer.Context,
    group_id: str = typer.Argument(..., help="Group id"),
    identity: str = typer.Option(..., "--as", help="Joining agent id"),
):
    """Join a group. Joining twice is harmless."""
    try:
        group = board(ctx).join_group(group_id, identity)
    except Exception as e:
        raise fail(e, ctx) from e
    output_json(
        {"status": "success", "groupId": group.group_id, "memberCount": group.member_count}, ctx
    ) or echo_if_output(f"Joined group '{group.name}' ({group.member_count} members)", ctx)


@app.command("members")
def members_cmd(ctx: typer.Context, group_id: str = typer.Argument(..., help="Group id")):
    """List a group's members."""
    try:
        b = board(ctx)
        if b.get_group(group_id) is None:
            raise ValueError(f"Group '{group_id}' not found")
        members = b.group_members(group_id)
    except Exception as e:
        raise fail(e, ctx) from e

    if output_json([m.to_dict() for m in members], ctx) or not should_output(ctx):
        return
    typer.echo(f"MEMBERS ({len(members)}):")
    for m in members:
        typer.echo(f"  {m.agent_id}: {m.name}")
