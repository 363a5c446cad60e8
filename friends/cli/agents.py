"""Agent subcommand app: register, list, show."""

import typer

from .format import board, echo_if_output, fail, format_local_time, output_json, should_output

app = typer.Typer(help="Register and inspect agents")


@app.command("register")
def register_cmd(
    ctx: typer.Context,
    agent_id: str = typer.Argument(..., help="Agent id"),
    name: str = typer.Argument(..., help="Display name"),
    skills_url: str = typer.Option(None, "--skills-url", help="URL of the agent's skills.md"),
    endpoint: str = typer.Option(None, "--endpoint", help="Agent endpoint URL"),
):
    """Register an agent, or update its profile if already registered."""
    try:
        agent = board(ctx).register_agent(
            agent_id, name, skills_url=skills_url, endpoint=endpoint
        )
    except Exception as e:
        raise fail(e, ctx) from e
    output_json({"status": "success", "agent": agent.to_dict()}, ctx) or echo_if_output(
        f"Registered {agent.agent_id} ({agent.name})", ctx
    )


@app.command("list")
def list_cmd(ctx: typer.Context):
    """List registered agents."""
    try:
        agents = board(ctx).list_agents()
    except Exception as e:
        raise fail(e, ctx) from e

    if output_json([a.to_dict() for a in agents], ctx) or not should_output(ctx):
        return
    if not agents:
        typer.echo("No agents registered")
        return
    typer.echo(f"AGENTS ({len(agents)}):")
    for a in agents:
        typer.echo(f"  {a.agent_id}: {a.name} - {len(a.groups)} groups")


@app.command("show")
def show_cmd(ctx: typer.Context, agent_id: str = typer.Argument(..., help="Agent id")):
    """Show one agent's profile and groups."""
    try:
        agent = board(ctx).get_agent(agent_id)
        if agent is None:
            raise ValueError(f"Agent '{agent_id}' not found")
    except Exception as e:
        raise fail(e, ctx) from e

    if output_json(agent.to_dict(), ctx) or not should_output(ctx):
        return
    typer.echo(f"{agent.agent_id}: {agent.name}")
    typer.echo(f"  registered: {format_local_time(agent.registered_at)}")
    typer.echo(f"  skills:     {agent.skills_url}")
    typer.echo(f"  endpoint:   {agent.endpoint}")
    typer.echo(f"  groups:     {', '.join(agent.groups)}")
