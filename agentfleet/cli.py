"""
Agent Fleet CLI

Command-line interface for spawning and rotating pump.studio agents.
"""

import sys
import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from . import __version__
from .config import FleetConfig, MARKET_TABS, load_config, create_default_config
from .errors import FleetError


console = Console()


def _load(ctx) -> FleetConfig:
    config_path = ctx.obj.get("config_path")
    if config_path:
        config = load_config(config_path)
        console.print(f"[green]✓[/green] Loaded config from {config_path}")
        return config
    return FleetConfig.from_env()


@click.group()
@click.version_option(__version__, prog_name="agentfleet")
@click.option("--config", "-c", "config_path", type=click.Path(), help="Path to config file")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def cli(ctx, config_path: str, verbose: bool):
    """Agent Fleet - spawn and rotate pump.studio agents"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


# =============================================================================
# Workflows
# =============================================================================

@cli.command()
@click.option("--count", "-n", type=int, help="Agents to spawn")
@click.option("--tab", "-t", type=click.Choice(MARKET_TABS), help="Market tab")
@click.option("--offset", "-o", type=int, help="Skip the top N tokens")
@click.pass_context
def spawn(ctx, count: int, tab: str, offset: int):
    """Register new agents for obscure tokens."""
    from .agents import AgentStorage, AgentRegistry, AgentSpawner
    from .client import PumpStudioClient
    from .pacing import SpawnPacing

    try:
        config = _load(ctx)
        if count is not None:
            config.spawn.count = count
        if tab is not None:
            config.spawn.tab = tab
        if offset is not None:
            config.spawn.offset = offset
        config.validate()

        console.print(Panel(
            f"count: {config.spawn.count} | tab: {config.spawn.tab} | offset: {config.spawn.offset}",
            title="Agent Spawner"
        ))

        async def _run():
            registry = AgentRegistry.load(AgentStorage(config.agents_file))
            async with PumpStudioClient.from_config(config.client) as client:
                spawner = AgentSpawner(
                    client, registry, config.spawn, SpawnPacing.from_config(config.pacing)
                )
                return await spawner.run()

        report = asyncio.run(_run())
    except Exception as e:
        console.print(f"[red]✗[/red] Spawn failed: {e}")
        sys.exit(1)

    console.print(Panel(
        f"SPAWNED: {report.spawned_count} new agents\n"
        f"SKIPPED: {len(report.skipped)}\n"
        f"TOTAL:   {report.registry_size} agents in {config.agents_file}",
        title="Spawn Summary"
    ))


@cli.command()
@click.option("--count", "-n", type=int, help="Tokens per agent")
@click.option("--tab", "-t", type=click.Choice(MARKET_TABS), help="Market tab")
@click.option("--cooldown", type=float, help="Seconds between submissions")
@click.pass_context
def rank(ctx, count: int, tab: str, cooldown: float):
    """Rank tokens with every agent in turn."""
    from .agents import AgentStorage, AgentRotator
    from .analysis import analyze
    from .client import PumpStudioClient
    from .pacing import RankPacing

    try:
        config = _load(ctx)
        if count is not None:
            config.rank.count = count
        if tab is not None:
            config.rank.tab = tab
        if cooldown is not None:
            config.pacing.submission_cooldown = cooldown
        config.validate()

        console.print(Panel(
            f"tab: {config.rank.tab} | count/agent: {config.rank.count} | "
            f"cooldown: {config.pacing.submission_cooldown:g}s",
            title="Rank All"
        ))

        async def _run():
            records = AgentStorage(config.agents_file).load()
            async with PumpStudioClient.from_config(config.client) as client:
                rotator = AgentRotator(
                    client, config.rank, RankPacing.from_config(config.pacing), analyze
                )
                return await rotator.run(records)

        report = asyncio.run(_run())
    except Exception as e:
        console.print(f"[red]✗[/red] Rank failed: {e}")
        sys.exit(1)

    if not report.participants:
        console.print("[yellow]No agents found (set PUMP_STUDIO_API_KEY or run spawn first)[/yellow]")
        return

    table = Table(title="Rotation")
    table.add_column("Agent", style="cyan")
    table.add_column("Submitted", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("XP", justify="right")
    for p in report.participants:
        table.add_row(p.name, str(p.submitted), str(p.failed), f"{p.xp:g}")
    console.print(table)

    console.print(Panel(
        f"TOTAL:  {report.total_submitted} submissions, +{report.total_xp:g} XP\n"
        f"AGENTS: {report.participant_count}",
        title="Rank Summary"
    ))


# =============================================================================
# Registry Commands
# =============================================================================

@cli.group()
def agents():
    """Inspect the agent registry."""
    pass


@agents.command("list")
@click.pass_context
def agents_list(ctx):
    """List spawned agents."""
    from .agents import AgentStorage

    try:
        config = _load(ctx)
    except (FleetError, OSError) as e:
        console.print(f"[red]✗[/red] {e}")
        sys.exit(1)

    records = AgentStorage(config.agents_file).load()
    if not records:
        console.print(f"[yellow]No agents in {config.agents_file}[/yellow]")
        return

    table = Table(title=f"Agents - {config.agents_file}")
    table.add_column("Name", style="cyan")
    table.add_column("Symbol")
    table.add_column("Mint", style="dim")
    table.add_column("Key", style="dim")
    table.add_column("Avatar")
    table.add_column("Registered", style="dim")

    for r in records:
        table.add_row(
            r.name,
            r.symbol,
            r.mint[:12] + "...",
            r.key[:8] + "...",
            "✓" if r.avatar_url else "✗",
            r.registered_at.isoformat()[:19],
        )

    console.print(table)
    console.print(f"\nTotal: {len(records)} agents")


@cli.command()
def init():
    """Initialize a new configuration file."""
    config_path = Path("agentfleet.yaml")

    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    config_path.write_text(create_default_config())
    console.print(f"[green]✓[/green] Created {config_path}")
    console.print("\nEdit the file, then run:")
    console.print("  [cyan]agentfleet -c agentfleet.yaml spawn[/cyan]")
    console.print("  [cyan]agentfleet -c agentfleet.yaml rank[/cyan]")


# =============================================================================
# Main
# =============================================================================

def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
