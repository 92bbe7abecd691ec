from __future__ import annotations

import argparse
from datetime import tzinfo
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from playguard.application.dtos import ProtectionView, RollView
from playguard.bootstrap import Services
from playguard.domain.models.faction import faction_label
from playguard.domain.services.local_time import to_local_datetime

_CONSOLE = Console(highlight=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="playguard", description="Faction rolls and daily play protection")
    commands = parser.add_subparsers(dest="command", required=True)

    roll = commands.add_parser("roll", help="Roll a faction for the current (or given) instant")
    roll.add_argument("--at", type=int, default=None, help="Epoch milliseconds to roll for (defaults to now)")

    status = commands.add_parser("status", help="Show the protection status for a player")
    status.add_argument("--player", required=True)

    played = commands.add_parser("played", help="Record a finished game session")
    played.add_argument("--player", required=True)
    played.add_argument("--at", type=int, default=None, help="Epoch milliseconds of the session (defaults to now)")

    welcome = commands.add_parser("welcome", help="Mark today's welcome notice as shown")
    welcome.add_argument("--player", required=True)
    return parser


def format_duration(ms: int) -> str:
    total_minutes = max(0, int(ms)) // 60000
    hours, minutes = divmod(total_minutes, 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def format_instant(value: Optional[int], tz: Optional[tzinfo] = None) -> str:
    if value is None:
        return "never"
    return to_local_datetime(value, tz).strftime("%Y-%m-%d %H:%M")


def render_roll(view: RollView, console: Console | None = None) -> None:
    console = console or _CONSOLE
    if view.faction is None:
        console.print("[yellow]No factions available to roll.[/yellow]")
        return
    console.print(f"Rolled faction: [bold]{escape(faction_label(view.faction))}[/bold]")
    if view.sleep_forced:
        console.print("[magenta]It is late. The sleep faction claimed this roll.[/magenta]")
    elif view.sleep_window:
        console.print("Sleep window is open, but the sleep faction stayed away.")
    pool = ", ".join(faction_label(item) for item in view.pool)
    console.print(f"Pool ({len(view.pool)}): {escape(pool)}")


def render_protection(view: ProtectionView, tz: Optional[tzinfo] = None, console: Console | None = None) -> None:
    console = console or _CONSOLE
    table = Table(title=f"Protection for {escape(view.player_id)}", show_header=False)
    table.add_column("field")
    table.add_column("value")
    table.add_row("Today", view.today)
    table.add_row("Check deferred", "yes" if view.deferred else "no")
    table.add_row("Last game", format_instant(view.last_game_at, tz))
    table.add_row("Effective last game", format_instant(view.effective_last_game_at, tz))
    if view.abstinence_satisfied:
        table.add_row("Abstinence", "satisfied")
    else:
        table.add_row("Abstinence", f"{format_duration(view.abstinence_remaining_ms)} remaining")
    console.print(table)


def run_command(services: Services, args: argparse.Namespace, console: Console | None = None) -> int:
    console = console or _CONSOLE
    tz = services.protection.tz

    if args.command == "roll":
        render_roll(services.rolls.roll(at=args.at), console)
        return 0
    if args.command == "status":
        render_protection(services.protection.status(args.player), tz, console)
        return 0
    if args.command == "played":
        session = services.protection.record_game(args.player, at=args.at)
        console.print(f"Recorded game for {escape(session.player_id)} at {format_instant(session.last_game_at, tz)}.")
        return 0
    if args.command == "welcome":
        session = services.protection.acknowledge_welcome(args.player)
        console.print(f"Welcome shown to {escape(session.player_id)} on {session.welcome_shown_on}.")
        return 0
    raise ValueError(f"Unknown command: {args.command}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)
