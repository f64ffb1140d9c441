"""Main CLI application for OpenWarp."""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from openwarp.cli.display import (
    console,
    display_commands,
    display_error,
    display_info,
    display_message,
    display_store,
    display_success,
    display_welcome,
    prompt_input,
)
from openwarp.cli.host import (
    CONSOLE_NAME,
    ConsolePlayer,
    ConsoleSender,
    GrantPermissionChecker,
    WorldRegistry,
)
from openwarp.config import Settings, get_settings
from openwarp.exceptions import OpenWarpError, WarpLoadError
from openwarp.services.openwarp_service import OpenWarpService
from openwarp.services.warp_loader import load_permissions
from openwarp.warps.types import Target

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="openwarp",
    help="Named warp points with permission-gated teleport commands",
    add_completion=False,
)

DATA_DIR_OPTION = typer.Option(None, "--data-dir", "-d", help="Data directory")


def _settings(data_dir: Optional[Path]) -> Settings:
    settings = get_settings()
    if data_dir is not None:
        settings = settings.model_copy(update={"data_dir": data_dir})
    return settings


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_service(settings: Settings) -> OpenWarpService:
    """Build and enable a service backed by the console host.

    Raises:
        WarpLoadError: If a data file is malformed.
    """
    worlds = WorldRegistry(settings.worlds)
    permissions = GrantPermissionChecker(load_permissions(settings.permissions_path))
    service = OpenWarpService(settings, worlds, permissions)
    service.enable()
    return service


def _make_sender(service: OpenWarpService, player: str, as_console: bool) -> ConsoleSender:
    if as_console:
        return ConsoleSender(CONSOLE_NAME, output=display_message)

    spawn = service.worlds.spawn_location()
    if spawn is None:
        display_error("No worlds configured")
        raise typer.Exit(1)

    sender = ConsolePlayer(player, spawn, output=display_message)
    service.on_player_join(sender)
    return sender


def _start(data_dir: Optional[Path]) -> OpenWarpService:
    settings = _settings(data_dir)
    _configure_logging(settings)
    try:
        return build_service(settings)
    except WarpLoadError as e:
        display_error(str(e))
        raise typer.Exit(1)


@app.command(name="console")
def console_session(
    player: str = typer.Option("player", "--player", "-p", help="Player name to act as"),
    as_console: bool = typer.Option(False, "--console", help="Act as the non-player console"),
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Interactive session dispatching command lines.

    Lines are sent to the command registry (e.g. 'warp list'). Session
    commands start with '/': /help, /where, /tp WORLD X Y Z, /save, /quit.
    """
    service = _start(data_dir)
    sender = _make_sender(service, player, as_console)

    display_welcome(sender.name)
    display_info("Type commands such as 'warp list'. Use /quit to exit, /help for commands.")

    try:
        while True:
            console.print()
            try:
                line = prompt_input()
            except (EOFError, KeyboardInterrupt):
                break

            if not line.strip():
                continue

            if line.startswith("/"):
                tokens = line[1:].split()
                cmd = tokens[0].lower() if tokens else ""
                if cmd in ("quit", "exit", "q"):
                    break
                elif cmd == "help":
                    display_commands(service.registry)
                    continue
                elif cmd in ("where", "loc"):
                    _show_location(sender)
                    continue
                elif cmd == "tp":
                    _teleport(service, sender, tokens[1:])
                    continue
                elif cmd == "save":
                    if service.save():
                        display_success("Warps saved!")
                    else:
                        display_error("Some warps could not be saved; see the log")
                    continue

            service.handle_line(sender, line)
    finally:
        display_info("Saving and exiting...")
        service.disable()


def _show_location(sender: ConsoleSender) -> None:
    if not isinstance(sender, ConsolePlayer):
        display_info("The console has no location")
        return
    location = sender.location
    display_info(
        f"{sender.name} is at ({location.x:g}, {location.y:g}, {location.z:g}) "
        f"in world {location.world_name}"
    )


def _teleport(service: OpenWarpService, sender: ConsoleSender, args: list[str]) -> None:
    if not isinstance(sender, ConsolePlayer):
        display_error("The console cannot move")
        return
    if len(args) != 4:
        display_error("Usage: /tp WORLD X Y Z")
        return

    world = service.worlds.get_world(args[0])
    if world is None:
        display_error(f"Unknown world: {args[0]} (known: {', '.join(service.worlds.names)})")
        return
    try:
        x, y, z = (float(value) for value in args[1:])
    except ValueError:
        display_error("Coordinates must be numbers")
        return

    sender.teleport(Target(world=world, x=x, y=y, z=z))
    _show_location(sender)


@app.command()
def run(
    label: str = typer.Argument(..., help="Command label, e.g. 'warp'"),
    args: Optional[list[str]] = typer.Argument(None, help="Command arguments"),
    player: str = typer.Option("player", "--player", "-p", help="Player name to act as"),
    as_console: bool = typer.Option(False, "--console", help="Act as the non-player console"),
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Dispatch a single command line, then save."""
    service = _start(data_dir)
    sender = _make_sender(service, player, as_console)

    try:
        result = service.on_command(sender, label, args or [])
    finally:
        service.disable()

    if not result.succeeded:
        raise typer.Exit(1)


@app.command(name="list")
def list_warps(
    owner: Optional[str] = typer.Option(None, "--owner", "-o", help="Only this owner's private warps"),
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """List stored warps."""
    service = _start(data_dir)
    if owner is not None:
        service.register_player(owner)
    display_store(service.store, owner=owner)


@app.command()
def check(
    data_dir: Optional[Path] = DATA_DIR_OPTION,
) -> None:
    """Report warps whose world cannot be resolved."""
    service = _start(data_dir)

    unresolved = service.store.unresolved()
    if not unresolved:
        display_success(f"All warps resolve ({len(service.store.all_warps())} checked)")
        return

    for warp in sorted(unresolved, key=lambda w: (w.owner, w.name)):
        reason = getattr(warp.target, "reason", "")
        owner = f" (owner {warp.owner})" if warp.owner else ""
        display_error(f"{warp.name}{owner}: {warp.detail_string()} - {reason}")
    raise typer.Exit(1)


@app.callback()
def main() -> None:
    """OpenWarp - named warp points.

    Use 'openwarp console' for an interactive session or 'openwarp run warp list'
    for a single command.
    """
    pass


if __name__ == "__main__":
    try:
        app()
    except OpenWarpError as e:
        display_error(str(e))
        raise SystemExit(1)
