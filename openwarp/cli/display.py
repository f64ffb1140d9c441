"""Rich display helpers for CLI output."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from openwarp.commands.registry import CommandRegistry
from openwarp.warps.store import WarpStore
from openwarp.warps.warp import Warp


# Shared console instance
console = Console()


def display_welcome(player_name: str) -> None:
    """Display the console session banner.

    Args:
        player_name: Who the session runs as.
    """
    console.print()
    console.print(Panel(f"[bold cyan]OpenWarp[/bold cyan] - {escape(player_name)}", style="cyan"))
    console.print()


def display_error(message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def display_success(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")


def display_info(message: str) -> None:
    console.print(f"[dim]{message}[/dim]")


def display_message(text: str) -> None:
    """Display a message sent to the session's sender."""
    console.print(f"[yellow]>[/yellow] {escape(text)}", highlight=False)


def prompt_input(prompt: str = "> ") -> str:
    """Get input from user with styled prompt.

    Args:
        prompt: Prompt string.

    Returns:
        User input.
    """
    return console.input(f"[bold cyan]{prompt}[/bold cyan]")


def _warp_row(warp: Warp) -> tuple[str, str, str, str]:
    target = warp.target
    world = escape(warp.world_name) if warp.world_name else "[red]<missing>[/red]"
    if not warp.is_resolved:
        world += " [red](unresolved)[/red]"
    coordinates = f"{target.x:g}, {target.y:g}, {target.z:g}"
    return escape(warp.name), escape(warp.owner) or "[dim]-[/dim]", world, coordinates


def build_warp_table(title: str, warps: dict[str, Warp]) -> Table:
    """Build a table of warps.

    Args:
        title: Table title.
        warps: Warps keyed by name.
    """
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Owner", style="white")
    table.add_column("World", style="green")
    table.add_column("Position", justify="right")

    for name in sorted(warps):
        table.add_row(*_warp_row(warps[name]))

    return table


def display_store(store: WarpStore, owner: str | None = None) -> None:
    """Display public warps and private warps per owner.

    Args:
        store: Warp store to show.
        owner: Only show this owner's private warps.
    """
    public = store.public_warps()
    if public and owner is None:
        console.print(build_warp_table("Public Warps", public))

    owners = [owner] if owner is not None else store.owners()
    for name in owners:
        private = store.private_warps(name)
        if private:
            console.print(build_warp_table(f"Private Warps: {name}", private))

    if not public and not any(store.private_warps(name) for name in owners):
        console.print("[dim]No warps found.[/dim]")


def display_commands(registry: CommandRegistry) -> None:
    """Display registered commands with usage and examples."""
    table = Table(title="Commands")
    table.add_column("Path", style="cyan")
    table.add_column("Usage", style="white")
    table.add_column("Arguments", justify="center")
    table.add_column("Examples", style="dim")

    for path, command in registry.commands():
        table.add_row(
            " ".join(path),
            escape(command.usage),
            command.expected_range(),
            "\n".join(command.examples),
        )

    console.print(table)
