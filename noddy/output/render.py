"""Rendering of action responses for the terminal."""

from io import StringIO

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from noddy.models import ActionResponse


def render_json(response: ActionResponse) -> str:
    """Render a response as indented JSON."""
    return response.model_dump_json(indent=2)


def render_human(response: ActionResponse, width: int = 100) -> str:
    """
    Render a response in human-readable format using Rich.
    
    Args:
        response: ActionResponse to render
        width: Console width used for layout
    
    Returns:
        Formatted string suitable for terminal display
    """
    output_buffer = StringIO()
    console = Console(file=output_buffer, width=width, force_terminal=True)
    
    status = Text()
    if response.success:
        status.append("✓ ", style="bold green")
        status.append(response.message, style="green")
    else:
        status.append("✗ ", style="bold red")
        status.append(response.message, style="red")
    console.print(status)
    
    if response.data is not None:
        table = Table(
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
            title=f"{len(response.data)} applications",
            title_style="bold"
        )
        table.add_column("#", justify="right", style="dim")
        table.add_column("Application", style="white")
        for index, name in enumerate(response.data, start=1):
            table.add_row(str(index), name)
        console.print(table)
    
    if response.requires_confirmation and response.fallback_value:
        offer = Text()
        offer.append("Fallback: ", style="bold yellow")
        offer.append(f"{response.fallback_action} ", style="yellow")
        offer.append(response.fallback_value, style="underline")
        console.print(Panel(offer, border_style="yellow", box=box.ROUNDED))
    
    return output_buffer.getvalue()
