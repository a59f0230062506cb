"""
Main CLI application using Typer.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.table import Table

from ..adapters.file_repository import FileScheduleRepository
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingEngineError
from ..domain.models import get_day_name
from ..services.booking_service import BookingService

app = typer.Typer(
    name="bookingslots",
    help="Consultar horarios disponibles y validar reservas de citas",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Availability and booking checks for a single business.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _build_service(config: AppConfig, appointments: Optional[Path]) -> BookingService:
    repository = FileScheduleRepository(config=config, appointments_file=appointments)
    return BookingService(repository=repository)


@app.command()
def week(
    config_file: ConfigOption = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD). Defaults to today.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    appointments: Annotated[Optional[Path], typer.Option("--appointments", "-a", help="JSON file with booked appointments")] = None,
    only_free: Annotated[bool, typer.Option("--only-free", help="Show only free slots.")] = False,
):
    """
    Show the slots of seven days starting at --start.

    Examples:

        bookingslots week
        bookingslots week --start 2024-11-25 --duration 45
        bookingslots week -a appointments.json --only-free
    """
    try:
        config = _load_config(config_file)
        tz = config.timezone

        if start:
            try:
                start_date = pendulum.from_format(start, "YYYY-MM-DD", tz=tz).date()
            except ValueError as e:
                console.print(f"[red]Error al leer la fecha de inicio: {e}[/red]")
                raise typer.Exit(1)
        else:
            start_date = pendulum.now(tz).date()

        service = _build_service(config, appointments)
        days = asyncio.run(service.weekly_availability(start_date, duration=duration))

        console.print()
        console.print(f"[bold cyan]🗓️  {config.business_name}[/bold cyan] ({tz})")
        console.print()

        for day in days:
            header = f"[bold]{day.day_name} {day.date.format('DD/MM/YYYY')}[/bold]"
            if not day.slots:
                console.print(f"{header}  [dim]cerrado / sin horarios[/dim]")
                continue

            slots = day.available_slots if only_free else day.slots
            rendered = " ".join(
                f"[green]{slot.start_time}[/green]" if slot.available
                else f"[red strike]{slot.start_time}[/red strike]"
                for slot in slots
            )
            free = len(day.available_slots)
            console.print(f"{header}  ({free}/{len(day.slots)} libres)")
            console.print(f"  {rendered or '[dim]sin horarios libres[/dim]'}")

        console.print()

    except (FileNotFoundError, ValueError, BookingEngineError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def check(
    at: Annotated[str, typer.Argument(help="Requested start, e.g. '2024-11-25 10:00'")],
    config_file: ConfigOption = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Appointment duration in minutes")] = None,
    appointments: Annotated[Optional[Path], typer.Option("--appointments", "-a", help="JSON file with booked appointments")] = None,
):
    """
    Check whether an appointment may be booked at the given time.
    """
    try:
        config = _load_config(config_file)
        service = _build_service(config, appointments)

        try:
            start_at = pendulum.parse(at, tz=config.timezone)
        except ValueError as e:
            console.print(f"[red]Error al leer la fecha de la cita: {e}[/red]")
            raise typer.Exit(1)

        decision = asyncio.run(service.check_appointment(start_at, duration=duration))

        if decision.is_valid:
            console.print(f"\n[bold green]✓ Reserva posible:[/bold green] {start_at.format('DD/MM/YYYY HH:mm')}\n")
        else:
            console.print(f"\n[bold red]✗ Reserva rechazada:[/bold red] {decision.reason}\n")
            raise typer.Exit(2)

    except (FileNotFoundError, ValueError, BookingEngineError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def hours(config_file: ConfigOption = None):
    """
    List the configured weekly hours and booking settings.
    """
    try:
        config = _load_config(config_file)

        table = Table(
            title=f"Horario semanal - {config.business_name}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Día", style="bold yellow")
        table.add_column("Abierto")
        table.add_column("Horario", style="dim")

        for hour in sorted(config.weekly_hours, key=lambda h: (h.day_of_week - 1) % 7):
            table.add_row(
                get_day_name(hour.day_of_week),
                "sí" if hour.is_open else "no",
                f"{hour.open_time} - {hour.close_time}" if hour.is_open else "-"
            )

        settings = config.settings
        console.print()
        console.print(table)
        console.print(
            f"Duración: {settings.default_duration} min | Buffer: {settings.buffer_time} min | "
            f"Anticipación: {settings.min_advance_booking_hours:g} h - {settings.max_advance_booking_days} días | "
            f"Mismo día: {'sí' if settings.allow_same_day_booking else 'no'}"
        )
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def special_hours(config_file: ConfigOption = None):
    """
    List the configured special hours (holidays and other exceptions).
    """
    try:
        config = _load_config(config_file)

        if not config.special_hours:
            console.print("[yellow]No hay horarios especiales configurados.[/yellow]")
            return

        table = Table(title="Horarios especiales", show_header=True, header_style="bold cyan")
        table.add_column("Fecha", style="bold yellow")
        table.add_column("Abierto")
        table.add_column("Horario", style="dim")
        table.add_column("Motivo")

        for special in sorted(config.special_hours, key=lambda s: s.date):
            table.add_row(
                special.date.isoformat(),
                "sí" if special.is_open else "no",
                f"{special.open_time} - {special.close_time}" if special.is_open else "-",
                special.reason or ""
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
