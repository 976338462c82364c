import logging
from typing import List, Tuple

import typer

import quaternions
from constants import RotationMethod
from controller import TrackballController
from input_gestures import ManualFrameScheduler
from logging_config import setup_logging
from options import TrackballOptions
from projection import BoundingBox

logger = logging.getLogger(__name__)

METHOD_NAMES = ", ".join(m.value for m in RotationMethod)


def parse_point(value: str) -> Tuple[float, float]:
    parts = value.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"'{value}' is not an 'x,y' point.")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        raise ValueError(f"'{value}' is not a valid numeric point.") from None


def replay(controller: TrackballController, scheduler: ManualFrameScheduler,
           points: List[Tuple[float, float]]) -> None:
    """Press at the first point, move through the rest one frame each, release."""
    first, *rest = points
    if not controller.pointer_down(*first):
        logger.warning("Press at %s is outside the viewport, nothing to replay", first)
        return
    for point in rest:
        controller.pointer_move(*point)
        scheduler.tick()
    controller.pointer_up(*points[-1])


def cli(
    points: List[str] = typer.Argument(..., help="Pointer path as 'x,y' points; the first one is the press"),
    method: str = typer.Option("trackball", "--method", "-m", help=f"Rotation method: {METHOD_NAMES}"),
    width: float = typer.Option(400.0, help="Viewport width"),
    height: float = typer.Option(400.0, help="Viewport height"),
    ballsize: float = typer.Option(0.75, help="Ball radius relative to the viewport"),
    border: float = typer.Option(0.0, help="Rounded border width"),
    clamp_elevation: bool = typer.Option(False, "--clamp-elevation", help="Clamp azel elevation"),
    invert_x: bool = typer.Option(False, "--invert-x"),
    invert_y: bool = typer.Option(False, "--invert-y"),
    speed: float = typer.Option(1.0, help="Drag speed multiplier"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    """Replay a drag over a viewport and print the resulting quaternion as 'w x y z'."""
    setup_logging(getattr(logging, log_level.upper(), logging.WARNING))

    try:
        path = [parse_point(p) for p in points]
        options = TrackballOptions(
            rotation_method=method,
            ballsize=ballsize,
            border=border,
            clamp_elevation=clamp_elevation,
            invert_x=invert_x,
            invert_y=invert_y,
            speed=speed,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    scheduler = ManualFrameScheduler()
    controller = TrackballController(
        options,
        bounds=BoundingBox.from_size(width, height),
        scheduler=scheduler,
    )
    replay(controller, scheduler, path)

    w, x, y, z = quaternions.to_wxyz(controller.orientation)
    typer.echo(f"{w:.6f} {x:.6f} {y:.6f} {z:.6f}")


cli_app = typer.Typer(add_completion=False)
cli_app.command()(cli)


def main() -> None:
    cli_app()


if __name__ == '__main__':
    main()
