"""scribe CLI - write OS images to SD cards and USB flash drives."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Optional

import typer

from .config import resolve_settings
from .errors import ScribeError
from .log import get_logger, setup_logging
from .output import CliOutput, Output

app = typer.Typer(
    name="scribe",
    help="""scribe - write OS images to SD cards and USB flash drives

Only unmounted flash drives and SD cards of 36 GiB or less are offered
by default. CD-ROMs and loop devices are never offered.

Quick start:
  scribe list                  # Devices you can write to
  scribe list --show-all       # Include internal, large or mounted devices
  scribe write raspios.img     # Pick a device and write the image
""",
    add_completion=False,
    no_args_is_help=True,
)

logger = get_logger(__name__)


def _run(action: Callable[[Output], int]) -> None:
    """Run a command body, mapping errors to messages and exit codes."""
    out = CliOutput()
    try:
        code = action(out)
    except KeyboardInterrupt:
        out.warn("Aborted.")
        raise typer.Exit(130)
    except ScribeError as e:
        logger.debug("Command failed", exc_info=True)
        out.error_with_recovery(e.error_type, str(e), e.context or None, e.recovery)
        raise typer.Exit(1) from e
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        out.error(f"Unexpected error: {e}")
        raise typer.Exit(3) from e
    raise typer.Exit(code)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    sys_block: Optional[str] = typer.Option(
        None, "--sys-block", help="Block device directory [env: SCRIBE_SYS_BLOCK]"
    ),
    mounts: Optional[str] = typer.Option(
        None, "--mounts", help="Mount table file [env: SCRIBE_MOUNTS]"
    ),
    dev_dir: Optional[str] = typer.Option(
        None, "--dev-dir", help="Device file directory [env: SCRIBE_DEV_DIR]"
    ),
):
    setup_logging(verbose)
    ctx.obj = resolve_settings(sys_block=sys_block, mounts=mounts, dev_dir=dev_dir)


@app.command("list")
def list_command(
    ctx: typer.Context,
    show_all: bool = typer.Option(
        False, "--show-all", "-a", help="Include internal, large, mounted and read-only devices"
    ),
):
    """List block devices that can be written to."""
    from .burn import cmd_list

    _run(lambda out: cmd_list(ctx.obj, out, show_all=show_all))


@app.command("write")
def write_command(
    ctx: typer.Context,
    image: Path = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="Image file to write"
    ),
    show_all: bool = typer.Option(
        False, "--show-all", "-a", help="Offer internal, large, mounted and read-only devices"
    ),
    device: Optional[str] = typer.Option(
        None, "--device", "-d", help="Write to this device instead of asking (e.g. /dev/sdb)"
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not confirm an explicit --device"),
):
    """Write an image to a device chosen from an interactive menu."""
    from .burn import cmd_write

    _run(
        lambda out: cmd_write(
            ctx.obj, out, image, show_all=show_all, device=device, assume_yes=yes
        )
    )


def main() -> None:
    """Console script entry point."""
    app()
