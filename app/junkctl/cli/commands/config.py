"""Settings commands.

Shows the effective settings and writes a default config file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.markup import escape

from junkctl.cli.types import load_settings
from junkctl.core.config import ConfigError, JunkctlConfig, save_config
from junkctl.core.paths import ensure_config_dir, get_config_path
from junkctl.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Show or initialize junkctl settings.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    config_path = get_config_path()
    config = load_settings()

    if config_path.exists():
        print_info(f"Settings from {config_path}")
    else:
        print_info(f"No config at {config_path}, showing defaults")
    console.print(escape(tomli_w.dumps(config.model_dump())), highlight=False)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        ensure_config_dir()
        saved = save_config(JunkctlConfig(), config_path)
    except (RuntimeError, ConfigError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
