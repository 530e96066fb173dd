"""Main CLI application module."""

import typer

from .commands import load, serve, show_config

app = typer.Typer(
    help="Placeholder mirror CLI - run the service and manage the mirrored data",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="serve")(serve)
app.command(name="load")(load)
app.command(name="show-config")(show_config)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
