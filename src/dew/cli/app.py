"""Main CLI application."""

import typer

from dew.cli.commands import config, serve, snapshot

app = typer.Typer(
    name="dew",
    help="Dew - shared todo list server",
    no_args_is_help=True,
)

serve.register(app)
snapshot.register(app)
config.register(app)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
