"""Module entrypoint to support ``python -m attio_cli`` invocation."""

from __future__ import annotations

from attio_cli.cli.app import run


def main() -> None:
    """Execute the Typer application."""

    run()


if __name__ == "__main__":
    main()
