"""Module entrypoint to support ``python -m portal_db_client`` invocation."""

from __future__ import annotations

from portal_db_client.cli import run


def main() -> None:
    """Execute the Typer application."""

    run()


if __name__ == "__main__":
    main()
