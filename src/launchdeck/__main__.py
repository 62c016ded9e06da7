"""Entry point for running launchdeck as a module.

Allows running the application with:
    python -m launchdeck

This delegates to the Typer CLI app.
"""

from launchdeck.cli import app

if __name__ == "__main__":
    app()
