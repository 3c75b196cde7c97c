"""Entry point for running embedmatch as a module."""

from .cli import app


def main() -> None:
    """Main entry point for the embedmatch CLI application."""
    app()


if __name__ == "__main__":
    main()
