"""Main entry point for ``python -m hostbox``."""

from hostbox.cli.main import main


if __name__ == "__main__":
    main()
