"""Allow ``python -m hostbox.cli``."""

from hostbox.cli.main import main


if __name__ == "__main__":
    main()
