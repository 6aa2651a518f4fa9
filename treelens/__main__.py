"""Module entrypoint for ``python -m treelens``."""

from .cli import main


if __name__ == "__main__":
    main()
