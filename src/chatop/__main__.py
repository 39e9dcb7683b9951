"""Entry point for 'python -m chatop' command."""

from chatop.cli import main

if __name__ == "__main__":
    main()
