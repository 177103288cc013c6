"""Entry point for 'python -m onboard' command."""

from onboard.cli import main

if __name__ == "__main__":
    main()
