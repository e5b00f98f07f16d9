"""Allow running BlogNest with ``python -m blognest``."""

from blognest.cli.main import main

if __name__ == "__main__":
    main()
