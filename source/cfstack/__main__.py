"""Allow ``python -m cfstack``."""

from cfstack.cli import main

if __name__ == "__main__":
    main()
