"""Allow ``python -m loxexpr``."""

from loxexpr.cli import main

if __name__ == "__main__":
    main()
