"""Entry point for `python -m unscramm`.

Enable execution of the unscramm package as a module using the Python -m flag.

Usage:
    python -m unscramm SOURCE TARGET [options]
"""

from unscramm.cli import main

if __name__ == "__main__":
    main()
