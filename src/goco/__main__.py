"""
Allow running goco with ``python -m goco``.

Equivalent to the ``goco`` console script.
"""

from goco.cli import main


if __name__ == "__main__":
    main()
