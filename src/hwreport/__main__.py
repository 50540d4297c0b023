"""Allow ``python -m hwreport``."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover - entry point
    main()
