"""Allow ``python -m actions_trace``."""

from actions_trace.cli import run


if __name__ == "__main__":  # pragma: no cover
    run()
