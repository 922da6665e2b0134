"""Allow running as `python -m svc`."""

from svc.cli.app import app

if __name__ == "__main__":
    app()
