"""Allow running versionctl as ``python -m versionctl``."""

from versionctl.cli.app import run

if __name__ == "__main__":
    run()
