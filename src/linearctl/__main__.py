"""Allow ``python -m linearctl``."""

from linearctl.cli.app import run


if __name__ == "__main__":
    run()
