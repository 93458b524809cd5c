"""Allow ``python -m orasid``."""

from orasid.cli import app
from orasid.meta import __app_name__


def main() -> None:
    """Run the orasid CLI."""
    app(prog_name=__app_name__)


if __name__ == "__main__":
    main()
