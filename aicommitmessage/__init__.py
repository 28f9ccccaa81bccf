"""AI commit message generator and prepare-commit-msg hook."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("aicommitmessage")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
