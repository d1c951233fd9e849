"""Installed version of loxexpr."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("loxexpr")
    except PackageNotFoundError:
        # Running from a source checkout that was never installed
        return "0.0.0"
