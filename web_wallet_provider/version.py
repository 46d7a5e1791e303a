"""
Package version: installed metadata, else the source checkout's pyproject.toml.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "web-wallet-provider"
DEFAULT_VERSION = "0.1.0"


def _read_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        pass

    pyproject = pathlib.Path(__file__).parent.parent / "pyproject.toml"
    try:
        with pyproject.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return DEFAULT_VERSION


__version__ = _read_version()
