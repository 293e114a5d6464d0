"""f2bs installer: fetch the latest f2bs release and place it on PATH."""

__version__ = "0.1.0"
