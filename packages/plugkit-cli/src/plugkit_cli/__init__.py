"""plugkit-cli: Command line interface for plugkit."""

from __future__ import annotations

__version__ = "0.1.0"
