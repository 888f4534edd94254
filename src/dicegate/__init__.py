"""dicegate — JSON-RPC tool gateway with per-caller token-bucket admission."""

from __future__ import annotations

__version__ = "0.1.0"
