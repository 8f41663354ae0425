"""Serialize captured keybindings into hand-auditable ``.kbd`` change-sets."""

__all__ = [
    "changesets",
    "config",
    "formatter",
    "runtime",
]

__version__ = "0.1.0"
