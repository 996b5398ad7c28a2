"""weft CLI commands."""

from __future__ import annotations

from weft.cli.commands.graph import affected, order
from weft.cli.commands.publish import publish
from weft.cli.commands.vendor import vendor

__all__ = ["affected", "order", "publish", "vendor"]
