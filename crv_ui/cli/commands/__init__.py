"""CLI command registrations."""

from crv_ui.cli.commands.guid import register_guid_command
from crv_ui.cli.commands.view import register_view_commands

__all__ = ["register_guid_command", "register_view_commands"]
