"""CLI commands for churchbooks."""
