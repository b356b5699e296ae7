"""Agent Primer - repository snapshot for seeding AI agent context files."""

__version__ = "1.0.0"
