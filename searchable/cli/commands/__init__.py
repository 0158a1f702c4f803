"""CLI команды searchable."""
