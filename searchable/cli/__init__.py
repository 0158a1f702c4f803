"""searchable CLI — Command Line Interface.

Functions:
    main: Точка входа CLI.

Example:
    $ searchable --help
    $ searchable config show
    $ searchable --backend sqlite -i search.db search articles "python"
    $ searchable reindex myapp.models:Article
"""

from searchable.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
