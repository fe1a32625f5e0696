"""CLI package for querying the GNSS station API. The Typer app lives in ``cli.app``."""
