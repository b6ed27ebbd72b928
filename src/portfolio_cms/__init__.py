"""Portfolio CMS: content and attachment backend for a personal site."""


def main() -> int:
    """Entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    from portfolio_cms.cli import main as cli_main

    return cli_main()
