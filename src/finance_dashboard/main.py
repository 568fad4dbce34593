#!/usr/bin/env python3
"""Desktop application entry point.

Run with: python -m finance_dashboard.main  (or the finance-dashboard script)
"""

import sys
import logging

from finance_dashboard.config.logging_config import setup_logging


def main() -> None:
    """Launch the desktop application."""
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting Finance Dashboard (Desktop)")

    try:
        from finance_dashboard.ui.app import DesktopApp

        app = DesktopApp()
        app.run()

    except ImportError as e:
        # Tk or matplotlib missing from the interpreter
        logger.error(f"Missing dependency: {e}")
        print("\nError: Missing required dependency.")
        print("Please ensure all dependencies are installed:")
        print("  pip install -e .\n")
        sys.exit(1)

    except Exception as e:
        logger.exception(f"Application error: {e}")
        print(f"\nApplication error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
