"""
Command-line entry point: ``pyqt-industry-tree``.
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from pyqt_industry.config import IndustryApiConfig
from pyqt_industry.logging_config import setup_logging
from pyqt_industry.services.industry_api_client import IndustryApiBackend

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyqt-industry-tree",
        description="Edit the industry hierarchy of a business-contact backend.",
    )
    parser.add_argument(
        "--base-url",
        help="Industry API base URL (default: $INDUSTRY_API_BASE_URL or http://localhost:8000)",
    )
    parser.add_argument(
        "--select-id",
        type=int,
        help="Industry id whose main category is opened on startup",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)

    config = IndustryApiConfig.from_env()
    if args.base_url:
        config = replace(config, base_url=args.base_url.rstrip("/"))
    logger.info("Using industry API at %s", config.base_url)

    from PyQt6.QtWidgets import QApplication

    from pyqt_industry.widgets.industry_tree_editor import create_editor_window

    app = QApplication.instance() or QApplication(sys.argv[:1])
    window = create_editor_window(
        IndustryApiBackend.from_config(config),
        selected_industry_id=args.select_id,
    )
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
