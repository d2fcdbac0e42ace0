"""sitefx demo GUI entrypoint."""

from __future__ import annotations

import sys

from PySide6 import QtWidgets

from sitefx.config import SiteFxSettings, load_settings
from sitefx.logging import configure_logging, get_logger
from sitefx.ui.shell import open_window


def main() -> None:
    settings: SiteFxSettings = load_settings()
    configure_logging(settings)
    logger = get_logger("main")

    app = QtWidgets.QApplication(sys.argv)
    window = open_window(settings)
    window.show()
    logger.info("sitefx demo ready")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
