from __future__ import annotations

import logging
import sys
from pathlib import Path

from PySide6 import QtWidgets

from hidden_comments_core.paths import default_vault_root

from .main_window import MainWindow


def _pick_vault(argv: list[str]) -> Path | None:
    if len(argv) > 1:
        return Path(argv[1]).expanduser().resolve()
    selected = QtWidgets.QFileDialog.getExistingDirectory(
        None, "Open vault", str(default_vault_root())
    )
    return Path(selected) if selected else None


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    app = QtWidgets.QApplication(sys.argv)
    vault_root = _pick_vault(sys.argv)
    if vault_root is None or not vault_root.is_dir():
        logging.error("No vault directory selected.")
        sys.exit(1)
    window = MainWindow(vault_root)
    window.resize(1200, 800)
    window.show()
    window.start()
    sys.exit(app.exec())
