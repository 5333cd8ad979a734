from __future__ import annotations

from hidden_comments_gui import MainWindow, main

__all__ = [
    "MainWindow",
    "main",
]


if __name__ == "__main__":
    main()
