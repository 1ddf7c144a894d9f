import os
import sys
import time
import logging

logging.basicConfig(
    filename="startup.log",
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
start_time = time.perf_counter()
logging.info("App start")

from PyQt5.QtWidgets import QApplication
logging.info(f"After PyQt5 import: {time.perf_counter() - start_time:.2f}s")

from PyQt5.QtGui import QPalette, QColor

from tabata_timer.utils import resource_path
from tabata_timer.app import WorkoutTimer
logging.info(f"After app imports: {time.perf_counter() - start_time:.2f}s")


def main():
    app = QApplication(sys.argv)
    logging.info(f"After QApplication: {time.perf_counter() - start_time:.2f}s")
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window,        QColor(45, 45, 45))
    dark_palette.setColor(QPalette.WindowText,    QColor(225, 225, 225))
    dark_palette.setColor(QPalette.Base,          QColor(30, 30, 30))
    dark_palette.setColor(QPalette.AlternateBase, QColor(45, 45, 45))
    dark_palette.setColor(QPalette.ToolTipBase,   QColor(225, 225, 225))
    dark_palette.setColor(QPalette.ToolTipText,   QColor(225, 225, 225))
    dark_palette.setColor(QPalette.Text,          QColor(225, 225, 225))
    dark_palette.setColor(QPalette.Button,        QColor(45, 45, 45))
    dark_palette.setColor(QPalette.ButtonText,    QColor(225, 225, 225))
    app.setPalette(dark_palette)

    # load external QSS when shipped
    style_file = resource_path("style.qss")
    if os.path.exists(style_file):
        with open(style_file, "r") as f:
            app.setStyleSheet(f.read())
        logging.info(f"After loading QSS: {time.perf_counter() - start_time:.2f}s")

    window = WorkoutTimer()
    logging.info(f"After WorkoutTimer init: {time.perf_counter() - start_time:.2f}s")
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
