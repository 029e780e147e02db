import logging
import sys

from PySide6.QtWidgets import QApplication

from BackEnd.core.store import SqliteStore
from BackEnd.repos.session_repo import SessionLedger
from BackEnd.repos.user_repo import UserDirectory
from BackEnd.services.advisory_service import Advisor
from FrontEnd.ui_main import MainWindow


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    store = SqliteStore()
    directory = UserDirectory(store)
    ledger = SessionLedger(store, directory)
    app = QApplication(sys.argv)
    win = MainWindow(directory, ledger, Advisor())
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
