from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QMessageBox

_open_dialogs = []


def show_error_dialog(title: str, message: str, parent=None, wait: bool = False):
    """
    Show a non-technical error message. ``wait`` blocks until dismissed;
    otherwise the box opens without entering a nested event loop.
    No-op without a QApplication.
    """
    if QApplication.instance() is None:
        return
    box = QMessageBox(parent)
    box.setIcon(QMessageBox.Warning)
    box.setWindowTitle(title)
    box.setText(message)
    box.setStandardButtons(QMessageBox.Ok)
    if wait:
        box.exec()
        return

    box.setAttribute(Qt.WA_DeleteOnClose)
    _open_dialogs.append(box)
    box.finished.connect(lambda _: _open_dialogs.remove(box) if box in _open_dialogs else None)
    box.open()
