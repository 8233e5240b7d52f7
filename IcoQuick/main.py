"""
IcoQuick launcher.

main() builds the Qt application and the converter window and returns the
event loop's exit code. run() is the console/GUI script entry point: it
wraps main() and turns an unexpected exception into a logged critical
record and an error box that points at the log file.
"""

import sys


def main():
    # Logger first so failures while importing Qt are recorded
    from logger import log
    log.info("IcoQuick starting up")

    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import Qt

    # Attributes must be set before the QApplication exists
    try:
        QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
        QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)
    except AttributeError:
        pass

    app = QApplication(sys.argv)
    app.setApplicationName("IcoQuick")
    app.setOrganizationName("IcoQuick")

    try:
        from theme import apply_dark_theme
        apply_dark_theme(app)
    except Exception as e:
        log.warning(f"Dark theme not applied: {e}")

    from config import config
    log.info(f"Settings: {config.config_file}")

    from window import ConverterWindow
    window = ConverterWindow()
    window.show()

    exit_code = app.exec_()
    log.info(f"Event loop finished with code {exit_code}")
    return exit_code


def _report_crash(error):
    log_hint = "the IcoQuick log file"
    try:
        from logger import log
        from config import config
        log.critical(f"Unhandled exception: {error}", exc_info=True)
        log_hint = config.log_file
    except Exception:
        pass

    try:
        from PyQt5.QtWidgets import QApplication, QMessageBox
        if not QApplication.instance():
            QApplication(sys.argv)
        QMessageBox.critical(
            None, "IcoQuick Error",
            f"IcoQuick stopped unexpectedly:\n\n{error}\n\n"
            f"Details were written to:\n{log_hint}"
        )
    except Exception:
        print(f"FATAL: {error}", file=sys.stderr)


def run():
    try:
        exit_code = main()
    except Exception as e:
        _report_crash(e)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    run()
