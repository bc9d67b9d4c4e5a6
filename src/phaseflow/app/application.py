"""
QApplication factory and the identity used for persisted settings.

Settings are stored as INI files under the organization/application names
below; the main window keeps its geometry there.
"""
import os
import sys

from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

ORG_ID = "phaseflow"
APP_ID = "phaseflow"
ORG_DOMAIN = "phaseflow.local"

VISIBLE_APP_NAME = "PhaseFlow"
VISIBLE_SUBTITLE = "Multi-model ODE Explorer"

SETTINGS_GEOMETRY = "window/geometry"


def create_app() -> QApplication:
    """Return the running QApplication, creating and naming it on first use."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setOrganizationDomain(ORG_DOMAIN)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))
    return app
