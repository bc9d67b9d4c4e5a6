from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QGridLayout,
    QSizePolicy, QDoubleSpinBox, QLineEdit
)

if TYPE_CHECKING:
    from phaseflow.app.state import Store
    from phaseflow.model.systems import SystemParams


class ParamEditorBase(QWidget):
    """Base class for model-specific parameter editors."""
    KEY: str = "base"  # Override in subclass, a ModelType value
    TITLE: str = "Parameters"
    EQUATION: str = ""

    params_changed = Signal()

    def __init__(self, parent: QWidget | None = None):
        super().__init__(parent)
        box = QGroupBox(self.tr(self.TITLE), self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(box)
        self.grid = QGridLayout(box)
        self.grid.setVerticalSpacing(8)
        self._spins: dict[str, QDoubleSpinBox] = {}
        self._lines: dict[str, QLineEdit] = {}
        self._row = 0

        if self.EQUATION:
            hint = QLabel(f"<i>{self.tr(self.EQUATION)}</i>", box)
            hint.setWordWrap(True)
            self.grid.addWidget(hint, self._next_row(), 0, 1, 2)

        self._build_ui()  # subclass defines inputs

    # ---- utilities ----

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def _add_spin(
        self,
        key: str,
        label: str,
        *,
        min_value: float = -1e3,
        max_value: float = 1e3,
        step: float = 0.1,
        default: float = 0.0,
        decimals: int = 3
    ) -> QDoubleSpinBox:
        row = self._next_row()
        lab = QLabel(self.tr(label), self)
        self.grid.addWidget(lab, row, 0)
        w = QDoubleSpinBox(self)
        w.setRange(min_value, max_value)
        w.setSingleStep(step)
        w.setDecimals(decimals)
        w.setValue(default)
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        w.valueChanged.connect(self._relay_changed)
        self.grid.addWidget(w, row, 1)
        self._spins[key] = w
        return w

    def _add_expression(self, key: str, label: str, *, default: str = "", placeholder: str = "") -> QLineEdit:
        row = self._next_row()
        lab = QLabel(self.tr(label), self)
        self.grid.addWidget(lab, row, 0)
        w = QLineEdit(default, self)
        w.setPlaceholderText(placeholder)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        w.textChanged.connect(self._relay_changed)
        self.grid.addWidget(w, row, 1)
        self._lines[key] = w
        return w

    def params(self) -> dict[str, float]:
        return {k: w.value() for k, w in self._spins.items()}

    def expressions(self) -> dict[str, str]:
        return {k: w.text() for k, w in self._lines.items()}

    def load(self, params: SystemParams) -> None:
        """Show the given parameters without re-emitting them."""
        for key, w in self._spins.items():
            w.blockSignals(True)
            w.setValue(getattr(params, key))
            w.blockSignals(False)
        for key, w in self._lines.items():
            w.blockSignals(True)
            w.setText(getattr(params, key))
            w.blockSignals(False)

    @Slot()
    def _relay_changed(self) -> None:
        self.params_changed.emit()

    # ---- API for subclasses ----

    def _build_ui(self) -> None:
        """Create form widgets (use the `_add_spin` / `_add_expression` helpers)."""
        raise NotImplementedError("`_build_ui` must be implemented in subclass.")

    def apply(self, store: Store) -> None:
        """Push the edited values into the store. Numeric editors send their coefficients."""
        store.set_coefficients(self.params())
