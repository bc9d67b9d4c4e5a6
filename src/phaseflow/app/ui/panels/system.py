from __future__ import annotations

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QFormLayout, QPushButton, QStackedWidget,
)

from phaseflow.analysis.linear import format_eigenvalue
from phaseflow.app.state import Store
from phaseflow.app.ui.panels.base import BasePanel
from phaseflow.app.ui.panels.model_editors.base import ParamEditorBase
from phaseflow.app.ui.panels.model_editors.registry import create_editor, list_keys
from phaseflow.model.systems import ModelType


class SystemPanel(BasePanel):
    """
    Panel for configuring the active ODE system.

    Top: parameter editor of the active model (from the registry).
    Middle: eigen-analysis read-out, linear model only.
    Bottom: buttons clearing the trajectories and restoring the defaults.
    """
    def __init__(self, store: Store, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        root = QVBoxLayout(self)

        # parameter editor stack, one page per model type
        self.stack = QStackedWidget(self)
        root.addWidget(self.stack, 0)

        self._editors: dict[ModelType, ParamEditorBase] = {}
        for key in list_keys():
            model_type = ModelType(key)
            editor = create_editor(key, parent=self.stack)
            editor.load(self.store.state.parameters[model_type])
            editor.params_changed.connect(self._on_params_changed)
            self._editors[model_type] = editor
            self.stack.addWidget(editor)

        # linear analysis
        self.group_analysis = QGroupBox(self.tr("Eigenvalues"), self)
        form = QFormLayout(self.group_analysis)
        self.label_l1 = QLabel("-", self.group_analysis)
        self.label_l2 = QLabel("-", self.group_analysis)
        self.label_trace = QLabel("-", self.group_analysis)
        self.label_det = QLabel("-", self.group_analysis)
        self.label_type = QLabel("-", self.group_analysis)
        self.label_stability = QLabel("-", self.group_analysis)
        form.addRow("λ1:", self.label_l1)
        form.addRow("λ2:", self.label_l2)
        form.addRow(self.tr("Trace:"), self.label_trace)
        form.addRow(self.tr("Determinant:"), self.label_det)
        form.addRow(self.tr("Equilibrium:"), self.label_type)
        form.addRow(self.tr("Stability:"), self.label_stability)
        root.addWidget(self.group_analysis, 0)

        self.button_clear = QPushButton(self.tr("Clear Plot"), self)
        self.button_clear.clicked.connect(self.store.clear_trajectories)
        root.addWidget(self.button_clear, 0)

        self.button_reset = QPushButton(self.tr("Reset Defaults"), self)
        self.button_reset.clicked.connect(self._on_reset_clicked)
        root.addWidget(self.button_reset, 0)

        hint = QLabel(self.tr("Click any point on the phase portrait to see how the system evolves from that state."), self)
        hint.setWordWrap(True)
        root.addWidget(hint, 0)

        root.addStretch()

        # wiring
        self.store.model_changed.connect(self._on_model_changed)
        self.store.system_changed.connect(lambda *_: self._refresh_analysis())

        self._on_model_changed(self.store.model_type())

    def _current_editor(self) -> ParamEditorBase:
        return self._editors[self.store.model_type()]

    @Slot(object)
    def _on_model_changed(self, model_type: ModelType) -> None:
        self.stack.setCurrentWidget(self._editors[model_type])
        self._adjust_stacked_widget_height()
        self._refresh_analysis()

    @Slot()
    def _on_reset_clicked(self) -> None:
        self.store.reset()
        for model_type, editor in self._editors.items():
            editor.load(self.store.state.parameters[model_type])

    @Slot()
    def _on_params_changed(self) -> None:
        editor = self.sender()
        if editor is self._current_editor():
            editor.apply(self.store)

    def _refresh_analysis(self) -> None:
        analysis = self.store.linear_analysis()
        self.group_analysis.setVisible(analysis is not None)
        if analysis is None:
            return

        l1, l2 = analysis.eigenvalues
        self.label_l1.setText(format_eigenvalue(l1))
        self.label_l2.setText(format_eigenvalue(l2))
        self.label_trace.setText(f"{analysis.trace:.3f}")
        self.label_det.setText(f"{analysis.determinant:.3f}")
        self.label_type.setText(self.tr(analysis.classification.value))
        self.label_stability.setText(self.tr(analysis.stability.value))

    def _adjust_stacked_widget_height(self) -> None:
        """
        This method is necessary for the stacked widget to resize.

        Without it, the stacked widget will always have the height of the tallest
        editor, which looks bad when switching to a smaller one.
        """
        h = self._current_editor().sizeHint().height()
        self.stack.setFixedHeight(h)
