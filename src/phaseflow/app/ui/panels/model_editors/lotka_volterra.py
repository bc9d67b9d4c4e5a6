from __future__ import annotations

from phaseflow.app.ui.panels.model_editors.base import ParamEditorBase
from phaseflow.app.ui.panels.model_editors.registry import register_editor
from phaseflow.model.systems import EQUATIONS, LotkaVolterraParams, ModelType


@register_editor
class LotkaVolterraEditor(ParamEditorBase):
    KEY = ModelType.LOTKA_VOLTERRA.value
    TITLE = "Predator-Prey"
    EQUATION = EQUATIONS[ModelType.LOTKA_VOLTERRA]

    def _build_ui(self) -> None:
        p = LotkaVolterraParams()
        self._add_spin("a", "Prey growth (a):", min_value=0.0, max_value=100.0, step=0.05, default=p.a)
        self._add_spin("b", "Predation (b):", min_value=0.0, max_value=100.0, step=0.01, default=p.b)
        self._add_spin("c", "Reproduction (c):", min_value=0.0, max_value=100.0, step=0.005, default=p.c)
        self._add_spin("d", "Predator death (d):", min_value=0.0, max_value=100.0, step=0.05, default=p.d)
