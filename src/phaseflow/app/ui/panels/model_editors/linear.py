from __future__ import annotations

from phaseflow.app.ui.panels.model_editors.base import ParamEditorBase
from phaseflow.app.ui.panels.model_editors.registry import register_editor
from phaseflow.model.systems import EQUATIONS, LinearParams, ModelType


@register_editor
class LinearEditor(ParamEditorBase):
    KEY = ModelType.LINEAR.value
    TITLE = "Linear System"
    EQUATION = EQUATIONS[ModelType.LINEAR]

    def _build_ui(self) -> None:
        defaults = LinearParams()
        for key in ("a", "b", "c", "d"):
            self._add_spin(key, f"{key}:", min_value=-100.0, max_value=100.0, default=getattr(defaults, key))
