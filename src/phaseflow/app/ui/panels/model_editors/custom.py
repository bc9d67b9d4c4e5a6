from __future__ import annotations

from typing import TYPE_CHECKING

from phaseflow.app.ui.panels.model_editors.base import ParamEditorBase
from phaseflow.app.ui.panels.model_editors.registry import register_editor
from phaseflow.model.systems import EQUATIONS, CustomParams, ModelType

if TYPE_CHECKING:
    from phaseflow.app.state import Store


@register_editor
class CustomEditor(ParamEditorBase):
    """Free-form system. An invalid expression leaves the portrait without motion."""
    KEY = ModelType.CUSTOM.value
    TITLE = "Custom System"
    EQUATION = EQUATIONS[ModelType.CUSTOM]

    def _build_ui(self) -> None:
        p = CustomParams()
        self._add_expression("dx", "dx/dt:", default=p.dx, placeholder="e.g. y")
        self._add_expression("dy", "dy/dt:", default=p.dy, placeholder="e.g. -x")

    def apply(self, store: Store) -> None:
        texts = self.expressions()
        store.set_expressions(texts["dx"], texts["dy"])
