"""
Editor registry: one parameter editor class per model type value.

Editor modules register themselves on import (see ``panels/__init__.py``);
the system panel builds its stack from ``list_keys()``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from phaseflow.app.ui.panels.model_editors.base import ParamEditorBase

if TYPE_CHECKING:
    from PySide6.QtWidgets import QWidget

_EDITORS: dict[str, type[ParamEditorBase]] = {}


def register_editor(cls: type[ParamEditorBase]) -> type[ParamEditorBase]:
    """Class decorator. The editor's KEY must be a model type value not taken yet."""
    key = getattr(cls, "KEY", None)
    if not key or key == ParamEditorBase.KEY:
        raise ValueError(f"{cls.__name__} must define KEY")
    if key in _EDITORS and _EDITORS[key] is not cls:
        raise ValueError(f"Editor for '{key}' already registered: {_EDITORS[key].__name__}")
    _EDITORS[key] = cls
    return cls


def create_editor(key: str, parent: QWidget | None = None) -> ParamEditorBase:
    try:
        editor_cls = _EDITORS[key]
    except KeyError:
        raise KeyError(f"No editor registered for model '{key}'") from None
    return editor_cls(parent)


def list_keys() -> list[str]:
    """Registered model type values, in registration order."""
    return list(_EDITORS)
