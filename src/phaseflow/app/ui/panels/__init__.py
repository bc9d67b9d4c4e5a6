"""
Auto-import all model editor modules to ensure registration side-effects run.

After importing this package, `registry.list_keys()` and `registry.create_editor()`
will know about all available model types.
"""
from __future__ import annotations

import importlib
import pkgutil

from phaseflow.app.ui.panels import model_editors as _types_pkg

for _module in pkgutil.iter_modules(_types_pkg.__path__, _types_pkg.__name__ + "."):
    importlib.import_module(_module.name)
