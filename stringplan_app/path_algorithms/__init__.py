# stringplan_app/path_algorithms/__init__.py

import pkgutil
import importlib
import inspect
from typing import Dict

from .base import StringArtAlgorithm

ALGORITHMS: Dict[str, StringArtAlgorithm] = {}

# --- Auto-discover all modules in this package ---
package_name = __name__  # "stringplan_app.path_algorithms"
package_path = __path__  # filesystem path to this directory

for finder, module_name, is_pkg in pkgutil.iter_modules(package_path):
    if module_name in ("base", "__init__"):
        continue  # skip base and this init
    full_name = f"{package_name}.{module_name}"
    module = importlib.import_module(full_name)

    # Find all concrete subclasses of StringArtAlgorithm in the module
    for _, cls in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(cls, StringArtAlgorithm)
            and cls is not StringArtAlgorithm
            and not inspect.isabstract(cls)
        ):
            # e.g. module greedy → key "greedy"
            key = module_name.replace("_", "-")
            ALGORITHMS[key] = cls()
