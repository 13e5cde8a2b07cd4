"""
Built-in processors with auto-discovery.

Every module in this package is imported on first use of the package, and
the ``@builtin_processor`` decorators in them register their classes with
``termshell.core.commands.builtins``. Drop a new module here to add a
built-in command.
"""

import importlib
import logging
import pkgutil
from pathlib import Path

logger = logging.getLogger(__name__)

_current_dir = Path(__file__).parent

for module_info in pkgutil.iter_modules([str(_current_dir)]):
    module_name = module_info.name
    if module_name.startswith("_") or module_info.ispkg:
        continue

    try:
        importlib.import_module(f".{module_name}", package=__package__)
        logger.debug("Auto-discovered processor module: %s", module_name)
    except Exception as e:
        # Log but don't fail - allow other processors to load
        logger.warning(
            "Failed to import processor module %s: %s", module_name, e, exc_info=True
        )
