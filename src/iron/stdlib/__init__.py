"""Standard library modules for Iron.

Python-implemented modules that can be imported into Iron code by name,
`(import "core")`. The core module is also bound in every interpreter's
global scope.

Available modules:
- core: Traversal library (not, push, do, foreach, map)
"""

__all__ = ["get_stdlib_module", "list_stdlib_modules"]

from . import core


# Registry of available stdlib modules
_STDLIB_MODULES = {
    "core": core.create_module,
}

# Cache for created modules
_module_cache: dict[str, dict] = {}


def get_stdlib_module(name: str):
    """Get a standard library module by name.

    Args:
        name: Module name (e.g., "core")

    Returns:
        Dict of Iron names to values, or None if not found

    Example:
        core = get_stdlib_module("core")
    """
    if name not in _STDLIB_MODULES:
        return None

    if name not in _module_cache:
        _module_cache[name] = _STDLIB_MODULES[name]()
    return _module_cache[name]


def list_stdlib_modules() -> list[str]:
    """Get list of available stdlib module names."""
    return list(_STDLIB_MODULES.keys())
