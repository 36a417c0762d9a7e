"""Facet Toolkit presentation-facing package.

Only toolkit-free controllers live here; rendering is left to the host.
"""

from .controllers.filter_menu_controller import FilterMenuController  # noqa: F401

__all__: list[str] = [
    "FilterMenuController",
]
