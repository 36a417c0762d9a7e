"""Controllers mediating between a host's presentation layer and the engine.

Controllers hold no toolkit code; a Tk, web or notebook front-end drives them
and renders the :class:`~facet_toolkit.core.models.menu_view.MenuView` they
return.
"""

from .filter_menu_controller import FilterMenuController  # noqa: F401

__all__: list[str] = ["FilterMenuController"]
