"""Console view state.

The admin console shows its navigation, sidebar and main regions only while
the session is valid and falls back to a login dialog otherwise. The response
interceptor drives these two transitions; this module only holds the state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable


class Region(str, Enum):
    NAVBAR_CONTAINER = "navbar-container"
    SIDEBAR = "sidebar"
    MAIN = "main"


LOGIN_MODAL = "modal-login"
USERNAME_FIELD = "username"


class ViewState(str, Enum):
    UNKNOWN = "unknown"
    CONSOLE = "console"
    LOGIN = "login"


ViewListener = Callable[["ConsoleView"], None]


@dataclass
class ConsoleView:
    """Visibility of the console regions and the login dialog."""

    regions: dict[Region, bool] = field(default_factory=lambda: {region: False for region in Region})
    login_modal_shown: bool = False
    focused_field: str | None = None
    state: ViewState = ViewState.UNKNOWN
    listeners: list[ViewListener] = field(default_factory=list)

    def is_visible(self, region: Region) -> bool:
        return self.regions[region]

    def show_console(self) -> None:
        for region in Region:
            self.regions[region] = True
        self.login_modal_shown = False
        self.state = ViewState.CONSOLE
        self._notify()

    def show_login(self) -> None:
        for region in Region:
            self.regions[region] = False
        self.login_modal_shown = True
        self.focused_field = USERNAME_FIELD
        self.state = ViewState.LOGIN
        self._notify()

    def subscribe(self, listener: ViewListener) -> None:
        self.listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self.listeners):
            listener(self)
