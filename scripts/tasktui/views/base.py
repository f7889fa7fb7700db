"""Shared screen behaviour: every key goes to the controller."""

from textual import events
from textual.screen import Screen

from tasktui.controller import Controller, Key, KeyPress

NAMED_KEYS = {
    "enter": Key.ENTER,
    "escape": Key.ESCAPE,
    "tab": Key.TAB,
    "backspace": Key.BACKSPACE,
    "up": Key.UP,
    "down": Key.DOWN,
}


def key_press_from_event(event: events.Key) -> KeyPress | None:
    """Translate a Textual key event; None for keys the controller ignores."""
    if event.key in NAMED_KEYS:
        return KeyPress(NAMED_KEYS[event.key])
    if event.is_printable and event.character:
        return KeyPress(Key.CHAR, event.character)
    return None


class TrackerScreen(Screen):
    """Base screen that renders from, and forwards keys to, the controller."""

    def __init__(self, controller: Controller, **kwargs) -> None:
        super().__init__(**kwargs)
        self._controller = controller

    def on_mount(self) -> None:
        self.refresh_view()

    def on_key(self, event: events.Key) -> None:
        press = key_press_from_event(event)
        if press is None:
            return
        event.stop()
        event.prevent_default()
        self.app.handle_key_press(press)

    def refresh_view(self) -> None:
        """Redraw every widget from controller state."""
        raise NotImplementedError
