"""Window record models and the registry state value."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from desktop.stack_order import StackOrderAllocator


def window_type(window_id: str) -> str:
    """Return the kind prefix of a window id (text before the first '-')."""
    return window_id.split("-", 1)[0]


class WindowSpec(BaseModel):
    """Caller-supplied description of a window to open."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    title: str
    icon: str = ""
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


class WindowRecord(WindowSpec):
    """One simulated window as held by the registry."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_minimized: bool = False
    is_maximized: bool = False
    is_focused: bool = False
    z_index: int = 0

    def to_view(self) -> dict[str, object]:
        """Serialize with camelCase keys for the rendering layer."""
        return self.model_dump(by_alias=True)


@dataclass
class DesktopState:
    """Record collection plus the ordering-key allocator, committed together."""

    windows: dict[str, WindowRecord] = field(default_factory=dict)
    allocator: StackOrderAllocator = field(default_factory=StackOrderAllocator)

    @property
    def top_z_index(self) -> int:
        return self.allocator.current()

    def fork(self) -> DesktopState:
        """Return an independent copy a transaction can work on."""
        return DesktopState(windows=dict(self.windows), allocator=self.allocator.copy())
