from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

NET_UNCONNECTED_NAME = "UNCONNECTED"
COMPONENT_DUMMY_NAME = "..."
GROUND_NET_NAME = "GND"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


class BoardSide(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    BOTH = "both"


class BoardType(Enum):
    BRD = "brd"


class MountType(Enum):
    SMD = "smd"
    DIP = "dip"


class ComponentType(Enum):
    NORMAL = "normal"
    DUMMY = "dummy"


class PinType(Enum):
    COMPONENT = "component"
    TEST_PAD = "test_pad"
    NOT_CONNECTED = "not_connected"


@dataclass(frozen=True)
class Net:
    name: str
    is_ground: bool = False
    number: int | None = None
    board_side: BoardSide | None = None
    # indices into Board.pins
    pins: tuple[int, ...] = ()

    @property
    def is_unconnected(self) -> bool:
        return self.name == NET_UNCONNECTED_NAME


@dataclass(frozen=True)
class Component:
    name: str
    mfgcode: str = ""
    p1: Point = Point(0.0, 0.0)
    p2: Point = Point(0.0, 0.0)
    board_side: BoardSide = BoardSide.BOTH
    mount_type: MountType = MountType.DIP
    component_type: ComponentType = ComponentType.NORMAL
    # indices into Board.pins
    pins: tuple[int, ...] = ()

    @property
    def is_dummy(self) -> bool:
        return self.component_type is ComponentType.DUMMY


@dataclass(frozen=True)
class Pin:
    type: PinType
    board_side: BoardSide | None
    number: str
    position: Point
    diameter: float
    # indices into Board.nets and Board.components
    net: int
    component: int


@dataclass(frozen=True)
class Board:
    """Read-only board model.

    Pins refer to their net and component by index, and nets and components
    list their pins by index into ``pins``.
    """

    outline: tuple[Point, ...]
    components: tuple[Component, ...]
    pins: tuple[Pin, ...]
    nets: tuple[Net, ...]
    board_type: BoardType = BoardType.BRD
    _nets_by_name: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_nets_by_name", {net.name: i for i, net in enumerate(self.nets)})

    def net_of(self, pin: Pin) -> Net:
        return self.nets[pin.net]

    def component_of(self, pin: Pin) -> Component:
        return self.components[pin.component]

    def pins_of(self, owner: Net | Component) -> list[Pin]:
        return [self.pins[i] for i in owner.pins]

    def find_net(self, name: str) -> Net | None:
        index = self._nets_by_name.get(name)
        if index is None:
            return None
        return self.nets[index]

    def find_components(self, name: str) -> list[Component]:
        """Component names are not unique, so every match is returned."""
        return [c for c in self.components if c.name == name]

    @property
    def dummy_component(self) -> Component:
        return next(c for c in self.components if c.is_dummy)

    @property
    def unconnected_net(self) -> Net:
        return self.nets[self._nets_by_name[NET_UNCONNECTED_NAME]]
