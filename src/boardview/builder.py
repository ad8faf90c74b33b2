from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from boardview.models import (
    COMPONENT_DUMMY_NAME,
    GROUND_NET_NAME,
    NET_UNCONNECTED_NAME,
    Board,
    BoardSide,
    BoardType,
    Component,
    ComponentType,
    MountType,
    Net,
    Pin,
    PinType,
    Point,
)
from boardview.records import BoardFile, MountingSide, NailRecord, PartRecord, PartType, PinRecord

logger = logging.getLogger(__name__)

_BOARD_SIDES = {
    MountingSide.TOP: BoardSide.TOP,
    MountingSide.BOTTOM: BoardSide.BOTTOM,
}


class RecordError(ValueError):
    """A pin record references a part that does not exist."""

    def __init__(self, pin_index: int, part: int, num_parts: int):
        super().__init__(
            f"pin {pin_index} references part {part}, but the board has {num_parts} parts"
        )
        self.pin_index = pin_index
        self.part = part


def build_board(board_file: BoardFile) -> Board:
    outline = _build_outline(board_file.format)

    registry = NetRegistry()
    for nail in board_file.nails:
        registry.add_probe(nail)

    components = _build_components(board_file.parts)
    dummy_slot = len(components)
    components.append(_canonical_dummy())

    pins = _resolve_pins(board_file.pins, components, dummy_slot, registry)
    board = _finalize(outline, components, pins, registry)
    logger.debug(
        "Built board: %d components, %d pins, %d nets, %d outline points",
        len(board.components), len(board.pins), len(board.nets), len(board.outline),
    )
    return board


def is_unconnected_name(name: str) -> bool:
    return not name or name.startswith(NET_UNCONNECTED_NAME)


def is_dummy_name(name: str) -> bool:
    return name.startswith(COMPONENT_DUMMY_NAME)


@dataclass(frozen=True)
class NetRef:
    index: int
    unconnected: bool = False


@dataclass
class _NetRecord:
    name: str
    is_ground: bool = False
    number: int | None = None
    board_side: BoardSide | None = None

    def freeze(self, pins: tuple[int, ...]) -> Net:
        return Net(
            name=self.name,
            is_ground=self.is_ground,
            number=self.number,
            board_side=self.board_side,
            pins=pins,
        )


class NetRegistry:
    """Nets keyed by name, stored in an arena so pins can refer to them by index.

    Index 0 always holds the synthetic UNCONNECTED net.
    """

    UNCONNECTED = 0

    def __init__(self):
        self._records: list[_NetRecord] = [_NetRecord(NET_UNCONNECTED_NAME)]
        self._index: dict[str, int] = {NET_UNCONNECTED_NAME: self.UNCONNECTED}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: str) -> bool:
        return name in self._index

    def __getitem__(self, index: int) -> _NetRecord:
        return self._records[index]

    def add_probe(self, nail: NailRecord) -> None:
        """Annotate the net named by a probe record, creating it if needed.

        Probes on unconnected nets are skipped so that UNCONNECTED1,
        UNCONNECTED2, ... all collapse into the single synthetic net.
        """
        if is_unconnected_name(nail.net):
            logger.debug("Skipping probe %d on unconnected net %r", nail.probe, nail.net)
            return
        record = _NetRecord(
            name=nail.net,
            is_ground=nail.net == GROUND_NET_NAME,
            number=nail.probe,
            board_side=BoardSide.TOP if nail.side == 1 else BoardSide.BOTTOM,
        )
        index = self._index.get(nail.net)
        if index is None:
            self._index[nail.net] = len(self._records)
            self._records.append(record)
        else:
            self._records[index] = record

    def resolve_or_create(self, name: str, board_side: BoardSide | None) -> NetRef:
        """Find the net for ``name``, creating it when unseen.

        ``board_side`` is the side of the component the pin belongs to; it
        seeds nets that carry no side of their own.
        """
        if is_unconnected_name(name):
            return NetRef(self.UNCONNECTED, unconnected=True)
        index = self._index.get(name)
        if index is None:
            index = len(self._records)
            self._index[name] = index
            self._records.append(
                _NetRecord(name=name, is_ground=name == GROUND_NET_NAME, board_side=board_side)
            )
        elif self._records[index].board_side is None:
            self._records[index].board_side = board_side
        return NetRef(index)

    def ordered(self) -> list[int]:
        return sorted(range(len(self._records)), key=lambda i: self._records[i].name)


def _build_outline(points: list[Point]) -> tuple[Point, ...]:
    return tuple(Point(p.x, p.y) for p in points)


def _build_components(parts: list[PartRecord]) -> list[Component]:
    return [_build_component(part) for part in parts]


def _build_component(part: PartRecord) -> Component:
    return Component(
        name=part.name,
        mfgcode=part.mfgcode,
        p1=part.p1,
        p2=part.p2,
        board_side=_BOARD_SIDES.get(part.mounting_side, BoardSide.BOTH),
        mount_type=MountType.SMD if part.part_type is PartType.SMD else MountType.DIP,
        component_type=ComponentType.DUMMY if is_dummy_name(part.name) else ComponentType.NORMAL,
    )


def _canonical_dummy() -> Component:
    return Component(name=COMPONENT_DUMMY_NAME, component_type=ComponentType.DUMMY)


def _resolve_pins(
    pin_records: list[PinRecord],
    components: list[Component],
    dummy_slot: int,
    registry: NetRegistry,
) -> list[Pin]:
    """Resolve pin records against the component arena and the net registry.

    The returned pins hold arena indices; ``_finalize`` maps them to the
    final component and net order.
    """
    pins = []
    pin_number = 0
    current_part = 1
    for pin_index, record in enumerate(pin_records):
        # the canonical dummy sits right after the parsed parts
        if not 1 <= record.part <= dummy_slot:
            raise RecordError(pin_index, record.part, dummy_slot)

        slot = record.part - 1
        pin_type = PinType.COMPONENT
        if components[slot].is_dummy:
            slot = dummy_slot
            pin_type = PinType.TEST_PAD
        component = components[slot]

        net_ref = registry.resolve_or_create(record.net, component.board_side)
        if net_ref.unconnected:
            pin_type = PinType.NOT_CONNECTED

        if pin_type is PinType.TEST_PAD:
            board_side = registry[net_ref.index].board_side
        else:
            board_side = component.board_side

        # records are grouped by part
        pin_number += 1
        if record.part != current_part:
            current_part = record.part
            pin_number = 1

        pins.append(Pin(
            type=pin_type,
            board_side=board_side,
            number=record.snum if record.snum else str(pin_number),
            position=record.pos,
            diameter=record.radius,
            net=net_ref.index,
            component=slot,
        ))
    return pins


def _finalize(
    outline: tuple[Point, ...],
    components: list[Component],
    pins: list[Pin],
    registry: NetRegistry,
) -> Board:
    # raw dummies are never referenced by pins, only the canonical one is kept
    kept = [slot for slot, comp in enumerate(components[:-1]) if not comp.is_dummy]
    kept.append(len(components) - 1)
    dropped = len(components) - len(kept)
    if dropped:
        logger.debug("Dropped %d parsed dummy components in favor of %r", dropped, COMPONENT_DUMMY_NAME)

    component_order = sorted(kept, key=lambda slot: components[slot].name)
    component_slots = {slot: i for i, slot in enumerate(component_order)}
    net_order = registry.ordered()
    net_slots = {index: i for i, index in enumerate(net_order)}

    final_pins = tuple(
        replace(pin, net=net_slots[pin.net], component=component_slots[pin.component])
        for pin in pins
    )
    net_pins: list[list[int]] = [[] for _ in net_order]
    component_pins: list[list[int]] = [[] for _ in component_order]
    for i, pin in enumerate(final_pins):
        net_pins[pin.net].append(i)
        component_pins[pin.component].append(i)

    nets = tuple(
        registry[index].freeze(tuple(net_pins[i])) for i, index in enumerate(net_order)
    )
    final_components = tuple(
        replace(components[slot], pins=tuple(component_pins[i]))
        for i, slot in enumerate(component_order)
    )
    return Board(
        outline=outline,
        components=final_components,
        pins=final_pins,
        nets=nets,
        board_type=BoardType.BRD,
    )
