import dataclasses

import pytest

from boardview.models import (
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


def _make_board():
    """Two nets, one real component and the dummy, three pins."""
    components = (
        Component("...", component_type=ComponentType.DUMMY, pins=(2,)),
        Component("U1", "LM358", Point(0, 0), Point(5, 5), BoardSide.TOP, MountType.SMD, pins=(0, 1)),
    )
    nets = (
        Net("GND", is_ground=True, number=3, board_side=BoardSide.TOP, pins=(0, 2)),
        Net("UNCONNECTED", pins=(1,)),
    )
    pins = (
        Pin(PinType.COMPONENT, BoardSide.TOP, "1", Point(1, 1), 0.5, net=0, component=1),
        Pin(PinType.NOT_CONNECTED, BoardSide.TOP, "2", Point(2, 1), 0.5, net=1, component=1),
        Pin(PinType.TEST_PAD, BoardSide.TOP, "1", Point(9, 9), 0.0, net=0, component=0),
    )
    return Board(outline=(Point(0, 0), Point(10, 0)), components=components, pins=pins, nets=nets)


def test_component_defaults():
    comp = Component(name="R1")
    assert comp.mfgcode == ""
    assert comp.board_side is BoardSide.BOTH
    assert comp.mount_type is MountType.DIP
    assert comp.component_type is ComponentType.NORMAL
    assert not comp.is_dummy
    assert comp.pins == ()


def test_dummy_component_flag():
    comp = Component(name="...", component_type=ComponentType.DUMMY)
    assert comp.is_dummy


def test_net_defaults():
    net = Net(name="SDA")
    assert not net.is_ground
    assert net.number is None
    assert net.board_side is None
    assert not net.is_unconnected


def test_unconnected_net():
    assert Net(name="UNCONNECTED").is_unconnected


def test_entities_are_frozen():
    net = Net(name="GND")
    with pytest.raises(dataclasses.FrozenInstanceError):
        net.name = "VCC"
    with pytest.raises(dataclasses.FrozenInstanceError):
        Point(1, 2).x = 3


def test_board_navigation():
    board = _make_board()
    pin = board.pins[0]
    assert board.net_of(pin).name == "GND"
    assert board.component_of(pin).name == "U1"

    u1 = board.components[1]
    assert [p.number for p in board.pins_of(u1)] == ["1", "2"]

    gnd = board.find_net("GND")
    assert [p.type for p in board.pins_of(gnd)] == [PinType.COMPONENT, PinType.TEST_PAD]


def test_board_lookups():
    board = _make_board()
    assert board.find_net("VCC") is None
    assert board.find_components("U1") == [board.components[1]]
    assert board.find_components("U2") == []
    assert board.dummy_component.name == "..."
    assert board.unconnected_net.name == "UNCONNECTED"


def test_board_type_default():
    assert _make_board().board_type is BoardType.BRD
