from boardview.models import Board, Component, Net, Pin, PinType


def format_netlist(board: Board, nets_filter: set[str] | None = None) -> str:
    lines = []
    for net in board.nets:
        if nets_filter and net.name not in nets_filter:
            continue
        lines.append(_format_net_header(net))
        for pin in board.pins_of(net):
            lines.append(_format_pin_line(pin, board.component_of(pin)))
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def format_summary(board: Board) -> str:
    names = sorted({c.name for c in board.components if not c.is_dummy})
    net_names = [n.name for n in board.nets if not n.is_unconnected]
    test_pads = sum(1 for p in board.pins if p.type is PinType.TEST_PAD)
    lines = [
        f"Components: {len(board.components)}",
        f"Pins: {len(board.pins)}",
        f"Test pads: {test_pads}",
        f"Nets: {len(board.nets)}",
        "",
        "Names: " + ", ".join(names) if names else "Names: (none)",
        "",
        "Named nets: " + ", ".join(net_names) if net_names else "Named nets: (none)",
    ]
    return "\n".join(lines) + "\n"


def format_components(board: Board) -> str:
    comps = board.components

    name_width = max(len("Name"), max((len(c.name) for c in comps), default=0))
    mfg_width = max(len("Mfg code"), max((len(c.mfgcode) for c in comps), default=0))
    side_width = max(len("Side"), max((len(c.board_side.value) for c in comps), default=0))

    header = f"{'Name':<{name_width}}  {'Mfg code':<{mfg_width}}  {'Side':<{side_width}}  Mount  Pins"
    lines = [header]
    for comp in comps:
        lines.append(
            f"{comp.name:<{name_width}}  {comp.mfgcode:<{mfg_width}}  "
            f"{comp.board_side.value:<{side_width}}  {comp.mount_type.value:<5}  {len(comp.pins)}"
        )
    return "\n".join(lines) + "\n"


def _format_net_header(net: Net) -> str:
    parts = [net.name]
    if net.board_side is not None:
        parts.append(net.board_side.value)
    if net.number is not None:
        parts.append(f"probe {net.number}")
    if net.is_ground:
        parts.append("(ground)")
    return "  ".join(parts)


def _format_pin_line(pin: Pin, component: Component) -> str:
    line = f"  {component.name}:{pin.number}"
    if pin.type is not PinType.COMPONENT:
        line += f"  [{pin.type.value}]"
    return line
