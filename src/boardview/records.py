"""Flat records as produced by a BRD-family board file parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from boardview.models import Point


class MountingSide(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    BOTH = "both"


class PartType(Enum):
    SMD = "smd"
    THROUGH_HOLE = "through_hole"


@dataclass
class PartRecord:
    name: str
    mfgcode: str = ""
    p1: Point = Point(0.0, 0.0)
    p2: Point = Point(0.0, 0.0)
    mounting_side: MountingSide = MountingSide.BOTH
    part_type: PartType = PartType.THROUGH_HOLE


@dataclass
class PinRecord:
    part: int  # 1-based index into BoardFile.parts
    pos: Point
    net: str = ""
    radius: float = 0.0  # only some formats (.fz) carry one
    snum: str | None = None
    side: int = 0


@dataclass
class NailRecord:
    net: str
    probe: int
    side: int  # 1 is top, anything else bottom
    pos: Point = Point(0.0, 0.0)


@dataclass
class BoardFile:
    parts: list[PartRecord] = field(default_factory=list)
    pins: list[PinRecord] = field(default_factory=list)
    nails: list[NailRecord] = field(default_factory=list)
    format: list[Point] = field(default_factory=list)
