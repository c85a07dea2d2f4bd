from dataclasses import dataclass


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float
    select: bool = False  # selection modifier (Ctrl) held


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    pass


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class RemoveAt:
    x: float
    y: float


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


Command = PointerDown | PointerMove | PointerUp | PointerLeave | RemoveAt | Undo | Redo
