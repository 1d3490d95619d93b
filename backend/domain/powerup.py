"""
Power-up records: collectibles on the board and the effect they leave behind.
"""

from dataclasses import dataclass

from .grid import Position


@dataclass(frozen=True)
class PowerUp:
    position: Position
    kind: str
    created_at: float

    def age(self, now: float) -> float:
        return now - self.created_at

    def to_dict(self) -> dict:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "type": self.kind,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class ActivePower:
    """A timed speed effect; the reversion fires once `now >= expires_at`."""

    kind: str
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at

    def to_dict(self) -> dict:
        return {"type": self.kind, "expires_at": self.expires_at}
