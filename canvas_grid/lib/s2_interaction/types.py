"""Types pour le module s2_interaction."""

from dataclasses import dataclass

from canvas_grid.config import DRAG_CONFIG, HOVER_CONFIG, SCAN_HOVER_CONFIG, TOOLTIP_HOVER_CONFIG, WAIT_TIMES


@dataclass(frozen=True)
class HoverProfile:
    """Paramètres du survol réaliste (délais en secondes)."""
    move_steps: int = HOVER_CONFIG['move_steps']
    jitter: float = HOVER_CONFIG['jitter']
    dwell: float = HOVER_CONFIG['dwell']
    step_pause: float = WAIT_TIMES['move_step']
    jitter_before: float = WAIT_TIMES['jitter_before']
    jitter_after: float = WAIT_TIMES['jitter_after']

    @classmethod
    def from_config(cls, config: dict) -> "HoverProfile":
        return cls(move_steps=config['move_steps'], jitter=config['jitter'], dwell=config['dwell'])


DEFAULT_HOVER = HoverProfile()
TOOLTIP_HOVER = HoverProfile.from_config(TOOLTIP_HOVER_CONFIG)
SCAN_HOVER = HoverProfile.from_config(SCAN_HOVER_CONFIG)


@dataclass(frozen=True)
class DragProfile:
    """Paramètres du glisser-déposer."""
    steps: int = DRAG_CONFIG['steps']
    settle: float = DRAG_CONFIG['settle']
    step_pause: float = DRAG_CONFIG['step_pause']
