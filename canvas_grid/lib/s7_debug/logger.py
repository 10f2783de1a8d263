"""Logger structuré (JSON lines) des scans et des actions."""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from canvas_grid.config import PATHS


@dataclass
class CellLog:
    """Log d'une cellule scannée."""
    timestamp: str
    col: int
    row: int
    has_tooltip: bool
    tooltip_text: Optional[str]
    error: Optional[str] = None


@dataclass
class ActionLog:
    """Log d'une action pointeur."""
    timestamp: str
    action: str
    target: tuple
    success: bool
    error: Optional[str] = None


class ScanLogger:
    """Logger structuré pour le debug des scans."""

    def __init__(self, log_dir: str = PATHS['logs']):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.cells: List[CellLog] = []
        self.actions: List[ActionLog] = []

    def log_cell(self, result) -> None:
        """Log le résultat d'une cellule (CellScanResult)."""
        log = CellLog(
            timestamp=datetime.now().isoformat(),
            col=result.address.col,
            row=result.address.row,
            has_tooltip=result.has_tooltip,
            tooltip_text=result.tooltip_text,
            error=result.error,
        )
        self.cells.append(log)
        self._write_log("cells", asdict(log))

    def log_action(
        self,
        action: str,
        target: tuple,
        success: bool = True,
        error: Optional[str] = None,
    ) -> None:
        """Log une action."""
        log = ActionLog(
            timestamp=datetime.now().isoformat(),
            action=action,
            target=tuple(target),
            success=success,
            error=error,
        )
        self.actions.append(log)
        self._write_log("actions", asdict(log))

    def save_session(self) -> str:
        """Sauvegarde la session complète."""
        session_file = self.log_dir / f"session_{self.session_id}.json"
        data = {
            "session_id": self.session_id,
            "summary": self.get_summary(),
            "cells": [asdict(c) for c in self.cells],
            "actions": [asdict(a) for a in self.actions],
        }
        with open(session_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return str(session_file)

    def get_summary(self) -> Dict[str, Any]:
        """Retourne un résumé de la session."""
        return {
            "session_id": self.session_id,
            "cells_scanned": len(self.cells),
            "cells_with_tooltips": sum(1 for c in self.cells if c.has_tooltip),
            "failed_cells": sum(1 for c in self.cells if c.error),
            "actions": len(self.actions),
        }

    def _write_log(self, log_type: str, data: Dict[str, Any]) -> None:
        """Écrit un log dans un fichier."""
        log_file = self.log_dir / f"{log_type}_{self.session_id}.jsonl"
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")
