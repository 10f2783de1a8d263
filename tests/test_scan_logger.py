import json

from canvas_grid.lib.s0_coordinates import CellAddress
from canvas_grid.lib.s4_scanner import CellScanResult
from canvas_grid.lib.s7_debug import ScanLogger


def test_logger_writes_jsonl(tmp_path):
    logger = ScanLogger(log_dir=str(tmp_path))
    logger.log_cell(CellScanResult(address=CellAddress(1, 0), has_tooltip=True, tooltip_text="Alpha"))
    logger.log_cell(CellScanResult(address=CellAddress(2, 0), error="RuntimeError: boom"))
    logger.log_action("click", (1, 0))

    lines = (tmp_path / f"cells_{logger.session_id}.jsonl").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert (first["col"], first["row"], first["tooltip_text"]) == (1, 0, "Alpha")

    action = json.loads((tmp_path / f"actions_{logger.session_id}.jsonl").read_text(encoding="utf-8"))
    assert action["action"] == "click"
    assert action["target"] == [1, 0]


def test_logger_summary_and_session(tmp_path):
    logger = ScanLogger(log_dir=str(tmp_path))
    logger.log_cell(CellScanResult(address=CellAddress(0, 0), has_tooltip=True, tooltip_text="A"))
    logger.log_cell(CellScanResult(address=CellAddress(1, 0), error="boom"))
    logger.log_action("drag", (0, 0, 1, 0), success=False, error="boom")

    summary = logger.get_summary()
    assert summary["cells_scanned"] == 2
    assert summary["cells_with_tooltips"] == 1
    assert summary["failed_cells"] == 1
    assert summary["actions"] == 1

    with open(logger.save_session(), encoding="utf-8") as f:
        data = json.load(f)
    assert data["summary"] == summary
    assert len(data["cells"]) == 2
