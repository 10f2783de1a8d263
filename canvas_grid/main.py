import argparse
import json
from pathlib import Path

from canvas_grid.canvas_grid import CanvasGrid
from canvas_grid.config import PATHS
from canvas_grid.lib.s0_browser import BrowserConfig, BrowserManager, navigate_to
from canvas_grid.lib.s7_debug import ScanLogger


def _run(grid: CanvasGrid, args) -> dict:
    # sans --hover-delay, chaque mode garde son délai par défaut
    delay = {} if args.hover_delay is None else {"hover_delay": args.hover_delay}

    if args.mode == "scan":
        return grid.scan_all_cells_for_tooltips(
            **delay,
            progress_callback=lambda p: print(f"[SCAN] {p.current}/{p.total} ({p.address.col}, {p.address.row})"),
            sample_colors=args.colors,
        ).to_dict()

    if args.mode == "check":
        return grid.has_any_tooltips(max_cells_to_check=args.max_cells, **delay).to_dict()

    if args.mode == "region":
        start_col, start_row, end_col, end_row = args.region
        return grid.select_cells_and_extract_text(
            start_col, start_row, end_col, end_row,
            include_coordinates=True,
            **delay,
        ).to_dict()

    # sample
    col, row = args.cell
    sample = grid.sample(col, row)
    return {"col": col, "row": row, "rgba": list(sample.rgba), "tier": sample.tier}


def main() -> None:
    parser = argparse.ArgumentParser(description="Scan d'un canvas HTML découpé en grille")

    parser.add_argument("url", help="URL de la page contenant le canvas")
    parser.add_argument("--selector", default="canvas", help="Sélecteur CSS du canvas")
    parser.add_argument("--nth", type=int, default=0, help="Index de l'élément si plusieurs correspondent")
    parser.add_argument("--cols", type=int, help="Nombre de colonnes (grille automatique si absent)")
    parser.add_argument("--rows", type=int, help="Nombre de lignes (grille automatique si absent)")
    parser.add_argument(
        "--mode",
        choices=("scan", "check", "region", "sample"),
        default="scan",
        help="scan: toutes les cellules, check: sondage rapide, region: texte d'une zone, sample: couleur d'une cellule",
    )
    parser.add_argument(
        "--region",
        type=int,
        nargs=4,
        metavar=("START_COL", "START_ROW", "END_COL", "END_ROW"),
        default=(0, 0, 0, 0),
        help="Zone pour --mode region",
    )
    parser.add_argument("--cell", type=int, nargs=2, metavar=("COL", "ROW"), default=(0, 0), help="Cellule pour --mode sample")
    parser.add_argument("--max-cells", type=int, help="Plafond de cellules pour --mode check")
    parser.add_argument("--hover-delay", type=float, help="Délai après survol en secondes (scan, check, region)")
    parser.add_argument("--colors", action="store_true", help="Échantillonner la couleur de chaque cellule (scan)")
    parser.add_argument("--overlay", action="store_true", help="Injecter l'overlay de grille dans la page")
    parser.add_argument("--headless", action="store_true", help="Chrome sans interface")
    parser.add_argument("--log", action="store_true", help="Journaliser cellules et actions en JSONL")
    parser.add_argument("--output", help="Fichier JSON de rapport")
    args = parser.parse_args()

    if (args.cols is None) != (args.rows is None):
        parser.error("--cols et --rows vont ensemble")

    manager = BrowserManager(BrowserConfig(headless=args.headless))
    handle = manager.start()
    logger = ScanLogger(PATHS['logs']) if args.log else None
    try:
        if not navigate_to(handle, args.url):
            print("[FIN] Échec")
            return

        grid = CanvasGrid(handle.driver, logger=logger).locator(args.selector).nth(args.nth)
        if args.cols is not None:
            grid.grid_size(args.cols, args.rows)
        grid.attach(overlay=args.overlay)

        report = _run(grid, args)

        if args.output:
            output = Path(args.output)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
            print(f"[FIN] Rapport écrit: {output}")
        else:
            print(json.dumps(report, indent=2, ensure_ascii=False))

        if logger is not None:
            print(f"[FIN] Session: {logger.save_session()}")
    finally:
        manager.stop()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nArrêt demandé par l'utilisateur.")
    except Exception as e:
        print(f"[ERREUR] Exception non capturée: {e}")
        import traceback
        traceback.print_exc()
