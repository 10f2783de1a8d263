"""
Overlay de grille injecté dans la page, pour l'inspection humaine.
"""

from typing import Callable, Optional

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webelement import WebElement

from canvas_grid.config import OVERLAY_CONFIG
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import CellAddress, Grid, cell_rect


class GridOverlay:
    """
    Dessine la grille (contour + label col,row par cellule) au-dessus du canvas.
    L'overlay suit le canvas via ResizeObserver/MutationObserver.
    """

    ATTACH_SCRIPT = """
    const can = arguments[0];
    const overlayId = arguments[1];
    const cols = arguments[2];
    const rows = arguments[3];
    const stroke = arguments[4];
    const labelColor = arguments[5];

    const host = can.parentElement || can;
    if (!host.style.position) host.style.position = 'relative';

    const previous = document.getElementById(overlayId);
    if (previous) {
        if (previous.__cleanup) previous.__cleanup();
        previous.remove();
    }

    const overlay = document.createElement('div');
    overlay.id = overlayId;
    overlay.style.position = 'absolute';
    overlay.style.display = 'grid';
    overlay.style.pointerEvents = 'none';
    overlay.style.zIndex = '2147483647';
    overlay.style.gridTemplateColumns = `repeat(${cols},1fr)`;
    overlay.style.gridTemplateRows = `repeat(${rows},1fr)`;

    const SVG_NS = 'http://www.w3.org/2000/svg';
    for (let i = 0; i < cols * rows; i++) {
        const row = Math.floor(i / cols);
        const col = i % cols;
        const cell = document.createElement('div');
        cell.style.position = 'relative';

        const svg = document.createElementNS(SVG_NS, 'svg');
        svg.style.cssText = 'width:100%;height:100%;position:absolute;top:0;left:0;overflow:hidden;pointer-events:none';

        const rect = document.createElementNS(SVG_NS, 'rect');
        rect.setAttribute('width', '100%');
        rect.setAttribute('height', '100%');
        rect.setAttribute('fill', 'transparent');
        rect.setAttribute('stroke', stroke);
        rect.setAttribute('stroke-width', '1');
        svg.appendChild(rect);

        const label = document.createElementNS(SVG_NS, 'text');
        label.setAttribute('x', '2');
        label.setAttribute('y', '10');
        label.setAttribute('fill', labelColor);
        label.setAttribute('stroke', 'white');
        label.setAttribute('stroke-width', '0.5');
        label.setAttribute('paint-order', 'stroke');
        label.setAttribute('font-size', '9px');
        label.setAttribute('font-family', 'monospace');
        label.textContent = `${col},${row}`;
        svg.appendChild(label);

        cell.appendChild(svg);
        overlay.appendChild(cell);
    }

    function align() {
        const r = can.getBoundingClientRect();
        const p = host.getBoundingClientRect();
        overlay.style.left = (r.left - p.left) + 'px';
        overlay.style.top = (r.top - p.top) + 'px';
        overlay.style.width = r.width + 'px';
        overlay.style.height = r.height + 'px';
    }

    const ro = new ResizeObserver(align);
    ro.observe(host);
    ro.observe(can);
    const mo = new MutationObserver(align);
    mo.observe(host, { attributes: true, subtree: true });
    overlay.__cleanup = () => { ro.disconnect(); mo.disconnect(); };

    host.appendChild(overlay);
    align();
    return true;
    """

    HIGHLIGHT_SCRIPT = """
    const cellRect = arguments[0];
    const options = arguments[1];
    const SVG_NS = 'http://www.w3.org/2000/svg';

    const svg = document.createElementNS(SVG_NS, 'svg');
    svg.id = 'cell-highlight-' + Date.now();
    svg.style.cssText = 'position:fixed;top:0;left:0;width:100%;height:100%;pointer-events:none;z-index:2147483647';

    const rect = document.createElementNS(SVG_NS, 'rect');
    rect.setAttribute('x', String(cellRect.x));
    rect.setAttribute('y', String(cellRect.y));
    rect.setAttribute('width', String(cellRect.width));
    rect.setAttribute('height', String(cellRect.height));
    rect.setAttribute('fill', 'transparent');
    rect.setAttribute('stroke', options.color);
    rect.setAttribute('stroke-width', String(options.thickness));
    rect.setAttribute('filter', 'drop-shadow(0 0 8px ' + options.color + ')');
    rect.setAttribute('stroke-dasharray', '10 5');
    svg.appendChild(rect);
    document.body.appendChild(svg);

    // pointillés animés jusqu'à expiration
    const start = Date.now();
    const animate = () => {
        const elapsed = Date.now() - start;
        if (elapsed < options.duration) {
            rect.setAttribute('stroke-dashoffset', String((elapsed / 50) % 30));
            requestAnimationFrame(animate);
        } else {
            svg.remove();
        }
    };
    animate();
    return svg.id;
    """

    def __init__(
        self,
        page: PageDriver,
        canvas: Callable[[], WebElement],
        grid: Grid,
        overlay_id: str = OVERLAY_CONFIG['overlay_id'],
    ):
        self.page = page
        self.canvas = canvas
        self.grid = grid
        self.overlay_id = overlay_id
        self._is_attached = False

    @property
    def is_attached(self) -> bool:
        return self._is_attached

    def attach(self) -> bool:
        """Injecte l'overlay (remplace un overlay existant de même id)."""
        element = self.canvas()
        try:
            self.page.evaluate(
                self.ATTACH_SCRIPT,
                element,
                self.overlay_id,
                self.grid.cols,
                self.grid.rows,
                OVERLAY_CONFIG['stroke'],
                OVERLAY_CONFIG['label_color'],
            )
            self._is_attached = True
        except WebDriverException as e:
            print(f"[OVERLAY] Erreur lors de l'injection: {e}")
            self._is_attached = False
        return self._is_attached

    def set_interactive(self, interactive: bool) -> bool:
        """Active/désactive les pointer-events de l'overlay."""
        return self._style("pointerEvents", "auto" if interactive else "none")

    def toggle_visibility(self, show: bool) -> bool:
        """Affiche/masque l'overlay (opacité)."""
        return self._style("opacity", "1" if show else "0")

    def _style(self, prop: str, value: str) -> bool:
        try:
            return bool(self.page.evaluate(
                """
                const el = document.getElementById(arguments[0]);
                if (!el) return false;
                el.style[arguments[1]] = arguments[2];
                return true;
                """,
                self.overlay_id,
                prop,
                value,
            ))
        except WebDriverException as e:
            print(f"[OVERLAY] Erreur lors de la mise à jour du style: {e}")
            return False

    def highlight_cell(
        self,
        col: int,
        row: int,
        color: str = OVERLAY_CONFIG['highlight_color'],
        duration: float = OVERLAY_CONFIG['highlight_duration'],
        thickness: int = OVERLAY_CONFIG['highlight_thickness'],
    ) -> Optional[str]:
        """Encadre temporairement une cellule ; retourne l'id de l'élément SVG."""
        box = self.page.bounding_box(self.canvas())
        rect = cell_rect(box, self.grid, CellAddress(col=col, row=row))
        try:
            return self.page.evaluate(
                self.HIGHLIGHT_SCRIPT,
                rect.to_dict(),
                {"color": color, "duration": int(duration * 1000), "thickness": thickness},
            )
        except WebDriverException as e:
            print(f"[OVERLAY] Erreur lors du surlignage: {e}")
            return None
