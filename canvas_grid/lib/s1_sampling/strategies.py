"""Paliers d'échantillonnage : lecture directe des pixels puis capture rendue."""

from __future__ import annotations

import io
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webelement import WebElement

from canvas_grid.config import SAMPLER_CONFIG
from canvas_grid.errors import SamplingError, SamplingSoftFailure
from canvas_grid.lib.s0_browser.page import PageDriver
from canvas_grid.lib.s0_coordinates import CellAddress, CellRect, Grid, cell_rect

from .color import average_rgba
from .types import RGBA, TIER_CAPTURE, TIER_DIRECT


class DirectPixelRead:
    """Palier 1 : lecture du voisinage du centre dans le contexte WebGL/2D du canvas."""

    name = TIER_DIRECT

    # Renvoie les pixels bruts, la moyenne est faite côté Python
    READ_SCRIPT = """
    const canvas = arguments[0];
    const cols = arguments[1];
    const rows = arguments[2];
    const col = arguments[3];
    const row = arguments[4];
    const radius = arguments[5];
    const done = arguments[arguments.length - 1];

    try {
        const rect = canvas.getBoundingClientRect();
        const clientW = canvas.clientWidth || rect.width;
        const clientH = canvas.clientHeight || rect.height;
        if (!clientW || !clientH || !canvas.width || !canvas.height) {
            done({ ok: false, error: 'canvas sans surface' });
            return;
        }

        const cx = Math.round((clientW / cols) * (col + 0.5) * (canvas.width / clientW));
        const cy = Math.round((clientH / rows) * (row + 0.5) * (canvas.height / clientH));
        const clampX = (v) => Math.min(canvas.width - 1, Math.max(0, v));
        const clampY = (v) => Math.min(canvas.height - 1, Math.max(0, v));

        const collect = (read) => {
            const pixels = [];
            for (let dy = -radius; dy <= radius; dy++) {
                for (let dx = -radius; dx <= radius; dx++) {
                    pixels.push(read(clampX(cx + dx), clampY(cy + dy)));
                }
            }
            return pixels;
        };

        const gl = canvas.getContext('webgl2') || canvas.getContext('webgl');
        if (gl) {
            requestAnimationFrame(() => {
                try {
                    const buf = new Uint8Array(4);
                    done({ ok: true, pixels: collect((x, y) => {
                        // framebuffer GL : origine en bas à gauche
                        gl.readPixels(x, canvas.height - 1 - y, 1, 1, gl.RGBA, gl.UNSIGNED_BYTE, buf);
                        return Array.from(buf);
                    }) });
                } catch (e) {
                    done({ ok: false, error: String(e) });
                }
            });
            return;
        }

        const ctx = canvas.getContext('2d');
        if (!ctx) {
            done({ ok: false, error: 'aucun contexte de rendu' });
            return;
        }
        requestAnimationFrame(() => {
            try {
                done({ ok: true, pixels: collect((x, y) => Array.from(ctx.getImageData(x, y, 1, 1).data)) });
            } catch (e) {
                done({ ok: false, error: String(e) });
            }
        });
    } catch (e) {
        done({ ok: false, error: String(e) });
    }
    """

    def __init__(
        self,
        page: PageDriver,
        radius: int = SAMPLER_CONFIG['neighborhood_radius'],
        script_timeout: float = SAMPLER_CONFIG['script_timeout'],
    ):
        self.page = page
        self.radius = radius
        self.script_timeout = script_timeout

    def read(self, element: WebElement, grid: Grid, address: CellAddress) -> RGBA:
        try:
            response = self.page.evaluate_async(
                self.READ_SCRIPT,
                element,
                grid.cols,
                grid.rows,
                address.col,
                address.row,
                self.radius,
                timeout=self.script_timeout,
            )
        except WebDriverException as e:
            raise SamplingSoftFailure(f"lecture directe impossible: {e}") from e

        if not isinstance(response, dict) or not response.get("ok"):
            error = response.get("error") if isinstance(response, dict) else "réponse JS invalide"
            raise SamplingSoftFailure(f"lecture directe impossible: {error}")

        pixels = response.get("pixels") or []
        expected = (2 * self.radius + 1) ** 2
        if len(pixels) != expected:
            raise SamplingSoftFailure(f"{len(pixels)} pixels lus, {expected} attendus")
        return average_rgba(pixels)


class RegionCapture:
    """Palier 2 : capture de l'image rendue de la cellule et moyenne de 5 points fixes."""

    name = TIER_CAPTURE

    def __init__(
        self,
        page: PageDriver,
        points: Optional[Sequence[Tuple[float, float]]] = None,
        min_size: float = SAMPLER_CONFIG['min_capture_size'],
    ):
        self.page = page
        self.points = list(points or SAMPLER_CONFIG['capture_points'])
        self.min_size = min_size

    def clip_for(self, element: WebElement, grid: Grid, address: CellAddress) -> CellRect:
        """Zone capturée : rectangle pavé de la cellule, au minimum min_size × min_size.

        La capture ne couvre que le viewport : le canvas y est ramené avant la mesure.
        """
        self.page.scroll_into_view(element)
        rect = cell_rect(self.page.bounding_box(element), grid, address)
        return CellRect(
            x=rect.x,
            y=rect.y,
            width=max(self.min_size, rect.width),
            height=max(self.min_size, rect.height),
        )

    def read(self, element: WebElement, grid: Grid, address: CellAddress) -> RGBA:
        try:
            clip = self.clip_for(element, grid, address)
            png = self.page.capture_region(clip)
            image = Image.open(io.BytesIO(png)).convert("RGBA")
        except (WebDriverException, UnidentifiedImageError, OSError) as e:
            raise SamplingError(f"Capture de la cellule ({address.col}, {address.row}) échouée: {e}") from e
        return average_rgba(self.sample_points(np.asarray(image)))

    def sample_points(self, pixels: np.ndarray) -> List[Sequence[int]]:
        height, width = pixels.shape[:2]
        samples = []
        for fx, fy in self.points:
            x = min(width - 1, int(width * fx))
            y = min(height - 1, int(height * fy))
            samples.append(pixels[y, x])
        return samples
