"""
Configuration centrale de canvas-grid.

Ce fichier regroupe les paramètres réglables : grille par défaut,
profils de survol/glisser, sélecteurs de tooltips et temps d'attente.
Tous les délais sont exprimés en secondes.
"""

# Grille utilisée tant que l'appelant n'a pas appelé grid_size()
DEFAULT_GRID = (8, 6)  # (cols, rows)

# Grille automatique selon la plus grande dimension du canvas (pixels CSS)
AUTO_GRID_BUCKETS = [
    (400, (6, 4)),     # petits canvas : grille grossière
    (900, (10, 8)),
]
AUTO_GRID_LARGE = (14, 10)

# Tolérance par canal pour within()
COLOR_TOLERANCE = 12

# Échantillonnage couleur
SAMPLER_CONFIG = {
    'neighborhood_radius': 1,          # voisinage 3×3 autour du centre
    'min_capture_size': 2,             # capture minimale 2×2 pour éviter une zone vide
    'capture_points': [(0.5, 0.5), (0.25, 0.5), (0.75, 0.5), (0.5, 0.25), (0.5, 0.75)],
    'script_timeout': 5,               # timeout du script async de lecture directe
}

# Temps d'attente (en secondes)
WAIT_TIMES = {
    'move_step': 0.01,          # pause entre deux pas d'interpolation du survol
    'jitter_before': 0.03,      # pause avant le mouvement de jitter
    'jitter_after': 0.02,       # pause entre l'aller et le retour du jitter
    'between_cells': 0.01,      # pause entre deux cellules lors d'un scan complet
    'between_region_cells': 0.05,  # pause entre deux cellules d'une région
    'clear_hover': 0.1,         # pause après avoir écarté le pointeur
}

# Profil de survol standard (hover_cell)
HOVER_CONFIG = {
    'move_steps': 3,
    'jitter': 2,
    'dwell': 0.05,
}

# Profil de survol utilisé par le détecteur de tooltips
TOOLTIP_HOVER_CONFIG = {
    'move_steps': 3,
    'jitter': 2,
    'dwell': 0.03,
}

# Profil de survol abrégé pour les scans (débit > réalisme)
SCAN_HOVER_CONFIG = {
    'move_steps': 2,
    'jitter': 1,
    'dwell': 0.02,
}

# Glisser-déposer
DRAG_CONFIG = {
    'steps': 5,
    'settle': 0.1,       # pause avant/après press et avant release
    'step_pause': 0.03,  # pause entre deux pas
}

# Détection des tooltips
TOOLTIP_CONFIG = {
    'selectors': [
        '[role="tooltip"]',
        '.tooltip',
        '.hover-info',
        '.chart-tooltip',
        '.data-tooltip',
        '[data-tooltip]',
        '.tippy-content',
        '.d3-tip',
    ],
    'wait_time': 0.5,   # attente après survol avant de chercher un tooltip
    'timeout': 3.0,     # budget total de wait_for_tooltip()
}

# Paramètres des scans
SCAN_CONFIG = {
    'hover_delay': 0.2,          # scan complet
    'check_hover_delay': 0.15,   # has_any_tooltips
    'check_max_cells': 20,       # plafond de cellules visitées par has_any_tooltips
    'region_hover_delay': 0.3,   # extraction de texte par région
    'text_delimiter': ' | ',
    'neutral_position': (0, 0),  # position du pointeur après un scan
}

# Overlay visuel (debug humain)
OVERLAY_CONFIG = {
    'overlay_id': 'canvas-grid-overlay',
    'stroke': 'rgba(255,0,0,0.6)',
    'label_color': '#FF0000',
    'highlight_color': '#00FF00',
    'highlight_duration': 2.0,
    'highlight_thickness': 8,
}

# Paramètres du navigateur
BROWSER_CONFIG = {
    'headless': False,
    'window_size': (1920, 1080),
    'page_load_timeout': 10,
}

# Chemins des fichiers
PATHS = {
    'logs': 'logs',
}
