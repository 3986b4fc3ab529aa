"""Lexique des couleurs porte-bonheur.

Les couleurs générées sont du texte libre (« Royal Purple », « Emerald Green »…). La résolution
se fait par correspondance exacte insensible à la casse, puis par sous-chaîne dans l'ordre du
lexique, puis vers la couleur par défaut.
"""

from __future__ import annotations

import structlog

from insight_core.core.constants import DEFAULT_COLOR_HEX, DEFAULT_DISPLAY_COLOR

log = structlog.get_logger(__name__)

# L'ordre compte pour la correspondance partielle (premier terme contenu dans le nom).
COLOR_LEXICON: dict[str, str] = {
    # Rouges & roses
    "red": "#ef4444",
    "crimson": "#dc143c",
    "scarlet": "#ff2400",
    "ruby": "#e0115f",
    "rose": "#ff007f",
    "pink": "#ec4899",
    "coral": "#ff7f50",
    "salmon": "#fa8072",
    "kırmızı": "#ef4444",
    "pembe": "#ec4899",
    "mercan": "#ff7f50",
    # Oranges
    "orange": "#f97316",
    "tangerine": "#ff9966",
    "peach": "#ffcba4",
    "amber": "#ffbf00",
    "turuncu": "#f97316",
    "portakal": "#f97316",
    # Jaunes & ors
    "yellow": "#eab308",
    "gold": "#ffd700",
    "golden": "#ffd700",
    "lemon": "#fff44f",
    "sunshine": "#fffd37",
    "honey": "#eb9605",
    "sarı": "#eab308",
    "altın": "#ffd700",
    # Verts
    "green": "#22c55e",
    "emerald": "#50c878",
    "emerald green": "#50c878",
    "jade": "#00a86b",
    "mint": "#3eb489",
    "lime": "#84cc16",
    "olive": "#808000",
    "forest": "#228b22",
    "sage": "#9dc183",
    "teal": "#14b8a6",
    "turquoise": "#40e0d0",
    "yeşil": "#22c55e",
    "zümrüt": "#50c878",
    "nane": "#3eb489",
    "limon": "#84cc16",
    # Bleus
    "blue": "#3b82f6",
    "navy": "#000080",
    "royal": "#4169e1",
    "sky": "#0ea5e9",
    "azure": "#007fff",
    "cobalt": "#0047ab",
    "sapphire": "#0f52ba",
    "indigo": "#4b0082",
    "cyan": "#06b6d4",
    "aqua": "#00ffff",
    "ocean": "#006994",
    "mavi": "#3b82f6",
    "lacivert": "#000080",
    "gökyüzü": "#0ea5e9",
    # Violets
    "purple": "#a855f7",
    "violet": "#8b5cf6",
    "lavender": "#e6e6fa",
    "lilac": "#c8a2c8",
    "plum": "#dda0dd",
    "magenta": "#ff00ff",
    "orchid": "#da70d6",
    "amethyst": "#9966cc",
    "mor": "#a855f7",
    "menekşe": "#8b5cf6",
    "lavanta": "#e6e6fa",
    # Bruns & neutres
    "brown": "#92400e",
    "chocolate": "#7b3f00",
    "copper": "#b87333",
    "bronze": "#cd7f32",
    "tan": "#d2b48c",
    "beige": "#f5f5dc",
    "cream": "#fffdd0",
    "kahverengi": "#92400e",
    "bej": "#f5f5dc",
    # Noirs, blancs, gris
    "black": "#1f2937",
    "white": "#f9fafb",
    "silver": "#c0c0c0",
    "gray": "#6b7280",
    "grey": "#6b7280",
    "siyah": "#1f2937",
    "beyaz": "#f9fafb",
    "gümüş": "#c0c0c0",
    "gri": "#6b7280",
    # Spéciaux
    "maroon": "#800000",
    "burgundy": "#800020",
    "wine": "#722f37",
    "champagne": "#f7e7ce",
}


def color_to_hex(color_name: str | None) -> str:
    """Résout un nom de couleur libre en valeur hexadécimale.

    Args:
        color_name: Nom de couleur (anglais ou turc), éventuellement composé.

    Returns:
        str: Valeur `#rrggbb`; `DEFAULT_COLOR_HEX` si aucun terme du lexique ne correspond.
    """
    lower = (color_name or "").strip().lower()
    if not lower:
        return DEFAULT_COLOR_HEX
    if lower in COLOR_LEXICON:
        return COLOR_LEXICON[lower]
    for term, value in COLOR_LEXICON.items():
        if term in lower:
            return value
    log.debug("color_not_in_lexicon", color=color_name)
    return DEFAULT_COLOR_HEX


def display_color(wear_color: str | None, daily_color: str | None) -> str:
    """Couleur affichée du jour: calendrier mensuel, sinon insight quotidien, sinon défaut."""
    return wear_color or daily_color or DEFAULT_DISPLAY_COLOR
