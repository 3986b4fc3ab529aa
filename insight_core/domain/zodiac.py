"""
Calcul du profil astrologique à partir d'une date de naissance.

Ce module regroupe les tables fixes du zodiaque occidental (signes tropicaux et éléments) et du
zodiaque chinois (animaux, éléments, polarité) ainsi que les tables d'affichage associées
(glyphes, traits d'élément localisés). Toutes les tables sont indexées par des enums et
vérifiées à l'import pour couvrir chaque variante.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Locale(str, Enum):
    """Langues supportées pour les contenus générés."""

    EN = "en"
    TR = "tr"
    TH = "th"


class WesternSign(str, Enum):
    """Signes du zodiaque tropical."""

    ARIES = "Aries"
    TAURUS = "Taurus"
    GEMINI = "Gemini"
    CANCER = "Cancer"
    LEO = "Leo"
    VIRGO = "Virgo"
    LIBRA = "Libra"
    SCORPIO = "Scorpio"
    SAGITTARIUS = "Sagittarius"
    CAPRICORN = "Capricorn"
    AQUARIUS = "Aquarius"
    PISCES = "Pisces"


class Element(str, Enum):
    """Éléments occidentaux."""

    FIRE = "Fire"
    EARTH = "Earth"
    AIR = "Air"
    WATER = "Water"


class ChineseAnimal(str, Enum):
    """Animaux du zodiaque chinois, dans l'ordre du cycle (Rat = an 4)."""

    RAT = "Rat"
    OX = "Ox"
    TIGER = "Tiger"
    RABBIT = "Rabbit"
    DRAGON = "Dragon"
    SNAKE = "Snake"
    HORSE = "Horse"
    GOAT = "Goat"
    MONKEY = "Monkey"
    ROOSTER = "Rooster"
    DOG = "Dog"
    PIG = "Pig"


class ChineseElement(str, Enum):
    """Éléments du cycle chinois."""

    METAL = "Metal"
    WATER = "Water"
    WOOD = "Wood"
    FIRE = "Fire"
    EARTH = "Earth"


class Polarity(str, Enum):
    """Polarité yin/yang de l'année de naissance."""

    YANG = "Yang"
    YIN = "Yin"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class WesternZodiac(_FrozenModel):
    """Signe occidental et son élément."""

    sign: WesternSign
    element: Element


class ChineseZodiac(_FrozenModel):
    """Animal, élément et polarité chinois."""

    animal: ChineseAnimal
    element: ChineseElement
    polarity: Polarity


class ComputedProfile(_FrozenModel):
    """Profil dérivé (immuable) d'une date de naissance."""

    western_zodiac: WesternZodiac
    chinese_zodiac: ChineseZodiac


def _require_complete(table: Mapping, keys: type[Enum], name: str) -> None:
    missing = [k for k in keys if k not in table]
    if missing:
        raise ValueError(f"{name} missing entries: {', '.join(m.value for m in missing)}")


# (mois, dernier jour inclus) → signe ; parcouru dans l'ordre de l'année civile.
_SIGN_BOUNDARIES: tuple[tuple[int, int, WesternSign], ...] = (
    (1, 19, WesternSign.CAPRICORN),
    (2, 18, WesternSign.AQUARIUS),
    (3, 20, WesternSign.PISCES),
    (4, 19, WesternSign.ARIES),
    (5, 20, WesternSign.TAURUS),
    (6, 20, WesternSign.GEMINI),
    (7, 22, WesternSign.CANCER),
    (8, 22, WesternSign.LEO),
    (9, 22, WesternSign.VIRGO),
    (10, 22, WesternSign.LIBRA),
    (11, 21, WesternSign.SCORPIO),
    (12, 21, WesternSign.SAGITTARIUS),
)

_CYCLIC_ELEMENTS = (Element.FIRE, Element.EARTH, Element.AIR, Element.WATER)

SIGN_ELEMENTS: dict[WesternSign, Element] = {
    sign: _CYCLIC_ELEMENTS[i % 4] for i, sign in enumerate(WesternSign)
}

ANIMALS: tuple[ChineseAnimal, ...] = tuple(ChineseAnimal)

# Deux années consécutives partagent un élément.
YEAR_ELEMENTS: tuple[ChineseElement, ...] = (
    ChineseElement.METAL,
    ChineseElement.METAL,
    ChineseElement.WATER,
    ChineseElement.WATER,
    ChineseElement.WOOD,
    ChineseElement.WOOD,
    ChineseElement.FIRE,
    ChineseElement.FIRE,
    ChineseElement.EARTH,
    ChineseElement.EARTH,
)

ZODIAC_GLYPHS: dict[WesternSign, str] = {
    WesternSign.ARIES: "♈",
    WesternSign.TAURUS: "♉",
    WesternSign.GEMINI: "♊",
    WesternSign.CANCER: "♋",
    WesternSign.LEO: "♌",
    WesternSign.VIRGO: "♍",
    WesternSign.LIBRA: "♎",
    WesternSign.SCORPIO: "♏",
    WesternSign.SAGITTARIUS: "♐",
    WesternSign.CAPRICORN: "♑",
    WesternSign.AQUARIUS: "♒",
    WesternSign.PISCES: "♓",
}

ANIMAL_GLYPHS: dict[ChineseAnimal, str] = {
    ChineseAnimal.RAT: "🐀",
    ChineseAnimal.OX: "🐂",
    ChineseAnimal.TIGER: "🐅",
    ChineseAnimal.RABBIT: "🐇",
    ChineseAnimal.DRAGON: "🐉",
    ChineseAnimal.SNAKE: "🐍",
    ChineseAnimal.HORSE: "🐎",
    ChineseAnimal.GOAT: "🐐",
    ChineseAnimal.MONKEY: "🐒",
    ChineseAnimal.ROOSTER: "🐓",
    ChineseAnimal.DOG: "🐕",
    ChineseAnimal.PIG: "🐖",
}

ELEMENT_TRAITS: dict[Locale, dict[Element, str]] = {
    Locale.EN: {
        Element.FIRE: "Vitality",
        Element.EARTH: "Stability",
        Element.AIR: "Intellect",
        Element.WATER: "Intuition",
    },
    Locale.TR: {
        Element.FIRE: "Canlılık",
        Element.EARTH: "Denge",
        Element.AIR: "Zihin",
        Element.WATER: "Sezgi",
    },
    Locale.TH: {
        Element.FIRE: "ชีวิตชีวา",
        Element.EARTH: "เสถียรภาพ",
        Element.AIR: "ปัญญา",
        Element.WATER: "สัญชาต",
    },
}

_require_complete(SIGN_ELEMENTS, WesternSign, "SIGN_ELEMENTS")
_require_complete(ZODIAC_GLYPHS, WesternSign, "ZODIAC_GLYPHS")
_require_complete(ANIMAL_GLYPHS, ChineseAnimal, "ANIMAL_GLYPHS")
_require_complete(ELEMENT_TRAITS, Locale, "ELEMENT_TRAITS")
for _locale, _traits in ELEMENT_TRAITS.items():
    _require_complete(_traits, Element, f"ELEMENT_TRAITS[{_locale.value}]")

DEFAULT_ZODIAC_GLYPH = "✨"
DEFAULT_ANIMAL_GLYPH = "🏮"


def western_zodiac(month: int, day: int) -> WesternZodiac:
    """Retourne le signe tropical (et son élément) pour un jour de l'année."""
    sign = WesternSign.CAPRICORN  # 22/12 → 31/12
    for boundary_month, last_day, candidate in _SIGN_BOUNDARIES:
        if month < boundary_month or (month == boundary_month and day <= last_day):
            sign = candidate
            break
    return WesternZodiac(sign=sign, element=SIGN_ELEMENTS[sign])


def chinese_zodiac(year: int) -> ChineseZodiac:
    """Retourne l'animal, l'élément et la polarité chinois d'une année."""
    return ChineseZodiac(
        animal=ANIMALS[(year - 4) % 12],
        element=YEAR_ELEMENTS[year % 10],
        polarity=Polarity.YANG if year % 2 == 0 else Polarity.YIN,
    )


def compute_profile(birth_date: date) -> ComputedProfile:
    """Calcule le profil complet (fonction pure de la date de naissance)."""
    return ComputedProfile(
        western_zodiac=western_zodiac(birth_date.month, birth_date.day),
        chinese_zodiac=chinese_zodiac(birth_date.year),
    )


def year_animal(year: int) -> ChineseAnimal:
    """Animal gouvernant une année donnée (titre des prévisions annuelles)."""
    return ANIMALS[(year - 4) % 12]


def zodiac_glyph(sign: str) -> str:
    try:
        return ZODIAC_GLYPHS[WesternSign(sign)]
    except ValueError:
        return DEFAULT_ZODIAC_GLYPH


def animal_glyph(animal: str) -> str:
    try:
        return ANIMAL_GLYPHS[ChineseAnimal(animal)]
    except ValueError:
        return DEFAULT_ANIMAL_GLYPH


def element_trait(element: str, locale: str = Locale.EN.value) -> str:
    """Mot-clé localisé d'un élément; anglais si la langue est inconnue, vide si l'élément l'est."""
    try:
        key = Element(element)
    except ValueError:
        return ""
    try:
        traits = ELEMENT_TRAITS[Locale(locale)]
    except ValueError:
        traits = ELEMENT_TRAITS[Locale.EN]
    return traits[key]
