"""Tests du calcul de profil astrologique (signe occidental, zodiaque chinois, tables)."""

from __future__ import annotations

from datetime import date

import pytest

from insight_core.domain.zodiac import (
    ChineseAnimal,
    ChineseElement,
    Element,
    Polarity,
    WesternSign,
    animal_glyph,
    chinese_zodiac,
    compute_profile,
    element_trait,
    western_zodiac,
    year_animal,
    zodiac_glyph,
)


@pytest.mark.parametrize(
    ("month", "day", "sign"),
    [
        (3, 21, WesternSign.ARIES),
        (4, 19, WesternSign.ARIES),
        (4, 20, WesternSign.TAURUS),
        (5, 21, WesternSign.GEMINI),
        (6, 20, WesternSign.GEMINI),
        (6, 21, WesternSign.CANCER),
        (7, 23, WesternSign.LEO),
        (8, 23, WesternSign.VIRGO),
        (9, 23, WesternSign.LIBRA),
        (10, 23, WesternSign.SCORPIO),
        (11, 22, WesternSign.SAGITTARIUS),
        (12, 21, WesternSign.SAGITTARIUS),
        (12, 22, WesternSign.CAPRICORN),
        (12, 31, WesternSign.CAPRICORN),
        (1, 19, WesternSign.CAPRICORN),
        (1, 20, WesternSign.AQUARIUS),
        (2, 18, WesternSign.AQUARIUS),
        (2, 19, WesternSign.PISCES),
        (3, 20, WesternSign.PISCES),
    ],
)
def test_western_sign_boundaries(month: int, day: int, sign: WesternSign) -> None:
    """Teste les bornes des signes tropicaux."""
    assert western_zodiac(month, day).sign is sign


def test_western_elements_cycle() -> None:
    """Les éléments suivent le cycle Feu, Terre, Air, Eau."""
    assert western_zodiac(4, 1).element is Element.FIRE
    assert western_zodiac(5, 1).element is Element.EARTH
    assert western_zodiac(6, 1).element is Element.AIR
    assert western_zodiac(7, 1).element is Element.WATER
    assert western_zodiac(3, 1).element is Element.WATER


def test_chinese_zodiac_cycle() -> None:
    """Teste l'animal, l'élément et la polarité chinois."""
    rat = chinese_zodiac(2020)
    assert rat.animal is ChineseAnimal.RAT
    assert rat.element is ChineseElement.METAL
    assert rat.polarity is Polarity.YANG

    horse = chinese_zodiac(1990)
    assert horse.animal is ChineseAnimal.HORSE
    assert horse.element is ChineseElement.METAL

    ox = chinese_zodiac(1985)
    assert ox.animal is ChineseAnimal.OX
    assert ox.element is ChineseElement.WOOD
    assert ox.polarity is Polarity.YIN

    assert chinese_zodiac(4).animal is ChineseAnimal.RAT
    assert year_animal(2024) is ChineseAnimal.DRAGON


def test_compute_profile_is_pure() -> None:
    """Le même jour donne toujours le même profil."""
    birth = date(1990, 6, 1)
    first = compute_profile(birth)
    assert first == compute_profile(birth)
    assert first.western_zodiac.sign is WesternSign.GEMINI
    assert first.chinese_zodiac.animal is ChineseAnimal.HORSE


def test_compute_profile_serializes_camel_case() -> None:
    """Teste la forme camelCase du profil calculé."""
    data = compute_profile(date(1990, 6, 1)).model_dump(mode="json", by_alias=True)
    assert data["westernZodiac"] == {"sign": "Gemini", "element": "Air"}
    assert data["chineseZodiac"]["polarity"] == "Yang"


def test_glyphs_and_defaults() -> None:
    """Teste les glyphes et les valeurs par défaut pour un nom inconnu."""
    assert zodiac_glyph("Gemini") == "♊"
    assert zodiac_glyph("Ophiuchus") == "✨"
    assert animal_glyph("Horse") == "🐎"
    assert animal_glyph("Cat") == "🏮"


def test_element_traits_localized() -> None:
    """Teste les mots-clés localisés, avec repli anglais."""
    assert element_trait("Air") == "Intellect"
    assert element_trait("Water", "tr") == "Sezgi"
    assert element_trait("Fire", "xx") == "Vitality"
    assert element_trait("Aether") == ""
