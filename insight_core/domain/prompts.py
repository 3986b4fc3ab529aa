"""Construction des requêtes en langage naturel envoyées au générateur distant.

Chaque requête embarque le profil calculé, la langue cible et la période, et exige un unique
objet JSON de forme fixe. Les noms de couleurs et de pierres restent en anglais quelle que soit
la langue, pour la résolution côté affichage.
"""

from __future__ import annotations

from insight_core.domain.entities import Locale, UserProfile

SYSTEM_PROMPT = (
    "You are a mystical astrologer. Always respond with valid JSON only. "
    "No markdown, no explanation, just pure JSON."
)

LANGUAGE_NAMES: dict[Locale, str] = {
    Locale.EN: "English",
    Locale.TR: "Turkish",
    Locale.TH: "Thai",
}

MONTH_NAMES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    Locale.TR: (
        "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
        "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
    ),
    Locale.TH: (
        "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
        "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
    ),
}  # fmt: skip


def _signature(profile: UserProfile) -> tuple[str, str, str]:
    cp = profile.computed_profile
    return (
        cp.western_zodiac.sign.value,
        cp.western_zodiac.element.value,
        cp.chinese_zodiac.animal.value,
    )


def messages_for(prompt: str) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def daily_prompt(profile: UserProfile, period_key: str) -> str:
    sign, element, animal = _signature(profile)
    lang = LANGUAGE_NAMES[profile.locale]
    return f"""Generate a daily insight JSON for {profile.name}, a {sign} ({element} element) \
and {animal}.
Language: {lang} for all text fields (title, desc, ritual names and steps).
Date: {period_key}.

Return ONLY valid JSON with this exact structure:
{{
  "score": integer (0-100),
  "title": "A highly mystical, poetic title",
  "desc": "A LONG, detailed and profound daily horoscope (80-120 words) speaking directly to \
the user about their energy today, potential challenges, emotional state and opportunities.",
  "color": "Lucky color name in ENGLISH ONLY (e.g., 'Red', 'Emerald Green', 'Sapphire Blue')",
  "luckyNumbers": [3 unique integers between 1-99],
  "ritual": {{ "title": "Ritual name", "steps": ["Step 1", "Step 2", "Step 3"] }}
}}"""


def yearly_prompt(profile: UserProfile, year: int) -> str:
    sign, element, animal = _signature(profile)
    lang = LANGUAGE_NAMES[profile.locale]
    return f"""Generate a yearly forecast for {year} for a {sign} ({element}) and {animal}.
Language: {lang}.

Return ONLY valid JSON with this exact structure:
{{
  "theme": "Overarching theme for the year",
  "strengths": ["Strength 1", "Strength 2", "Strength 3"],
  "challenges": ["Challenge 1", "Challenge 2"],
  "recommendations": ["Advice 1", "Advice 2"]
}}"""


def monthly_prompt(
    profile: UserProfile,
    year: int,
    month: int,
    days_in_month: int,
    weekend_days: list[int],
) -> str:
    sign, element, animal = _signature(profile)
    lang = LANGUAGE_NAMES[profile.locale]
    month_name = MONTH_NAMES[profile.locale][month - 1]
    weekends = ", ".join(str(d) for d in weekend_days)
    return f"""You are a mystical spiritual guide and astrologer. Generate a COMPLETE monthly \
spiritual calendar for {month_name} {year}.
Person: {profile.name}, {sign} ({element} element), Chinese zodiac: {animal}.
Language: ALL text must be in {lang}.

GUIDELINES:
- Meaningful, achievable daily rituals in a gentle, supportive tone
- Weekends (days: {weekends}) suggest either resting at home or going outside
- Drinks: herbal teas, water infusions, smoothies, warm spiced milk (never meat or heavy food)
- Stones are real crystals, named in ENGLISH
- Day types follow a balanced rhythm, mixing "rest" and "reflection" between "action" days
- wearColor MUST ALWAYS be in ENGLISH (e.g., "Green", "Royal Blue", "Coral", "Lavender")

Return ONLY valid JSON with this exact structure:
{{
  "monthTheme": "An inspiring theme for {month_name} (15-25 words)",
  "days": [
    {{
      "day": 1,
      "dayType": "cleansing|manifestation|rest|action|reflection|social|gratitude|creativity",
      "message": "A warm, personal message for this day (30-50 words)",
      "stone": "Crystal name in ENGLISH",
      "stoneEnergy": "What this stone brings today (10-15 words)",
      "activity": "A simple, achievable activity",
      "drink": "A specific drink recommendation",
      "wearColor": "Color name in ENGLISH ONLY",
      "affirmation": "A short I-statement affirmation",
      "isWeekend": false,
      "weekendTip": null
    }}
  ]
}}

CRITICAL: Generate exactly {days_in_month} day objects (day 1 to {days_in_month}). Weekend days \
({weekends}) must have isWeekend: true and a weekendTip starting with "stay home and..." or \
"go out and..."."""


def comparison_prompt(
    profile: UserProfile, partner_name: str, partner_sign: str, partner_animal: str
) -> str:
    sign, _element, animal = _signature(profile)
    lang = LANGUAGE_NAMES[profile.locale]
    return f"""Compare compatibility between {profile.name} ({sign}, {animal}) and \
{partner_name} ({partner_sign}, {partner_animal}).
Language: {lang}.

Return ONLY valid JSON with this exact structure:
{{
  "harmonyScore": integer (0-100),
  "summary": "Short mystical relationship summary",
  "strengths": ["Strength 1", "Strength 2"],
  "challenges": ["Challenge 1", "Challenge 2"]
}}"""
