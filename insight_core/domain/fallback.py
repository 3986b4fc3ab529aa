"""Générateur de repli déterministe.

Ce module produit, sans réseau ni aléa, des contenus de même forme que ceux du service distant.
Une graine entière dérivée d'entrées stables (jour, mois, année, longueur du nom, longueur de la
date de naissance) sélectionne les textes dans de petites réserves localisées: le même couple
(profil, période) donne toujours le même contenu, horodatage compris.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from insight_core.core.constants import LUCKY_NUMBER_MAX
from insight_core.domain.entities import (
    DailyInsight,
    DayType,
    InsightKind,
    InsightSource,
    Locale,
    MonthlyInsight,
    Ritual,
    UserProfile,
    YearlyInsight,
)
from insight_core.domain.normalize import normalize_monthly
from insight_core.domain.periods import days_in_month, parse_period_key, period_start
from insight_core.domain.zodiac import Element

DAILY_TITLES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "Celestial Guide",
        "Inner Compass",
        "Aura Sync",
        "Starlight Wisdom",
        "Elemental Awakening",
    ),
    Locale.TR: (
        "Göklerin Rehberliği",
        "İçsel Pusula",
        "Aura Senkronu",
        "Yıldız Işığı",
        "Element Uyanışı",
    ),
    Locale.TH: (
        "แนวทางจากท้องฟ้า",
        "เข็มทิศด้านใน",
        "ซิงค์ออร่า",
        "ปัญญาแสงดาว",
        "การตื่นตัวขององค์ประกอบ",
    ),
}

DAILY_DESCRIPTIONS: dict[Locale, dict[Element, str]] = {
    Locale.EN: {
        Element.FIRE: "Your inner fire is burning bright. Direct this energy toward bold steps.",
        Element.EARTH: "Time to ground yourself. Patience and practical steps are your "
        "superpowers today.",
        Element.AIR: "Thoughts flow like the wind. Keep communication channels open.",
        Element.WATER: "Emotions are like a deep ocean. Trust your intuition; the water knows "
        "the way.",
    },
    Locale.TR: {
        Element.FIRE: "Bugün içindeki ateş parlıyor. Enerjini yeni projelere ve cesur adımlara "
        "yönlendir.",
        Element.EARTH: "Köklerine dönme vakti. Pratik çözümler ve sabır bugün senin en büyük "
        "gücün.",
        Element.AIR: "Fikirlerin rüzgar gibi esiyor. İletişim kanallarını açık tut, mucizeler "
        "fısıltılarda saklı.",
        Element.WATER: "Duyguların derin bir okyanus gibi. Sezgilerine güven, su akar yolunu "
        "bulur.",
    },
    Locale.TH: {
        Element.FIRE: "ไฟในตัวคุณลุกโชนวันนี้ มุ่งพลังงานนี้ไปสู่ก้าวที่กล้าหาญ",
        Element.EARTH: "ถึงเวลาหยั่งรากให้มั่นคง ความอดทนและก้าวเล็กๆ คือพลังของคุณวันนี้",
        Element.AIR: "ความคิดไหลเหมือนสายลม เปิดช่องทางการสื่อสารไว้เสมอ",
        Element.WATER: "อารมณ์ของคุณลึกดั่งมหาสมุทร เชื่อในสัญชาตญาณ น้ำรู้ทางของมันเอง",
    },
}

RITUALS: dict[Locale, Ritual] = {
    Locale.EN: Ritual(title="Light Ritual", steps=["Close eyes.", "Feel the light."]),
    Locale.TR: Ritual(title="Işık Ritüeli", steps=["Gözlerini kapat.", "Işığı hisset."]),
    Locale.TH: Ritual(title="พิธีแสง", steps=["ปิดตาของคุณ", "สัมผัสแสง"]),
}

YEARLY_CONTENT: dict[Locale, dict[str, Any]] = {
    Locale.EN: {
        "theme": "Spiritual Expansion & New Foundations",
        "strengths": ["Creativity", "Resilience", "Clarity"],
        "challenges": ["Impatience", "Over-analysis"],
        "recommendations": ["Meditate", "Spend time in nature"],
    },
    Locale.TR: {
        "theme": "Ruhsal Genişleme ve Yeni Temeller",
        "strengths": ["Yaratıcılık", "Dayanıklılık", "Netlik"],
        "challenges": ["Sabırsızlık", "Aşırı Analiz"],
        "recommendations": ["Meditasyon yap", "Doğada vakit geçir"],
    },
    Locale.TH: {
        "theme": "การขยายตัวทางจิตใจและรากฐานใหม่",
        "strengths": ["ความสร้างสรรค์", "ความยืดหยุ่น", "ความชัดเจน"],
        "challenges": ["ความไม่อดทน", "การวิเคราะห์มากเกินไป"],
        "recommendations": ["ทำสมาธิ", "ใช้เวลาในธรรมชาติ"],
    },
}

# Rythme équilibré: jamais deux journées d'action consécutives.
DAY_TYPE_CYCLE: tuple[DayType, ...] = (
    DayType.CLEANSING,
    DayType.ACTION,
    DayType.REFLECTION,
    DayType.SOCIAL,
    DayType.CREATIVITY,
    DayType.REST,
    DayType.MANIFESTATION,
    DayType.GRATITUDE,
)

STONES: tuple[tuple[str, dict[Locale, str]], ...] = (
    (
        "Clear Quartz",
        {
            Locale.EN: "Amplifies clarity and sharpens your intentions.",
            Locale.TR: "Netliği artırır ve niyetlerini keskinleştirir.",
            Locale.TH: "ขยายความชัดเจนและทำให้เจตนาของคุณแน่วแน่",
        },
    ),
    (
        "Amethyst",
        {
            Locale.EN: "Calms the mind and deepens your intuition.",
            Locale.TR: "Zihni sakinleştirir ve sezgini derinleştirir.",
            Locale.TH: "ทำให้จิตใจสงบและเพิ่มพลังสัญชาตญาณ",
        },
    ),
    (
        "Rose Quartz",
        {
            Locale.EN: "Opens the heart to gentle, loving connection.",
            Locale.TR: "Kalbini nazik ve sevgi dolu bağlara açar.",
            Locale.TH: "เปิดหัวใจสู่ความรักและความอ่อนโยน",
        },
    ),
    (
        "Citrine",
        {
            Locale.EN: "Brings warmth, confidence and creative spark.",
            Locale.TR: "Sıcaklık, özgüven ve yaratıcı kıvılcım getirir.",
            Locale.TH: "นำความอบอุ่น ความมั่นใจ และประกายสร้างสรรค์",
        },
    ),
    (
        "Black Tourmaline",
        {
            Locale.EN: "Grounds your energy and shields you from stress.",
            Locale.TR: "Enerjini topraklar ve seni stresten korur.",
            Locale.TH: "ช่วยให้พลังงานมั่นคงและปกป้องจากความเครียด",
        },
    ),
    (
        "Moonstone",
        {
            Locale.EN: "Supports new beginnings and emotional balance.",
            Locale.TR: "Yeni başlangıçları ve duygusal dengeyi destekler.",
            Locale.TH: "สนับสนุนการเริ่มต้นใหม่และความสมดุลทางอารมณ์",
        },
    ),
)

DRINKS: tuple[str, ...] = (
    "Chamomile tea",
    "Warm water with lemon",
    "Peppermint tea",
    "Golden milk with turmeric",
    "Cucumber mint infusion",
    "Ginger honey tea",
    "Berry smoothie",
)

WEAR_COLORS: tuple[str, ...] = (
    "Lavender",
    "Emerald Green",
    "Sapphire Blue",
    "Coral",
    "Golden",
    "White",
    "Rose",
    "Navy Blue",
)

DAY_MESSAGES: dict[Locale, dict[DayType, str]] = {
    Locale.EN: {
        DayType.CLEANSING: "Let go of what feels heavy today. Clear a small space around you "
        "and notice how your mind softens with it.",
        DayType.MANIFESTATION: "Your intentions carry extra weight today. Write down one wish "
        "and take a single small step toward it.",
        DayType.REST: "Rest is part of your path. Give yourself permission to slow down and "
        "recharge without guilt.",
        DayType.ACTION: "Momentum is on your side. Start the task you have been postponing and "
        "trust your ability to finish it.",
        DayType.REFLECTION: "Pause and look inward. A quiet moment today can reveal what your "
        "heart has been trying to say.",
        DayType.SOCIAL: "Connection nourishes you today. Reach out to someone who makes you "
        "feel seen.",
        DayType.GRATITUDE: "Count the small blessings. Gratitude turns an ordinary day into a "
        "meaningful one.",
        DayType.CREATIVITY: "Your imagination is awake. Play, sketch or write without judging "
        "the result.",
    },
    Locale.TR: {
        DayType.CLEANSING: "Bugün ağır gelenleri bırak. Etrafında küçük bir alanı temizle ve "
        "zihninin nasıl hafiflediğini fark et.",
        DayType.MANIFESTATION: "Niyetlerin bugün daha güçlü. Bir dileğini yaz ve ona doğru "
        "küçük bir adım at.",
        DayType.REST: "Dinlenmek de yolunun bir parçası. Suçluluk duymadan yavaşlamaya izin ver.",
        DayType.ACTION: "Enerji senden yana. Ertelediğin işe başla ve bitirebileceğine güven.",
        DayType.REFLECTION: "Dur ve içine bak. Sessiz bir an, kalbinin söylemek istediğini "
        "gösterebilir.",
        DayType.SOCIAL: "Bugün bağlantılar seni besliyor. Seni anlayan birine ulaş.",
        DayType.GRATITUDE: "Küçük nimetleri say. Şükran sıradan bir günü anlamlı kılar.",
        DayType.CREATIVITY: "Hayal gücün uyanık. Sonucu yargılamadan oyna, çiz ya da yaz.",
    },
    Locale.TH: {
        DayType.CLEANSING: "ปล่อยวางสิ่งที่หนักใจในวันนี้ จัดพื้นที่เล็กๆ รอบตัวให้โล่ง แล้วสัมผัสความเบาสบายของจิตใจ",
        DayType.MANIFESTATION: "เจตนาของคุณมีพลังเป็นพิเศษวันนี้ เขียนความปรารถนาหนึ่งข้อแล้วก้าวไปหามันหนึ่งก้าว",
        DayType.REST: "การพักผ่อนเป็นส่วนหนึ่งของเส้นทาง อนุญาตให้ตัวเองช้าลงโดยไม่รู้สึกผิด",
        DayType.ACTION: "แรงส่งอยู่ข้างคุณ เริ่มงานที่เลื่อนมานานและเชื่อว่าคุณทำได้สำเร็จ",
        DayType.REFLECTION: "หยุดและมองเข้าไปข้างใน ช่วงเวลาเงียบๆ อาจเผยสิ่งที่หัวใจอยากบอก",
        DayType.SOCIAL: "ความสัมพันธ์หล่อเลี้ยงคุณวันนี้ ติดต่อคนที่ทำให้คุณรู้สึกมีคุณค่า",
        DayType.GRATITUDE: "นับพรเล็กๆ ในชีวิต ความกตัญญูเปลี่ยนวันธรรมดาให้มีความหมาย",
        DayType.CREATIVITY: "จินตนาการของคุณตื่นตัว เล่น วาด หรือเขียนโดยไม่ตัดสินผลลัพธ์",
    },
}

ACTIVITIES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "Take a ten-minute mindful walk",
        "Journal three thoughts before bed",
        "Stretch gently for five minutes",
        "Tidy one corner of your home",
        "Breathe slowly for ten breaths by a window",
    ),
    Locale.TR: (
        "On dakikalık bilinçli bir yürüyüş yap",
        "Yatmadan önce üç düşünceni yaz",
        "Beş dakika nazikçe esne",
        "Evinin bir köşesini düzenle",
        "Pencere kenarında on derin nefes al",
    ),
    Locale.TH: (
        "เดินอย่างมีสติสิบนาที",
        "จดบันทึกความคิดสามข้อก่อนนอน",
        "ยืดเหยียดเบาๆ ห้านาที",
        "จัดมุมหนึ่งของบ้านให้เรียบร้อย",
        "หายใจช้าๆ สิบครั้งข้างหน้าต่าง",
    ),
}

AFFIRMATIONS: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "I am grounded and open to what comes.",
        "I trust the rhythm of my life.",
        "I choose calm and clarity.",
        "I am worthy of rest and joy.",
    ),
    Locale.TR: (
        "Köklüyüm ve gelene açığım.",
        "Hayatımın ritmine güveniyorum.",
        "Sükûneti ve netliği seçiyorum.",
        "Dinlenmeyi ve neşeyi hak ediyorum.",
    ),
    Locale.TH: (
        "ฉันมั่นคงและเปิดรับสิ่งที่เข้ามา",
        "ฉันเชื่อมั่นในจังหวะชีวิตของฉัน",
        "ฉันเลือกความสงบและความชัดเจน",
        "ฉันคู่ควรกับการพักผ่อนและความสุข",
    ),
}

WEEKEND_TIPS: dict[Locale, tuple[str, str]] = {
    Locale.EN: (
        "Stay home and recharge with a slow, cozy ritual.",
        "Go out and let fresh air and good company lift you.",
    ),
    Locale.TR: (
        "Evde kal ve yavaş, huzurlu bir ritüelle enerji topla.",
        "Dışarı çık, temiz hava ve güzel bir sohbet seni canlandırsın.",
    ),
    Locale.TH: (
        "อยู่บ้านและชาร์จพลังด้วยพิธีเล็กๆ ที่ผ่อนคลาย",
        "ออกไปข้างนอก ให้อากาศสดชื่นและเพื่อนดีๆ ช่วยยกระดับพลังของคุณ",
    ),
}

MONTH_THEMES: dict[Locale, str] = {
    Locale.EN: "A month of gentle growth, steady intentions and quiet discovery",
    Locale.TR: "Nazik büyüme, istikrarlı niyetler ve sessiz keşiflerle dolu bir ay",
    Locale.TH: "เดือนแห่งการเติบโตอย่างอ่อนโยน เจตนาที่มั่นคง และการค้นพบอย่างเงียบสงบ",
}

_LUCKY_FACTORS = (7, 13, 22)


def lucky_numbers(seed: int) -> list[int]:
    """Trois nombres distincts dans [1, 99] dérivés linéairement de la graine.

    En cas de collision, le nombre est décalé au suivant (cyclique) jusqu'à être libre.
    """
    numbers: list[int] = []
    for factor in _LUCKY_FACTORS:
        n = (seed * factor) % LUCKY_NUMBER_MAX + 1
        while n in numbers:
            n = n % LUCKY_NUMBER_MAX + 1
        numbers.append(n)
    return numbers


def daily_seed(profile: UserProfile, day: date) -> int:
    birth_len = len(profile.birth_date.isoformat())
    return (day.day + (day.month - 1) + len(profile.name) + birth_len) % 10


def yearly_seed(profile: UserProfile, year: int) -> int:
    return (year + len(profile.birth_date.isoformat())) % 5


def monthly_seed(profile: UserProfile, year: int, month: int) -> int:
    return year + month + len(profile.name) + len(profile.birth_date.isoformat())


class DeterministicFallback:
    """Repli local, total et déterministe pour les insights mis en cache.

    Ne fait aucun appel réseau et ne lève pas d'exception pour des entrées valides. La
    comparaison de profils n'a pas de repli.
    """

    def fallback(self, kind: InsightKind, profile: UserProfile, period: Any):
        """Produit le contenu de repli d'un type donné.

        Args:
            kind: `daily` (période: clé YYYY-MM-DD ou date), `yearly` (année) ou `monthly`
                (tuple année, mois).
            profile: Profil de l'utilisateur.
            period: Identifiant de période correspondant au type.

        Returns:
            DailyInsight | YearlyInsight | MonthlyInsight: Contenu marqué `source=fallback`.
        """
        kind = InsightKind(kind)
        if kind is InsightKind.DAILY:
            return self.daily(profile, period)
        if kind is InsightKind.YEARLY:
            return self.yearly(profile, int(period))
        if kind is InsightKind.MONTHLY:
            year, month = period
            return self.monthly(profile, int(year), int(month))
        raise ValueError(f"no deterministic fallback for {kind.value}")

    def daily(self, profile: UserProfile, period: str | date) -> DailyInsight:
        day = parse_period_key(period) if isinstance(period, str) else period
        seed = daily_seed(profile, day)
        locale = profile.locale
        titles = DAILY_TITLES[locale]
        element = profile.computed_profile.western_zodiac.element
        return DailyInsight(
            period_key=day.isoformat(),
            locale=locale,
            energy_score=65 + (seed * 7) // 2,
            title=titles[seed % len(titles)],
            description=DAILY_DESCRIPTIONS[locale][element],
            color="Royal Purple" if seed % 2 == 0 else "Emerald Green",
            lucky_numbers=lucky_numbers(seed),
            ritual=RITUALS[locale].model_copy(deep=True),
            generated_at=period_start(day.year, day.month, day.day),
            source=InsightSource.FALLBACK,
        )

    def yearly(self, profile: UserProfile, year: int) -> YearlyInsight:
        seed = yearly_seed(profile, year)
        content = YEARLY_CONTENT[profile.locale]
        strengths = list(content["strengths"])
        shift = seed % len(strengths)
        return YearlyInsight(
            year=year,
            locale=profile.locale,
            theme=content["theme"],
            strengths=strengths[shift:] + strengths[:shift],
            challenges=list(content["challenges"]),
            recommendations=list(content["recommendations"]),
            generated_at=period_start(year),
            source=InsightSource.FALLBACK,
        )

    def monthly(self, profile: UserProfile, year: int, month: int) -> MonthlyInsight:
        seed = monthly_seed(profile, year, month)
        locale = profile.locale
        raw_days: list[dict[str, Any]] = []
        for day in range(1, days_in_month(year, month) + 1):
            step = seed + day
            day_type = DAY_TYPE_CYCLE[step % len(DAY_TYPE_CYCLE)]
            stone, energies = STONES[step % len(STONES)]
            raw_days.append(
                {
                    "day": day,
                    "dayType": day_type.value,
                    "message": DAY_MESSAGES[locale][day_type],
                    "stone": stone,
                    "stoneEnergy": energies[locale],
                    "activity": ACTIVITIES[locale][step % len(ACTIVITIES[locale])],
                    "drink": DRINKS[step % len(DRINKS)],
                    "wearColor": WEAR_COLORS[step % len(WEAR_COLORS)],
                    "affirmation": AFFIRMATIONS[locale][step % len(AFFIRMATIONS[locale])],
                    # Ignoré hors week-end par la normalisation.
                    "weekendTip": WEEKEND_TIPS[locale][step % 2],
                }
            )
        return normalize_monthly(
            raw_days,
            year=year,
            month=month,
            locale=locale,
            month_theme=MONTH_THEMES[locale],
            generated_at=period_start(year, month),
            source=InsightSource.FALLBACK,
        )
