"""Curated football word bank used when generated words are unavailable."""

from __future__ import annotations

import random
from typing import Any


WORD_BANK: dict[str, list[str]] = {
    "players": [
        "MESSI", "RONALDO", "NEYMAR", "MBAPPE", "HAALAND", "BENZEMA",
        "MODRIC", "KROOS", "SALAH", "KANE", "PEDRI", "PELE", "MARADONA",
        "CRUYFF", "ZIDANE", "HENRY", "PIRLO", "TOTTI", "MALDINI", "BUFFON",
        "CANTONA", "BERGKAMP", "CAFU", "KAKA",
    ],
    "nations": [
        "BRAZIL", "ARGENTINA", "FRANCE", "SPAIN", "ENGLAND", "GERMANY",
        "ITALY", "PORTUGAL", "NETHERLANDS", "BELGIUM", "CROATIA", "MOROCCO",
        "MEXICO", "URUGUAY", "JAPAN", "SENEGAL", "NIGERIA", "DENMARK",
        "SWEDEN", "GHANA",
    ],
    "stadiums": [
        "WEMBLEY", "CAMP NOU", "BERNABEU", "OLD TRAFFORD", "ANFIELD",
        "SAN SIRO", "MARACANA", "AZTECA", "BOMBONERA", "CELTIC PARK",
        "IBROX", "MESTALLA", "VELODROME", "DE KUIP", "ALLIANZ ARENA",
        "ETIHAD",
    ],
    "competitions": [
        "PREMIER LEAGUE", "LA LIGA", "SERIE A", "BUNDESLIGA", "LIGUE 1",
        "CHAMPIONS LEAGUE", "EUROPA LEAGUE", "WORLD CUP", "EUROS",
        "COPA AMERICA", "AFCON", "FA CUP", "COPA DEL REY", "EREDIVISIE",
        "MLS", "NATIONS LEAGUE",
    ],
    "clubs": [
        "REAL MADRID", "BARCELONA", "LIVERPOOL", "ARSENAL", "CHELSEA",
        "JUVENTUS", "AC MILAN", "INTER", "NAPOLI", "AJAX", "PORTO",
        "BENFICA", "CELTIC", "BOCA JUNIORS", "RIVER PLATE", "BAYERN",
        "DORTMUND", "PSG",
    ],
    "positions": [
        "GOALKEEPER", "STRIKER", "MIDFIELDER", "DEFENDER", "WINGER",
        "SWEEPER", "FULLBACK", "PLAYMAKER", "CAPTAIN", "LIBERO",
        "WINGBACK", "TARGET MAN",
    ],
    "terms": [
        "OFFSIDE", "PENALTY", "CORNER", "HAT TRICK", "HEADER", "VOLLEY",
        "TACKLE", "DERBY", "NUTMEG", "BICYCLE KICK", "FREE KICK",
        "RED CARD", "YELLOW CARD", "EXTRA TIME", "GOLDEN BOOT",
        "BALLON DOR", "VAR", "CLEAN SHEET",
    ],
}


def get_all_words() -> list[str]:
    """Every word in the bank, deduplicated, in bank order."""
    seen: set[str] = set()
    words: list[str] = []
    for category_words in WORD_BANK.values():
        for word in category_words:
            if word not in seen:
                seen.add(word)
                words.append(word)
    return words


def get_words_by_category(category: str) -> list[str]:
    return list(WORD_BANK.get(category, []))


def get_random_words(count: int = 25, rng: random.Random | None = None) -> list[str]:
    """Sample ``count`` distinct words from the whole bank."""
    rng = rng or random.Random()
    all_words = get_all_words()
    if count > len(all_words):
        raise ValueError(f"Word bank has {len(all_words)} words, need {count}")
    return rng.sample(all_words, count)


def get_balanced_words(count: int = 25, rng: random.Random | None = None) -> list[str]:
    """
    Sample words spread evenly over the categories.

    The remainder of ``count / categories`` goes to the first categories. If a
    category runs short the rest is topped up from the whole bank, so the
    result always has ``count`` distinct words.
    """
    rng = rng or random.Random()
    categories = list(WORD_BANK)
    per_category, remainder = divmod(count, len(categories))

    words: list[str] = []
    for index, category in enumerate(categories):
        take = per_category + (1 if index < remainder else 0)
        pool = [w for w in WORD_BANK[category] if w not in words]
        words.extend(rng.sample(pool, min(take, len(pool))))

    if len(words) < count:
        pool = [w for w in get_all_words() if w not in words]
        if len(pool) < count - len(words):
            raise ValueError(f"Word bank cannot supply {count} distinct words")
        words.extend(rng.sample(pool, count - len(words)))

    rng.shuffle(words)
    return words


def validate_word_list(words: list[str]) -> dict[str, Any]:
    """Report duplicate entries in a word list."""
    unique: list[str] = []
    duplicates: list[str] = []
    for word in words:
        if word in unique:
            if word not in duplicates:
                duplicates.append(word)
        else:
            unique.append(word)

    return {
        "total": len(words),
        "unique": len(unique),
        "duplicates": len(words) - len(unique),
        "duplicate_words": duplicates,
        "is_valid": len(words) == len(unique),
    }
