"""Shared rules constants.

Kept apart from the ORM and domain layers so both can import them.
"""

from __future__ import annotations

ATTRIBUTES: dict[str, str] = {
    "str": "Strength",
    "agl": "Agility",
    "int": "Intelligence",
    "emp": "Empathy",
}

# skill key -> governing attribute key
SKILL_ATTRIBUTES: dict[str, str] = {
    "closeCombat": "str",
    "heavyWeapons": "str",
    "stamina": "str",
    "driving": "agl",
    "mobility": "agl",
    "rangedCombat": "agl",
    "recon": "int",
    "survival": "int",
    "tech": "int",
    "command": "emp",
    "persuasion": "emp",
    "medicalAid": "emp",
}

SKILL_TITLES: dict[str, str] = {
    "closeCombat": "Close Combat",
    "heavyWeapons": "Heavy Weapons",
    "stamina": "Stamina",
    "driving": "Driving",
    "mobility": "Mobility",
    "rangedCombat": "Ranged Combat",
    "recon": "Recon",
    "survival": "Survival",
    "tech": "Tech",
    "command": "Command",
    "persuasion": "Persuasion",
    "medicalAid": "Medical Aid",
}

RATING_MIN = 0
RATING_MAX = 12
MODIFIER_MIN = -100
MODIFIER_MAX = 100
MAX_PUSH_MIN = 0
MAX_PUSH_MAX = 100
ROF_MAX = 100
