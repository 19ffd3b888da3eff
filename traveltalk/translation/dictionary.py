"""
Static phrase dictionary used as the last resort of the cascade.

Covers common greetings and courtesies between English and Sinhala only.
"""

from typing import Dict, Optional

import traveltalk.language_codes as lc

# Characters removed from the lookup key
PUNCTUATION = set(".!?၊–—:;()[]{}\n")

EN_TO_SI: Dict[str, str] = {
    "hello": "හෙලෝ",
    "hi": "හයි",
    "good morning": "සුභ උදෑසනක්",
    "good afternoon": "සුභ දවල්වෙලාවක්",
    "good evening": "සුභ සන්ධ්‍යාවක්",
    "good night": "සුභ රාත්රියක්",
    "thank you": "ස්තූතියි",
    "please": "කරුණාකර",
    "sorry": "සමාවෙන්න",
    "i like you": "මට ඔබ කැමතියි",
    "you are beautiful": "ඔබ සුන්දරයි",
}

SI_TO_EN: Dict[str, str] = {
    "හෙලෝ": "hello",
    "හයි": "hi",
    "සුභ උදෑසනක්": "good morning",
    "සුභ දවල්වෙලාවක්": "good afternoon",
    "සුභ සන්ධ්‍යාවක්": "good evening",
    "සුභ රාත්රියක්": "good night",
    "ස්තූතියි": "thank you",
    "කරුණාකර": "please",
    "සමාවෙන්න": "sorry",
    "මට ඔබ කැමතියි": "i like you",
    "ඔබ සුන්දරයි": "you are beautiful",
    "ආයුබෝවන්": "hello",
    "අද": "today",
    "අදෝ": "oh",
    "මට බඩගිනිය": "i am hungry",
    "ඔබට කොහොමද": "how are you",
    "මට උදව් කරන්න": "please help me",
}


def normalize_key(text: str) -> str:
    """
    Lowercase, trim, drop punctuation, trim again.

    Examples:
        >>> normalize_key("  Thank you! ")
        'thank you'
    """
    lowered = text.lower().strip()
    return "".join(ch for ch in lowered if ch not in PUNCTUATION).strip()


def _phrase_map(source_language: str, target_language: str) -> Optional[Dict[str, str]]:
    source = lc.extract_base_language(source_language)
    target = lc.extract_base_language(target_language)
    if source == "en" and target == "si":
        return EN_TO_SI
    if source == "si" and target == "en":
        return SI_TO_EN
    return None


def lookup(text: str, source_language: str, target_language: str) -> Optional[str]:
    """Return the stored phrase for text, or None if the pair or phrase is unknown."""
    phrases = _phrase_map(source_language, target_language)
    if phrases is None:
        return None
    return phrases.get(normalize_key(text))
