#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Language Support - Language code normalization, metadata and detection
"""

import re
from typing import Optional, Dict, List, Tuple
from dataclasses import dataclass


# BCP-47 variants mapped to their base code. Keys are lower-case; anything not
# listed falls back to the part before the first hyphen.
LANGUAGE_VARIANTS: Dict[str, str] = {
    # Chinese
    'zh-cn': 'zh', 'zh-tw': 'zh', 'zh-hk': 'zh', 'zh-sg': 'zh', 'zh-mo': 'zh',
    'zh-hans': 'zh', 'zh-hant': 'zh',
    # Spanish
    'es-es': 'es', 'es-mx': 'es', 'es-ar': 'es', 'es-co': 'es', 'es-cl': 'es',
    'es-pe': 'es', 'es-ve': 'es', 'es-419': 'es',
    # English
    'en-us': 'en', 'en-gb': 'en', 'en-ca': 'en', 'en-au': 'en', 'en-nz': 'en',
    'en-ie': 'en', 'en-za': 'en', 'en-in': 'en',
    # French
    'fr-fr': 'fr', 'fr-ca': 'fr', 'fr-be': 'fr', 'fr-ch': 'fr', 'fr-lu': 'fr',
    # Portuguese
    'pt-br': 'pt', 'pt-pt': 'pt',
    # German
    'de-de': 'de', 'de-at': 'de', 'de-ch': 'de', 'de-lu': 'de', 'de-li': 'de',
    # Arabic
    'ar-sa': 'ar', 'ar-eg': 'ar', 'ar-dz': 'ar', 'ar-ma': 'ar', 'ar-tn': 'ar',
    'ar-lb': 'ar', 'ar-ae': 'ar',
    # Russian
    'ru-ru': 'ru', 'ru-by': 'ru', 'ru-kz': 'ru', 'ru-ua': 'ru',
    # Norwegian: Bokmål and Nynorsk both map to 'no'
    'no-no': 'no', 'nb-no': 'no', 'nn-no': 'no', 'nb': 'no', 'nn': 'no',
    # Serbian scripts
    'sr-rs': 'sr', 'sr-latn-rs': 'sr', 'sr-cyrl-rs': 'sr',
    # Legacy / alternate codes
    'iw': 'he', 'iw-il': 'he',
    'fil': 'tl', 'fil-ph': 'tl',
}

SUPPORTED_CODES = (
    'en', 'fr', 'es', 'de', 'it', 'pt', 'nl', 'ru', 'zh', 'ja', 'ko',
    'ar', 'hi', 'bn', 'tr', 'vi', 'pl', 'uk', 'fa', 'sv', 'da', 'fi', 'no',
    'id', 'ms', 'th', 'he', 'el', 'ro', 'hu', 'cs', 'sk', 'bg', 'sr', 'hr',
    'sl', 'et', 'lv', 'lt', 'ta', 'ur', 'sw', 'tl',
)


def normalize_language_code(code: Optional[str]) -> str:
    """
    Normalize a language code to its base code

    'en-US' -> 'en', 'zh_CN' -> 'zh', 'fil-PH' -> 'tl'. Unknown variants fall
    back to the part before the first hyphen. Empty input gives ''.
    """
    if not code:
        return ''

    normalized = code.strip().lower().replace('_', '-')
    if normalized in LANGUAGE_VARIANTS:
        return LANGUAGE_VARIANTS[normalized]

    if '-' in normalized:
        base = normalized.split('-')[0]
        return LANGUAGE_VARIANTS.get(base, base)

    return normalized


def is_valid_language_code(code: Optional[str]) -> bool:
    """Check if a language code (after normalization) is supported"""
    if not code:
        return False
    return normalize_language_code(code) in SUPPORTED_CODES


@dataclass(frozen=True)
class LanguageInfo:
    """Language information and characteristics"""
    code: str
    name: str
    native_name: str
    direction: str = "ltr"  # ltr (left-to-right) or rtl (right-to-left)

    # Character set for detection
    char_range: Optional[str] = None

    # Scripts written without spaces between words
    has_spaces: bool = True


# Language database
LANGUAGES: Dict[str, LanguageInfo] = {
    "en": LanguageInfo("en", "English", "English", char_range="a-zA-Z"),
    "vi": LanguageInfo(
        "vi", "Vietnamese", "Tiếng Việt",
        char_range="a-zA-ZàáảãạăằắẳẵặâầấẩẫậèéẻẽẹêềếểễệìíỉĩịòóỏõọôồốổỗộơờớởỡợùúủũụưừứửữựỳýỷỹỵđĐ",
    ),
    "zh": LanguageInfo(
        "zh", "Chinese", "中文",
        char_range="\u4e00-\u9fff",  # CJK Unified Ideographs
        has_spaces=False,
    ),
    "ja": LanguageInfo(
        "ja", "Japanese", "日本語",
        char_range="\u3040-\u309f\u30a0-\u30ff\u4e00-\u9fff",  # Hiragana + Katakana + Kanji
        has_spaces=False,
    ),
    "ko": LanguageInfo("ko", "Korean", "한국어", char_range="\uac00-\ud7af"),
    "th": LanguageInfo("th", "Thai", "ไทย", char_range="\u0e00-\u0e7f", has_spaces=False),
    "fr": LanguageInfo("fr", "French", "Français", char_range="a-zA-ZàâäæçéèêëïîôùûüÿœÀÂÄÆÇÉÈÊËÏÎÔÙÛÜŸŒ"),
    "es": LanguageInfo("es", "Spanish", "Español", char_range="a-zA-ZáéíóúüñÁÉÍÓÚÜÑ¿¡"),
    "de": LanguageInfo("de", "German", "Deutsch", char_range="a-zA-ZäöüßÄÖÜ"),
    "it": LanguageInfo("it", "Italian", "Italiano"),
    "pt": LanguageInfo("pt", "Portuguese", "Português"),
    "nl": LanguageInfo("nl", "Dutch", "Nederlands"),
    "ru": LanguageInfo("ru", "Russian", "Русский", char_range="\u0400-\u04ff"),
    "uk": LanguageInfo("uk", "Ukrainian", "Українська"),
    "ar": LanguageInfo("ar", "Arabic", "العربية", direction="rtl", char_range="\u0600-\u06ff"),
    "he": LanguageInfo("he", "Hebrew", "עברית", direction="rtl", char_range="\u0590-\u05ff"),
    "fa": LanguageInfo("fa", "Persian", "فارسی", direction="rtl"),
    "ur": LanguageInfo("ur", "Urdu", "اردو", direction="rtl"),
    "hi": LanguageInfo("hi", "Hindi", "हिन्दी", char_range="\u0900-\u097f"),
    "el": LanguageInfo("el", "Greek", "Ελληνικά", char_range="\u0370-\u03ff"),
    "tr": LanguageInfo("tr", "Turkish", "Türkçe"),
    "pl": LanguageInfo("pl", "Polish", "Polski"),
    "sv": LanguageInfo("sv", "Swedish", "Svenska"),
    "tl": LanguageInfo("tl", "Tagalog", "Tagalog"),
}


def get_language_name(code: Optional[str]) -> str:
    """Get language name from code (falls back to the code itself)"""
    normalized = normalize_language_code(code)
    lang_info = LANGUAGES.get(normalized)
    return lang_info.name if lang_info else (normalized or "unknown")


def uses_word_spacing(code: Optional[str]) -> bool:
    """False for scripts that don't separate words with spaces"""
    lang_info = LANGUAGES.get(normalize_language_code(code))
    return lang_info.has_spaces if lang_info else True


class LanguageDetector:
    """Simple rule-based language detection"""

    @staticmethod
    def detect(text: str, candidates: Optional[List[str]] = None) -> Tuple[str, float]:
        """
        Detect language from text

        Args:
            text: Text to detect
            candidates: Optional list of candidate language codes

        Returns:
            Tuple of (language_code, confidence)
        """
        if not text or not text.strip():
            return "unknown", 0.0

        # If candidates provided, only check those
        languages_to_check = candidates if candidates else list(LANGUAGES.keys())

        text_chars = [c for c in text if not c.isspace() and not c.isdigit()]
        if not text_chars:
            return "unknown", 0.0

        scores = {}
        for lang_code in languages_to_check:
            lang_info = LANGUAGES.get(normalize_language_code(lang_code))
            if not lang_info or not lang_info.char_range:
                continue

            # Count characters in this language's range
            matches = re.findall(f"[{lang_info.char_range}]", text)
            scores[lang_info.code] = len(matches) / len(text_chars)

        if not scores:
            return "unknown", 0.0

        # Kana only occurs in Japanese; prefer it over Chinese on shared Han
        if scores.get("ja") and re.search(r"[\u3040-\u30ff]", text):
            return "ja", scores["ja"]

        # Get language with highest score (first wins on ties)
        best_lang = max(scores.items(), key=lambda x: x[1])
        return best_lang[0], best_lang[1]

    @staticmethod
    def is_language(text: str, lang_code: str, threshold: float = 0.7) -> bool:
        """Check if text is in specified language"""
        detected_lang, confidence = LanguageDetector.detect(text, [lang_code])
        return detected_lang == normalize_language_code(lang_code) and confidence >= threshold
