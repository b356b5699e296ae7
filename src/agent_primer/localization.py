"""Supported UI languages, inferred from localized resource file names.

``Strings.fr-CA.resx`` contributes "French (CA)"; ``Strings.de.resx``
contributes "German" unless some region-specific German resource exists.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Iterable

RESOURCE_EXTENSIONS = (".resx", ".resw")

LANGUAGE_NAMES = {
    "af": "Afrikaans", "am": "Amharic", "ar": "Arabic", "az": "Azerbaijani",
    "be": "Belarusian", "bg": "Bulgarian", "bn": "Bangla", "bs": "Bosnian",
    "ca": "Catalan", "cs": "Czech", "cy": "Welsh", "da": "Danish",
    "de": "German", "el": "Greek", "en": "English", "es": "Spanish",
    "et": "Estonian", "eu": "Basque", "fa": "Persian", "fi": "Finnish",
    "fil": "Filipino", "fr": "French", "ga": "Irish", "gl": "Galician",
    "gu": "Gujarati", "he": "Hebrew", "hi": "Hindi", "hr": "Croatian",
    "hu": "Hungarian", "hy": "Armenian", "id": "Indonesian", "is": "Icelandic",
    "it": "Italian", "ja": "Japanese", "ka": "Georgian", "kk": "Kazakh",
    "km": "Khmer", "kn": "Kannada", "ko": "Korean", "lo": "Lao",
    "lt": "Lithuanian", "lv": "Latvian", "mk": "Macedonian", "ml": "Malayalam",
    "mn": "Mongolian", "mr": "Marathi", "ms": "Malay", "mt": "Maltese",
    "my": "Burmese", "nb": "Norwegian Bokmål", "ne": "Nepali", "nl": "Dutch",
    "nn": "Norwegian Nynorsk", "no": "Norwegian", "pa": "Punjabi", "pl": "Polish",
    "pt": "Portuguese", "ro": "Romanian", "ru": "Russian", "si": "Sinhala",
    "sk": "Slovak", "sl": "Slovenian", "sq": "Albanian", "sr": "Serbian",
    "sv": "Swedish", "sw": "Kiswahili", "ta": "Tamil", "te": "Telugu",
    "th": "Thai", "tr": "Turkish", "uk": "Ukrainian", "ur": "Urdu",
    "uz": "Uzbek", "vi": "Vietnamese", "zh": "Chinese", "zu": "isiZulu",
}

SCRIPT_NAMES = {
    "hans": "Simplified", "hant": "Traditional",
    "latn": "Latin", "cyrl": "Cyrillic", "arab": "Arabic",
}

_CULTURE_RE = re.compile(
    r"^(?P<lang>[a-z]{2,3})"
    r"(?:-(?P<script>[a-z]{4}))?"
    r"(?:-(?P<region>[a-z]{2}|\d{3}))?$",
    re.IGNORECASE,
)


def is_resource_file(path: str) -> bool:
    return PurePosixPath(path.replace("\\", "/")).suffix.lower() in RESOURCE_EXTENSIONS


def parse_culture(code: str) -> tuple[str, str, bool] | None:
    """Resolve a culture code to (language key, display name, is neutral).

    Returns None for codes that are not a known culture.
    """
    match = _CULTURE_RE.match(code.replace("_", "-"))
    if not match:
        return None

    lang = match.group("lang").lower()
    name = LANGUAGE_NAMES.get(lang)
    if name is None:
        return None

    script = (match.group("script") or "").lower()
    if script:
        if script not in SCRIPT_NAMES:
            return None
        name = f"{name} ({SCRIPT_NAMES[script]})"

    region = match.group("region")
    if region:
        base = LANGUAGE_NAMES[lang]
        return lang, f"{base} ({region.upper()})", False
    return lang, name, True


def supported_ui_languages(tracked_files: Iterable[str]) -> list[str]:
    """Display names of every culture with a localized resource file."""
    region_specific: dict[str, str] = {}
    neutral: dict[str, str] = {}

    for path in tracked_files:
        if not is_resource_file(path):
            continue
        stem = PurePosixPath(path.replace("\\", "/")).stem
        _, dot, culture_part = stem.rpartition(".")
        if not dot or not culture_part.strip():
            continue

        culture = parse_culture(culture_part)
        if culture is None:
            continue

        lang, display, is_neutral = culture
        if is_neutral:
            neutral.setdefault(lang, display)
        else:
            region_specific.setdefault(culture_part.replace("_", "-").lower(), display)

    languages = {name.lower(): name for name in region_specific.values()}
    for lang, display in neutral.items():
        if not any(key.startswith(lang + "-") for key in region_specific):
            languages.setdefault(display.lower(), display)

    return sorted(languages.values(), key=str.lower)
