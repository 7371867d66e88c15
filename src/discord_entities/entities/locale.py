from __future__ import annotations

from enum import unique

from .coded import UNKNOWN_STRING_KEY, StringCodedEnum


@unique
class DiscordLocale(StringCodedEnum):
    """Locales Discord accepts for user, guild and command localizations."""

    INDONESIAN = ("id", "Indonesian", "Bahasa Indonesia")
    DANISH = ("da", "Danish", "Dansk")
    GERMAN = ("de", "German", "Deutsch")
    ENGLISH_UK = ("en-GB", "English, UK", "English, UK")
    ENGLISH_US = ("en-US", "English, US", "English, US")
    SPANISH = ("es-ES", "Spanish", "Español")
    SPANISH_LATAM = ("es-419", "Spanish, LATAM", "Español, LATAM")
    FRENCH = ("fr", "French", "Français")
    CROATIAN = ("hr", "Croatian", "Hrvatski")
    ITALIAN = ("it", "Italian", "Italiano")
    LITHUANIAN = ("lt", "Lithuanian", "Lietuviškai")
    HUNGARIAN = ("hu", "Hungarian", "Magyar")
    DUTCH = ("nl", "Dutch", "Nederlands")
    NORWEGIAN = ("no", "Norwegian", "Norsk")
    POLISH = ("pl", "Polish", "Polski")
    PORTUGUESE_BRAZILIAN = ("pt-BR", "Portuguese, Brazilian", "Português do Brasil")
    ROMANIAN_ROMANIA = ("ro", "Romanian, Romania", "Română")
    FINNISH = ("fi", "Finnish", "Suomi")
    SWEDISH = ("sv-SE", "Swedish", "Svenska")
    VIETNAMESE = ("vi", "Vietnamese", "Tiếng Việt")
    TURKISH = ("tr", "Turkish", "Türkçe")
    CZECH = ("cs", "Czech", "Čeština")
    GREEK = ("el", "Greek", "Ελληνικά")
    BULGARIAN = ("bg", "Bulgarian", "български")
    RUSSIAN = ("ru", "Russian", "Pусский")
    UKRAINIAN = ("uk", "Ukrainian", "Українська")
    HINDI = ("hi", "Hindi", "हिन्दी")
    THAI = ("th", "Thai", "ไทย")
    CHINESE_CHINA = ("zh-CN", "Chinese, China", "中文")
    JAPANESE = ("ja", "Japanese", "日本語")
    CHINESE_TAIWAN = ("zh-TW", "Chinese, Taiwan", "繁體中文")
    KOREAN = ("ko", "Korean", "한국어")

    UNKNOWN = (UNKNOWN_STRING_KEY, "Unknown", "Unknown")

    def __init__(self, tag: str, language_name: str, native_name: str) -> None:
        self.language_name = language_name
        self.native_name = native_name

    @property
    def locale_tag(self) -> str:
        return self.key


__all__ = ["DiscordLocale"]
