"""Internal constants shared across the library."""

MIRRORS_URL = "https://repositories.typo3.org/mirrors.xml.gz"
DEFAULT_BASE_URL = "https://typo3.org/fileadmin/ter/"
BETA_BASE_URL = "https://beta-translation.typo3.org/fileadmin/ter/"
USER_AGENT = "pylangpack"

# ------------------------------------------------------------------
# Registry layout
# ------------------------------------------------------------------

REGISTRY_NAMESPACE = "languagePacks"
BASE_URL_KEY = "baseUrl"

# ------------------------------------------------------------------
# On-disk layout
# ------------------------------------------------------------------

TRANSIENT_DIR = "transient"
LANGUAGE_RESOURCES_DIR = ("Resources", "Private", "Language")
SYSTEM_MODULES_SEGMENT = "sysext"

#: Language names keyed by ISO code, used when no catalog is configured.
DEFAULT_LANGUAGES: dict[str, str] = {
    "default": "English",
    "af": "Afrikaans",
    "ar": "Arabic",
    "bg": "Bulgarian",
    "ca": "Catalan",
    "cs": "Czech",
    "da": "Danish",
    "de": "German",
    "el": "Greek",
    "es": "Spanish",
    "et": "Estonian",
    "fi": "Finnish",
    "fr": "French",
    "fr_CA": "French (Canada)",
    "he": "Hebrew",
    "hr": "Croatian",
    "hu": "Hungarian",
    "it": "Italian",
    "ja": "Japanese",
    "ko": "Korean",
    "lt": "Lithuanian",
    "lv": "Latvian",
    "nl": "Dutch",
    "no": "Norwegian",
    "pl": "Polish",
    "pt": "Portuguese",
    "pt_BR": "Brazilian Portuguese",
    "ro": "Romanian",
    "ru": "Russian",
    "sk": "Slovak",
    "sl": "Slovenian",
    "sr": "Serbian",
    "sv": "Swedish",
    "tr": "Turkish",
    "uk": "Ukrainian",
    "vi": "Vietnamese",
    "zh": "Chinese (Simplified)",
}

#: Languages whose packs fall back to another language's labels.
LOCALE_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "fr_CA": ("fr",),
    "pt_BR": ("pt",),
}
