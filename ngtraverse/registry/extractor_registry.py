from ngtraverse.extractors.typescript_extractor import TypeScriptMetadataExtractor

EXT_MAP = {
    "typescript": [".ts"],
    "tsx": [".tsx"],
}

INVERSE_EXTS = {ext: lang for lang, exts in EXT_MAP.items() for ext in exts}


def get_extractor(language: str, resolver=None):
    lang = language.lower()
    if lang in EXT_MAP:
        return TypeScriptMetadataExtractor(lang, resolver=resolver)
    raise ValueError(f"No extractor for language: {language}")
