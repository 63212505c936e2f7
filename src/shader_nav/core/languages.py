from pathlib import Path

from shader_nav.errors import UnsupportedLanguageError

_LANGUAGE_ALIASES = {
    "c": "c",
    "glsl": "glsl",
    "opengl": "glsl",
    "vulkan": "glsl",
    "hlsl": "hlsl",
    "directx": "hlsl",
}

_EXTENSION_LANGUAGE_MAP = {
    ".c": "c",
    ".comp": "glsl",
    ".frag": "glsl",
    ".fs": "glsl",
    ".fx": "hlsl",
    ".fxh": "hlsl",
    ".geom": "glsl",
    ".glsl": "glsl",
    ".gs": "glsl",
    ".h": "c",
    ".hlsl": "hlsl",
    ".hlsli": "hlsl",
    ".mesh": "glsl",
    ".rchit": "glsl",
    ".rgen": "glsl",
    ".rmiss": "glsl",
    ".task": "glsl",
    ".tesc": "glsl",
    ".tese": "glsl",
    ".vert": "glsl",
    ".vs": "glsl",
}

_SUPPORTED_LANGUAGES = set(_LANGUAGE_ALIASES.values())


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise UnsupportedLanguageError(
            f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}"
        )
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise UnsupportedLanguageError(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, file_path: Path | None) -> str:
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise UnsupportedLanguageError("Language must be provided when no file path is available.")
