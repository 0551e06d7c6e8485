import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

LOCALISATION_DIR = Path(__file__).resolve().parent / "localisation"
DEFAULT_LANGUAGE = "en"
LANGUAGE_ENV_VAR = "SPIROGEN_LANG"
_SECTIONS = ("strings", "shape_labels")
_LOGGER = logging.getLogger(__name__)


def normalize_language(lang: str) -> str:
    return (lang or "").strip().lower().replace("-", "_")


def default_language() -> str:
    return normalize_language(os.environ.get(LANGUAGE_ENV_VAR, "")) or DEFAULT_LANGUAGE


def _fallback_chain(lang: str) -> List[str]:
    """Most specific first: ``fr_ca`` -> ``fr`` -> ``en``."""
    cleaned = normalize_language(lang)
    chain: List[str] = []
    if cleaned:
        chain.append(cleaned)
        base = cleaned.split("_", 1)[0]
        if base not in chain:
            chain.append(base)
    if DEFAULT_LANGUAGE not in chain:
        chain.append(DEFAULT_LANGUAGE)
    return chain


def _table_path(code: str) -> Path:
    return LOCALISATION_DIR / code / "strings.json"


@lru_cache(maxsize=None)
def _load_table(code: str) -> Dict[str, Any]:
    path = _table_path(code)
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@lru_cache(maxsize=None)
def _catalogue(lang: str) -> Dict[str, Dict[str, str]]:
    merged: Dict[str, Dict[str, str]] = {section: {} for section in _SECTIONS}
    # the fallback language goes in first so the requested one wins
    for code in reversed(_fallback_chain(lang)):
        table = _load_table(code)
        for section in _SECTIONS:
            merged[section].update(table.get(section, {}))
    _warn_missing_strings(lang)
    return merged


def tr(lang: str, key: str, **fields: Any) -> str:
    """Translated string for ``key``; the key itself when nothing matches."""
    text = _catalogue(normalize_language(lang))["strings"].get(key, key)
    if fields:
        return text.format(**fields)
    return text


def shape_label(kind: str, lang: str) -> str:
    return _catalogue(normalize_language(lang))["shape_labels"].get(kind, kind)


def available_languages() -> List[str]:
    if not LOCALISATION_DIR.exists():
        return [DEFAULT_LANGUAGE]
    codes = [entry.name for entry in LOCALISATION_DIR.iterdir() if _table_path(entry.name).exists()]
    return sorted(codes) or [DEFAULT_LANGUAGE]


def resolve_language(lang: str) -> str:
    for code in _fallback_chain(lang):
        if _table_path(code).exists():
            return code
    return DEFAULT_LANGUAGE


def missing_string_keys(lang: str) -> List[str]:
    code = resolve_language(lang)
    if code == DEFAULT_LANGUAGE:
        return []
    reference = _load_table(DEFAULT_LANGUAGE).get("strings", {})
    local = _load_table(code).get("strings", {})
    if not reference or not local:
        return []
    return sorted(set(reference) - set(local))


def _warn_missing_strings(lang: str) -> None:
    missing = missing_string_keys(lang)
    if missing:
        _LOGGER.warning(
            "Missing localisation strings for %s: %s",
            resolve_language(lang),
            ", ".join(missing),
        )
