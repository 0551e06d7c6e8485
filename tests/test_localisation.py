import localisation
from localisation import available_languages, resolve_language, shape_label, tr


def test_fallback_chain_to_base_and_english():
    assert resolve_language("fr-CA") == "fr"
    assert resolve_language("FR") == "fr"
    assert resolve_language("de") == "en"
    assert resolve_language("") == "en"


def test_tr_formats_fields():
    assert tr("en", "error_missing_param", role="guide", kind="Rod") == "guide type Rod requires guide_param"
    assert tr("fr_CA", "error_missing_param", role="wheel", kind="Rod") == "le type Rod exige le champ wheel_param"


def test_unknown_key_is_returned_as_is():
    assert tr("en", "no_such_key") == "no_such_key"


def test_shape_labels():
    assert shape_label("Circle", "en") == "Circle"
    assert shape_label("Rod", "fr") == "Bâtonnet"
    assert shape_label("Ellipse", "fr") == "Ellipse"


def test_available_languages_are_complete():
    languages = available_languages()
    assert "en" in languages and "fr" in languages
    for code in languages:
        assert localisation.missing_string_keys(code) == []


def test_default_language_from_environment(monkeypatch):
    monkeypatch.setenv(localisation.LANGUAGE_ENV_VAR, "fr-BE")
    assert localisation.default_language() == "fr_be"
    monkeypatch.delenv(localisation.LANGUAGE_ENV_VAR)
    assert localisation.default_language() == "en"
