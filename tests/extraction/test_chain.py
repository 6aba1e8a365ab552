from __future__ import annotations

from patextract.extraction.chain import first_present, is_present, none_if_empty


def test_first_present_short_circuits_on_first_value() -> None:
    calls: list[str] = []

    def primary(source: str) -> str | None:
        calls.append("primary")
        return None

    def secondary(source: str) -> str | None:
        calls.append("secondary")
        return f"{source}-secondary"

    def tertiary(source: str) -> str | None:
        calls.append("tertiary")
        return "unused"

    assert first_present("field", "doc", (primary, secondary, tertiary)) == "doc-secondary"
    assert calls == ["primary", "secondary"]


def test_first_present_treats_empty_values_as_absent() -> None:
    assert first_present("field", None, (lambda _: "", lambda _: [], lambda _: ["x"])) == ["x"]
    assert first_present("field", None, (lambda _: "", lambda _: None)) is None


def test_presence_helpers() -> None:
    assert is_present(0) is True
    assert is_present("") is False
    assert is_present(()) is False
    assert none_if_empty([]) is None
    assert none_if_empty("value") == "value"
