"""Locale tables for picker chrome and calendar labels.

The picker core never looks text up by itself: hosts resolve a
:class:`PickerLocalizations` (built in or registered with
:func:`register_locale`) and hand its tables to the adapters. English is the
fallback for every lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class PickerLocalizations:
    """Text used by a picker for one locale."""

    code: str
    cancel: str
    confirm: str
    ampm: Tuple[str, str]
    months: Tuple[str, ...]
    months_long: Tuple[str, ...]


def _table(code, cancel, confirm, ampm, months, months_long) -> PickerLocalizations:
    return PickerLocalizations(
        code=code,
        cancel=cancel,
        confirm=confirm,
        ampm=tuple(ampm),
        months=tuple(months),
        months_long=tuple(months_long),
    )


def _numbered(unit: str) -> Tuple[str, ...]:
    return tuple(f"{i}{unit}" for i in range(1, 13))


MONTHS_EN = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
MONTHS_EN_LONG = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
AMPM_EN = ("AM", "PM")

_BUILTIN: Dict[str, PickerLocalizations] = {
    t.code: t
    for t in (
        _table("en", "Cancel", "Confirm", AMPM_EN, MONTHS_EN, MONTHS_EN_LONG),
        _table(
            "zh", "取消", "确定", ("上午", "下午"),
            ["一月", "二月", "三月", "四月", "五月", "六月",
             "七月", "八月", "九月", "十月", "十一月", "十二月"],
            ["一月", "二月", "三月", "四月", "五月", "六月",
             "七月", "八月", "九月", "十月", "十一月", "十二月"],
        ),
        _table("ja", "キャンセル", "完了", ("午前", "午後"), _numbered("月"), _numbered("月")),
        _table("ko", "취소", "확인", ("오전", "오후"), _numbered("월"), _numbered("월")),
        _table(
            "de", "Abbrechen", "Bestätigen", ("vorm.", "nachm."),
            ["Jan", "Feb", "März", "Apr", "Mai", "Juni",
             "Juli", "Aug", "Sep", "Okt", "Nov", "Dez"],
            ["Januar", "Februar", "März", "April", "Mai", "Juni",
             "Juli", "August", "September", "Oktober", "November", "Dezember"],
        ),
        _table(
            "fr", "Annuler", "Confirmer", AMPM_EN,
            ["janv.", "févr.", "mars", "avr.", "mai", "juin",
             "juil.", "août", "sept.", "oct.", "nov.", "déc."],
            ["janvier", "février", "mars", "avril", "mai", "juin",
             "juillet", "août", "septembre", "octobre", "novembre", "décembre"],
        ),
        _table(
            "es", "Cancelar", "Confirmar", ("a. m.", "p. m."),
            ["ene", "feb", "mar", "abr", "may", "jun",
             "jul", "ago", "sep", "oct", "nov", "dic"],
            ["enero", "febrero", "marzo", "abril", "mayo", "junio",
             "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"],
        ),
        _table(
            "it", "Annulla", "Conferma", AMPM_EN,
            ["gen", "feb", "mar", "apr", "mag", "giu",
             "lug", "ago", "set", "ott", "nov", "dic"],
            ["gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
             "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre"],
        ),
        _table(
            "pt", "Cancelar", "Confirmar", AMPM_EN,
            ["jan", "fev", "mar", "abr", "mai", "jun",
             "jul", "ago", "set", "out", "nov", "dez"],
            ["janeiro", "fevereiro", "março", "abril", "maio", "junho",
             "julho", "agosto", "setembro", "outubro", "novembro", "dezembro"],
        ),
        _table(
            "ru", "Отмена", "Готово", ("ДП", "ПП"),
            ["янв", "фев", "мар", "апр", "май", "июн",
             "июл", "авг", "сен", "окт", "ноя", "дек"],
            ["Январь", "Февраль", "Март", "Апрель", "Май", "Июнь",
             "Июль", "Август", "Сентябрь", "Октябрь", "Ноябрь", "Декабрь"],
        ),
    )
}

_CUSTOM: Dict[str, PickerLocalizations] = {}


def _normalize_code(code: str) -> str:
    return str(code).strip().replace("-", "_").lower()


def validate_ampm(ampm: Sequence[str]) -> Tuple[str, str]:
    """Return ``ampm`` as a pair or raise ``ValueError``."""
    if isinstance(ampm, str):
        raise ValueError("ampm must be a sequence of 2 strings, not a string")
    values = tuple(str(v) for v in ampm)
    if len(values) != 2:
        raise ValueError(f"ampm must contain exactly 2 entries, got {len(values)}")
    return values  # type: ignore[return-value]


def validate_months(months: Sequence[str], *, name: str = "months") -> Tuple[str, ...]:
    """Return ``months`` as a 12-tuple or raise ``ValueError``."""
    if isinstance(months, str):
        raise ValueError(f"{name} must be a sequence of 12 strings, not a string")
    values = tuple(str(v) for v in months)
    if len(values) != 12:
        raise ValueError(f"{name} must contain exactly 12 entries, got {len(values)}")
    return values


def register_locale(
    code: str,
    *,
    cancel: Optional[str] = None,
    confirm: Optional[str] = None,
    ampm: Optional[Sequence[str]] = None,
    months: Optional[Sequence[str]] = None,
    months_long: Optional[Sequence[str]] = None,
) -> PickerLocalizations:
    """Register (or replace) the tables for ``code``.

    Missing tables are inherited from the built-in table for ``code`` when one
    exists, otherwise from English. Every table is validated before anything
    is stored, so a failing call leaves earlier registrations untouched.

    Raises
    ------
    ValueError
        If ``code`` is empty, ``ampm`` does not hold exactly two entries, or a
        month table does not hold exactly twelve entries.
    """
    key = _normalize_code(code)
    if not key:
        raise ValueError("locale code must be a non-empty string")
    base = _BUILTIN.get(key, _BUILTIN["en"])
    table = PickerLocalizations(
        code=key,
        cancel=base.cancel if cancel is None else str(cancel),
        confirm=base.confirm if confirm is None else str(confirm),
        ampm=base.ampm if ampm is None else validate_ampm(ampm),
        months=base.months if months is None else validate_months(months),
        months_long=(
            base.months_long
            if months_long is None
            else validate_months(months_long, name="months_long")
        ),
    )
    _CUSTOM[key] = table
    logger.info(f"registered picker locale {key!r}")
    return table


def unregister_locale(code: str) -> None:
    """Forget a custom registration; built-in tables cannot be removed."""
    _CUSTOM.pop(_normalize_code(code), None)


def available_locales() -> Tuple[str, ...]:
    return tuple(sorted(set(_BUILTIN) | set(_CUSTOM)))


def localizations_for(code: Optional[str] = None, *, strict: bool = False) -> PickerLocalizations:
    """Resolve the tables for ``code``.

    Lookup order: custom registration, built-in table, then the same two for
    the language part of ``code`` (``"pt_BR"`` -> ``"pt"``), then English.

    Raises
    ------
    KeyError
        If ``strict`` is true and nothing but the English fallback matches.
    """
    key = _normalize_code(code or "en")
    candidates = [key]
    lang = key.split("_", 1)[0]
    if lang != key:
        candidates.append(lang)
    for candidate in candidates:
        if candidate in _CUSTOM:
            return _CUSTOM[candidate]
        if candidate in _BUILTIN:
            return _BUILTIN[candidate]
    if strict:
        raise KeyError(f"Unknown picker locale: {code!r}")
    return _BUILTIN["en"]
