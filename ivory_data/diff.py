"""Comparacao de um registro atual com o snapshot da versao original."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeAlias

Change: TypeAlias = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Diff:
    is_new: bool
    is_changed: bool
    changes: dict[str, Change] = field(default_factory=dict)


def values_equal(a: Any, b: Any) -> bool:
    """Igualdade profunda equivalente a comparar as formas serializadas.

    Listas comparam elemento a elemento; escalares por tipo e valor
    (True != 1, "1" != 1).
    """
    if isinstance(a, list) and isinstance(b, list):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if type(a) is not type(b):
        return False
    return a == b


def diff(original: Mapping[str, Any] | None, current: Mapping[str, Any]) -> Diff:
    """Diferencas campo a campo de ``current`` em relacao a ``original``.

    So entram campos presentes nos dois lados. Sem original (ou original
    vazio) o registro e novo. ``original`` nunca e alterado.
    """
    original = original or {}
    changes = {
        key: {"old": original[key], "new": value}
        for key, value in current.items()
        if key in original and not values_equal(original[key], value)
    }
    return Diff(is_new=not original, is_changed=bool(changes), changes=changes)
