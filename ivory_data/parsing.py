"""
Leitura das tabelas de texto do cliente (formato tab-delimitado).

Cada linha relevante comeca com um marcador (ex.: ``item_begin``) seguido
de segmentos ``chave=valor`` separados por TAB. Aqui ficam o conversor de
valores, o parser de linha, o extrator de registros e o construtor da
tabela de nomes/descricoes.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeAlias

logger = logging.getLogger("ivory_data.parsing")

RawValue: TypeAlias = int | bool | str | list[str]
RawRecord: TypeAlias = dict[str, RawValue]

# Regex pré-compiladas para hot paths
_RE_DIGITS = re.compile(r"[0-9]+")
_RE_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")
_RE_BRACKETS = re.compile(r"^\[|\]$")

LIST_OPEN = "{"
LIST_SEPARATOR = ";"
MAX_JSON_INT = 2**64 - 1  # maior inteiro que o orjson grava


def clean(s: str) -> str:
    """Remove um '[' inicial e um ']' final."""
    return _RE_BRACKETS.sub("", s)


def coerce_value(token: str) -> RawValue:
    """Converte o token bruto em int, bool, str ou lista de str.

    Nunca levanta excecao: tokens malformados ficam como texto.
    """
    text = token.strip()
    if text.startswith(LIST_OPEN):
        return [clean(part) for part in text[1:-1].split(LIST_SEPARATOR)]
    s = clean(text)
    if _RE_DIGITS.fullmatch(s) and (n := int(s)) <= MAX_JSON_INT:
        return n
    match s:
        case "true":
            return True
        case "false":
            return False
    return s


def parse_leading_int(val: str) -> int | None:
    """Inteiro no inicio de val (como parseInt), ou None."""
    if not (match := _RE_LEADING_INT.match(val)):
        return None
    return int(match.group(1))


def iter_segments(line: str) -> Iterator[tuple[str, str]]:
    """Gera pares (chave, valor) ja aparados de uma linha tab-delimitada.

    Segmentos sem '=' ou com chave/valor vazios sao ignorados.
    """
    for part in line.split("\t"):
        if not part:
            continue
        key, sep, val = part.partition("=")
        if not sep or not key.strip() or not val.strip():
            continue
        yield key.strip(), val.strip()


def parse_line(line: str) -> RawRecord:
    return {key: coerce_value(val) for key, val in iter_segments(line)}


def iter_marked_lines(content: str, begin: str) -> Iterator[str]:
    for raw_line in content.split("\n"):
        line = raw_line.strip()
        if line and line.startswith(begin):
            yield line


def parse_block(
    content: str, begin: str, required: str, *also_required: str
) -> list[RawRecord]:
    """Extrai os registros das linhas com o marcador ``begin``.

    Linhas sem todas as chaves obrigatorias sao descartadas sem erro: as
    chaves funcionam como filtro de esquema entre tipos de registro do
    mesmo arquivo.
    """
    keys = (required, *also_required)
    out: list[RawRecord] = []
    dropped = 0
    for line in iter_marked_lines(content, begin):
        record = parse_line(line)
        if all(k in record for k in keys):
            out.append(record)
        else:
            dropped += 1
    if dropped:
        logger.debug(
            "%s linha(s) '%s' sem chaves obrigatorias %s", dropped, begin, keys
        )
    return out


@dataclass(slots=True)
class NameEntry:
    id: int
    name: str | None = None
    description: str | None = None
    level: int | None = None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"id": self.id}
        if self.name is not None:
            out["name"] = self.name
        if self.description is not None:
            out["description"] = self.description
        if self.level is not None:
            out["level"] = self.level
        return out


def identity_key(entity_id: Any, level: Any = None) -> str:
    """Chave de identidade: 'id' ou composta 'id_level'."""
    return f"{entity_id}_{level}" if level is not None else str(entity_id)


def parse_names(
    content: str,
    begin: str,
    id_key: str,
    name_key: str,
    desc_key: str,
    lvl_key: str | None = None,
) -> dict[str, NameEntry]:
    """Monta a tabela id (ou id_level) -> nome/descricao localizados.

    Linhas sem id sao puladas; chaves duplicadas: a ultima vence.
    """
    table: dict[str, NameEntry] = {}
    for line in iter_marked_lines(content, begin):
        fields: dict[str, Any] = {}
        for key, val in iter_segments(line):
            if key == id_key:
                fields["id"] = parse_leading_int(val)
            elif key == name_key:
                fields["name"] = clean(val)
            elif key == desc_key:
                fields["description"] = clean(val)
            elif lvl_key and key == lvl_key:
                fields["level"] = parse_leading_int(val)
        if fields.get("id") is None:
            continue
        entry = NameEntry(**fields)
        level = entry.level if lvl_key else None
        table[identity_key(entry.id, level)] = entry
    logger.debug("Tabela de nomes '%s': %s entradas", begin, len(table))
    return table
