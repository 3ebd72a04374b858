"""
Pipelines por categoria (armor, weapon, etcitem) e de skills.

Cada registro atual vira um snapshot enriquecido: icones em minusculas,
preco/cristais da tabela de precos, metadados de diff contra a versao
original e nome/descricao localizados.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, TypeAlias

from tqdm import tqdm  # type: ignore[import-untyped]

from ivory_data.diff import Diff, diff
from ivory_data.files import read_text
from ivory_data.parsing import NameEntry, RawRecord, identity_key, parse_block, parse_names

logger = logging.getLogger("ivory_data.pipeline")

CATEGORIES = ("armor", "weapon", "etcitem")

ITEM_BEGIN = "item_begin"
ITEM_NAME_BEGIN = "item_name_begin"
ITEM_NAME_FILE = "itemname-e.txt"
SKILL_BEGIN = "skill_begin"
SKILL_FILE = "skillgrp.txt"
SKILL_NAME_FILE = "skillname-e.txt"

Snapshot: TypeAlias = dict[str, Any]
PriceTable: TypeAlias = dict[int, dict[str, Any]]
Reader = Callable[[Path], str]


def load_price_table(data: Any) -> PriceTable:
    """Normaliza a tabela de precos para id -> entrada.

    Aceita a lista indexada por object_id ou um objeto com ids decimais.
    """
    if isinstance(data, list):
        return {idx: entry for idx, entry in enumerate(data) if isinstance(entry, dict)}
    if isinstance(data, dict):
        table: PriceTable = {}
        for key, entry in data.items():
            if isinstance(entry, dict) and str(key).isdigit():
                table[int(key)] = entry
        return table
    return {}


def lower_icons(record: Snapshot) -> Snapshot:
    icon = record.get("icon")
    if isinstance(icon, list):
        record["icon"] = [x.lower() if isinstance(x, str) else x for x in icon]
    return record


def _apply_diff(out: Snapshot, d: Diff) -> None:
    out["is_new"] = d.is_new
    out["is_changed"] = d.is_changed
    if d.changes:
        out["changes"] = dict(d.changes)


def _name_fields(entry: NameEntry, empty_description: str | None) -> dict[str, Any]:
    description = entry.description
    if empty_description is not None and not description:
        description = empty_description
    return {"name": entry.name, "description": description}


def _apply_names(
    out: Snapshot,
    current: NameEntry | None,
    original: NameEntry | None,
    empty_description: str | None = None,
) -> None:
    """Mescla a mudanca de nome/descricao e grava os valores atuais."""
    if current is None:
        return
    if original is not None:
        nd = diff(_name_fields(original, empty_description), _name_fields(current, empty_description))
        if nd.is_changed:
            out["changes"] = {**out.get("changes", {}), **nd.changes}
            out["is_changed"] = True
    # campo sem valor localizado sai do snapshot, mesmo se veio do registro bruto
    for key, value in (("name", current.name), ("description", current.description)):
        if value is None:
            out.pop(key, None)
        else:
            out[key] = value


class CategoryPipeline:
    """Gera os snapshots de uma categoria de itens."""

    def __init__(
        self,
        client_dir: Path,
        original_dir: Path,
        prices: Mapping[int, Mapping[str, Any]] | None = None,
        reader: Reader = read_text,
    ) -> None:
        self.client_dir = client_dir
        self.original_dir = original_dir
        self.prices = prices or {}
        self.read = reader
        self.names = self._load_names(client_dir)
        self.original_names = self._load_names(original_dir)

    def _load_names(self, base: Path) -> dict[str, NameEntry]:
        return parse_names(
            self.read(base / ITEM_NAME_FILE), ITEM_NAME_BEGIN, "id", "name", "description"
        )

    def _load_records(self, base: Path, category: str) -> list[RawRecord]:
        return parse_block(
            self.read(base / f"{category}grp.txt"), ITEM_BEGIN, "object_id", "object_name"
        )

    def run(self, category: str) -> list[Snapshot]:
        current = self._load_records(self.client_dir, category)
        baseline = {r["object_id"]: r for r in self._load_records(self.original_dir, category)}
        logger.debug(
            "%s: %s registros atuais, %s originais", category, len(current), len(baseline)
        )
        return [
            self.transform(record, baseline.get(record["object_id"]))
            for record in tqdm(current, desc=category, unit="item", leave=False, disable=None)
        ]

    def transform(self, record: RawRecord, original: RawRecord | None) -> Snapshot:
        out = lower_icons(dict(record))
        price = self.prices.get(record["object_id"]) if isinstance(record["object_id"], int) else None
        if price:
            if price.get("default_price") is not None:
                out["base_price"] = price["default_price"]
            if price.get("crystal_count") is not None:
                out["crystal_count"] = price["crystal_count"]
        _apply_diff(out, diff(original, record))
        key = identity_key(record["object_id"])
        _apply_names(out, self.names.get(key), self.original_names.get(key))
        return out


class SkillPipeline:
    """Snapshots de skills, identificados por (skill_id, skill_level)."""

    def __init__(self, client_dir: Path, original_dir: Path, reader: Reader = read_text) -> None:
        self.client_dir = client_dir
        self.original_dir = original_dir
        self.read = reader
        self.names = self._load_names(client_dir)
        self.original_names = self._load_names(original_dir)

    def _load_names(self, base: Path) -> dict[str, NameEntry]:
        return parse_names(
            self.read(base / SKILL_NAME_FILE), SKILL_BEGIN, "skill_id", "name", "desc", "skill_level"
        )

    def _load_records(self, base: Path) -> list[RawRecord]:
        return parse_block(self.read(base / SKILL_FILE), SKILL_BEGIN, "skill_id", "skill_level")

    @staticmethod
    def key_of(record: Mapping[str, Any]) -> str:
        return identity_key(record["skill_id"], record["skill_level"])

    def run(self) -> list[Snapshot]:
        current = self._load_records(self.client_dir)
        baseline = {self.key_of(r): r for r in self._load_records(self.original_dir)}
        logger.debug("skills: %s registros atuais, %s originais", len(current), len(baseline))
        return [
            self.transform(record, baseline.get(self.key_of(record)))
            for record in tqdm(current, desc="skills", unit="skill", leave=False, disable=None)
        ]

    def transform(self, record: RawRecord, original: RawRecord | None) -> Snapshot:
        # nome/descricao corretos vem da tabela localizada
        rest = {k: v for k, v in record.items() if k not in ("name", "description")}
        out = lower_icons(rest)
        _apply_diff(out, diff(original, record))
        key = self.key_of(record)
        _apply_names(out, self.names.get(key), self.original_names.get(key), empty_description="")
        return out
