import json
from pathlib import Path

import pytest

from ivory_data.build import Config


def tab_line(*parts: str) -> str:
    return "\t".join(parts)


ARMOR_CHEST = tab_line(
    "item_begin",
    "object_id=1",
    "object_name=[Chest X]",
    "body_part={[Upper Chest]}",
    "armor_type=[heavy]",
    "crystal_type=[d]",
    "icon={[Icon.Armor_T01]}",
    "item_end",
)

CUSTOM_FILES = {
    "armorgrp.txt": "\n".join(
        [
            tab_line(ARMOR_CHEST.replace("\titem_end", ""), "physical_defense=50", "item_end"),
            tab_line(
                "item_begin",
                "object_id=2",
                "object_name=[Legs Y]",
                "body_part={[legs]}",
                "armor_type=[heavy]",
                "crystal_type=[d]",
                "physical_defense=30",
                "item_end",
            ),
        ]
    ),
    "weapongrp.txt": tab_line(
        "item_begin",
        "object_id=10",
        "object_name=[Sword]",
        "weapon_type=[sword]",
        "physical_damage=12",
        "item_end",
    ),
    "itemname-e.txt": "\n".join(
        [
            tab_line("item_name_begin", "id=1", "name=[Chest X]", "description=[Base|+5 STR]", "item_name_end"),
            tab_line("item_name_begin", "id=10", "name=[Sword]", "description=[Sharp]", "item_name_end"),
        ]
    ),
    "skillgrp.txt": "\n".join(
        [
            tab_line("skill_begin", "skill_id=3", "skill_level=1", "mp_consume=10", "icon=[icon.skill0003]", "skill_end"),
            tab_line("skill_begin", "skill_id=3", "skill_level=2", "mp_consume=14", "icon=[icon.skill0003]", "skill_end"),
        ]
    ),
    "skillname-e.txt": "\n".join(
        [
            tab_line("skill_begin", "skill_id=3", "skill_level=1", "name=[Power Strike]", "desc=[Hit hard]", "skill_end"),
            tab_line("skill_begin", "skill_id=3", "skill_level=2", "name=[Power Strike]", "desc=[Hit harder]", "skill_end"),
        ]
    ),
}

ORIGINAL_FILES = {
    "armorgrp.txt": tab_line(ARMOR_CHEST.replace("\titem_end", ""), "physical_defense=45", "item_end"),
    "weapongrp.txt": CUSTOM_FILES["weapongrp.txt"],
    "itemname-e.txt": "\n".join(
        [
            tab_line("item_name_begin", "id=1", "name=[Chest X]", "description=[Base|+3 STR]", "item_name_end"),
            tab_line("item_name_begin", "id=10", "name=[Sword]", "description=[Sharp]", "item_name_end"),
        ]
    ),
    "skillgrp.txt": "\n".join(
        [
            tab_line("skill_begin", "skill_id=3", "skill_level=1", "mp_consume=10", "icon=[icon.skill0003]", "skill_end"),
            tab_line("skill_begin", "skill_id=3", "skill_level=2", "mp_consume=12", "icon=[icon.skill0003]", "skill_end"),
        ]
    ),
    "skillname-e.txt": CUSTOM_FILES["skillname-e.txt"],
}

ITEMDATA = [None, {"default_price": 100, "crystal_count": 5}, {"default_price": 40}]

SETS = [{"id": "1", "name": "Set A", "items": ["Chest X", "Legs Y", "Missing Z"]}]


def write_tree(base: Path, files: dict[str, str]) -> Path:
    base.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (base / name).write_text(content + "\n", encoding="utf-8")
    return base


@pytest.fixture
def client_tree(tmp_path: Path) -> Config:
    """Arvore de dados minima: versao atual, original, precos e conjuntos."""
    data_dir = tmp_path / "data"
    write_tree(data_dir / "custom", CUSTOM_FILES)
    write_tree(data_dir / "original", ORIGINAL_FILES)
    (data_dir / "itemdata.json").write_text(json.dumps(ITEMDATA), encoding="utf-8")
    (data_dir / "sets.json").write_text(json.dumps(SETS), encoding="utf-8")
    return Config(
        client_dir=data_dir / "custom",
        original_dir=data_dir / "original",
        sets_path=data_dir / "sets.json",
        itemdata_path=data_dir / "itemdata.json",
        output_dir=tmp_path / "public" / "data",
        log_dir=tmp_path / "logs",
    )
