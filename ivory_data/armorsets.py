import logging
from collections.abc import Iterable, Mapping
from typing import Any, TypeAlias

logger = logging.getLogger("ivory_data.armorsets")

Item: TypeAlias = dict[str, Any]
SetDefinition: TypeAlias = Mapping[str, Any]
ArmorSet: TypeAlias = dict[str, Any]

DEFAULT_ARMOR_TYPE = "light"
NO_GRADE = "none"
CHEST_MARKER = "chest"
BONUS_SEPARATOR = "|"


class ArmorSetComposer:
    """Monta os conjuntos de armadura a partir dos catalogos ja gerados.

    Recebe as definicoes escritas a mao (``{id, name, items}``) e resolve
    cada nome de item contra armor.json + weapon.json. Nomes nao
    encontrados viram ``None`` na mesma posicao.
    """

    def __init__(self, armor: Iterable[Item], weapon: Iterable[Item]) -> None:
        # armor primeiro, weapon depois: o ultimo com o mesmo nome vence
        self.catalog: dict[str, Item] = {}
        for item in (*armor, *weapon):
            self.catalog[item.get("object_name")] = item

    def compose(self, sets: Iterable[SetDefinition]) -> list[ArmorSet]:
        return [self.compose_one(s) for s in sets]

    def compose_one(self, definition: SetDefinition) -> ArmorSet:
        items = [self.catalog.get(name) for name in definition.get("items", [])]
        missing = [n for n, it in zip(definition.get("items", []), items) if it is None]
        if missing:
            logger.debug("Conjunto %s: itens nao encontrados %s", definition.get("id"), missing)
        chest = next((it for it in items if self._is_chest(it)), None) or {}
        armor_type = chest.get("armor_type")
        return {
            "id": definition.get("id"),
            "name": definition.get("name"),
            "armor_type": DEFAULT_ARMOR_TYPE if armor_type is None else armor_type,
            "grade": self._grade(chest.get("crystal_type")),
            "set_bonus": self._set_bonus(chest.get("description")),
            "physical_defense": self._total(items, "physical_defense"),
            "base_price": self._total(items, "base_price"),
            "items": items,
        }

    @staticmethod
    def _is_chest(item: Item | None) -> bool:
        if not item or not isinstance(item.get("body_part"), list):
            return False
        return any(CHEST_MARKER in str(part).lower() for part in item["body_part"])

    @staticmethod
    def _grade(crystal_type: Any) -> str:
        grade = str(crystal_type).strip() if crystal_type is not None else ""
        if not grade or grade.lower() == NO_GRADE:
            return NO_GRADE
        return grade

    @staticmethod
    def _set_bonus(description: Any) -> str:
        """Tudo depois do primeiro segmento '|' da descricao do peitoral."""
        if not description:
            return ""
        return BONUS_SEPARATOR.join(str(description).split(BONUS_SEPARATOR)[1:])

    @staticmethod
    def _total(items: list[Item | None], prop: str) -> int | float:
        total: int | float = 0
        for item in items:
            if not item:
                continue
            val = item.get(prop)
            if isinstance(val, str):
                try:
                    val = float(val)
                except ValueError:
                    continue
            if isinstance(val, bool) or not isinstance(val, (int, float)):
                continue
            total += val
        return total
