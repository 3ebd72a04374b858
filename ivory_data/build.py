"""
Build dos dados do Tower of Ivory -> JSON do site.

Este arquivo atua como o "maestro": le as tabelas de texto do cliente
(versao atual e original), passa cada categoria pelo seu pipeline e
grava armor.json, weapon.json, etcitem.json, skills.json e, por ultimo,
armorsets.json a partir dos catalogos ja gravados.
"""

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ivory_data.armorsets import ArmorSetComposer
from ivory_data.files import read_json, write_json
from ivory_data.pipeline import CATEGORIES, CategoryPipeline, SkillPipeline, load_price_table
from ivory_data.utils import check_and_create_directories, print_build_summary

logger = logging.getLogger("ivory_data")  # console/general logger
LOG_FILE_NAME = "build_data.log"
SKILLS_OUTPUT = "skills.json"
SETS_OUTPUT = "armorsets.json"


@dataclass(slots=True)
class Config:
    client_dir: Path
    original_dir: Path
    sets_path: Path
    itemdata_path: Path
    output_dir: Path
    log_dir: Path
    log_level: str = "INFO"


def load_config_from_env(root: Path | None = None) -> Config:
    root = root or Path.cwd()
    data_dir = Path(os.getenv("IVORY_DATA_DIR", root / "data"))
    return Config(
        client_dir=Path(os.getenv("IVORY_CLIENT_DIR", data_dir / "custom")),
        original_dir=Path(os.getenv("IVORY_ORIGINAL_DIR", data_dir / "original")),
        sets_path=Path(os.getenv("IVORY_SETS_PATH", data_dir / "sets.json")),
        itemdata_path=Path(os.getenv("IVORY_ITEMDATA_PATH", data_dir / "itemdata.json")),
        output_dir=Path(os.getenv("IVORY_OUTPUT_DIR", root / "public" / "data")),
        log_dir=Path(os.getenv("IVORY_LOG_DIR", root / "logs")),
        log_level=os.getenv("IVORY_LOG_LEVEL", "INFO").upper(),
    )


def _configure_stdout() -> None:
    if str(getattr(sys.stdout, "encoding", "")).lower() != "utf-8" and hasattr(
        sys.stdout, "reconfigure"
    ):
        try:
            sys.stdout.reconfigure(encoding="utf-8")
        except AttributeError:
            logger.warning("Nao foi possivel reconfigurar stdout para utf-8")


def _configure_logging(log_dir: Path, log_level: str = "INFO") -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    level = getattr(logging, log_level, logging.INFO)
    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    file_handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        mode="a",
        maxBytes=5 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
        delay=True,
    )
    file_handler.setLevel(logging.ERROR)
    handlers: list[logging.Handler] = [file_handler, logging.StreamHandler(sys.stdout)]
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=handlers,
        force=True,
    )
    logger.setLevel(level)


def run_client(cfg: Config) -> dict[str, list[dict[str, Any]]]:
    """Gera os JSONs de itens e skills. Retorna os arrays gravados."""
    prices = load_price_table(read_json(cfg.itemdata_path, default=[]))
    items = CategoryPipeline(cfg.client_dir, cfg.original_dir, prices)
    outputs: dict[str, list[dict[str, Any]]] = {}

    for category in CATEGORIES:
        out = items.run(category)
        write_json(cfg.output_dir / f"{category}.json", out)
        logger.info("client: %s %s itens", category, len(out))
        outputs[f"{category}.json"] = out

    skills = SkillPipeline(cfg.client_dir, cfg.original_dir).run()
    write_json(cfg.output_dir / SKILLS_OUTPUT, skills)
    logger.info("client: skills %s", len(skills))
    outputs[SKILLS_OUTPUT] = skills
    return outputs


def run_sets(cfg: Config) -> list[dict[str, Any]]:
    """Gera armorsets.json a partir de armor.json/weapon.json ja gravados."""
    armor = read_json(cfg.output_dir / "armor.json", default=[])
    weapon = read_json(cfg.output_dir / "weapon.json", default=[])
    sets = read_json(cfg.sets_path, default=[])

    out = ArmorSetComposer(armor, weapon).compose(sets)
    write_json(cfg.output_dir / SETS_OUTPUT, out)
    logger.info("custom: %s conjuntos -> %s", len(out), cfg.output_dir / SETS_OUTPUT)
    return out


def run(cfg: Config) -> dict[str, list[dict[str, Any]]]:
    outputs = run_client(cfg)
    outputs[SETS_OUTPUT] = run_sets(cfg)
    return outputs


def main() -> None:
    _configure_stdout()
    cfg = load_config_from_env()
    _configure_logging(cfg.log_dir, cfg.log_level)
    check_and_create_directories(cfg.output_dir)
    for name, path in [("cliente", cfg.client_dir), ("original", cfg.original_dir)]:
        if not path.is_dir():
            logger.warning("Diretorio %s nao encontrado: %s", name, path)
    try:
        outputs = run(cfg)
    except OSError:
        logger.exception("Falha de leitura ou escrita durante o build (saida: %s)", cfg.output_dir)
        raise
    print_build_summary(outputs)
    logger.info("Build concluido com sucesso.")


if __name__ == "__main__":
    main()
