"""Leitura e escrita de arquivos do pipeline."""

import logging
from pathlib import Path
from typing import Any

import chardet
import orjson

logger = logging.getLogger("ivory_data.files")

MAX_DETECT_BYTES = 64 * 1024  # amostra usada na deteccao de encoding
BOM_ENCODINGS = ("utf-8-sig", "utf-16")


def detect_encoding(raw: bytes) -> str:
    """Detecta a codificacao de caracteres; utf-8 se nao houver palpite."""
    if raw.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if raw.startswith((b"\xff\xfe", b"\xfe\xff")):
        return "utf-16"
    encoding = chardet.detect(raw[:MAX_DETECT_BYTES])["encoding"]
    # ascii na amostra nao garante o resto do arquivo; utf-8 cobre ascii
    if not encoding or encoding.lower() == "ascii":
        return "utf-8"
    return encoding


def read_text(path: Path) -> str:
    """Conteudo do arquivo, ou '' se ele nao existir."""
    if not path.exists():
        logger.debug("Arquivo ausente, tratado como vazio: %s", path)
        return ""
    raw = path.read_bytes()
    encoding = detect_encoding(raw)
    # sem BOM, utf-8 valido vence o palpite do chardet
    order = (encoding, "utf-8") if encoding in BOM_ENCODINGS else ("utf-8", encoding)
    for candidate in dict.fromkeys(order):
        try:
            return raw.decode(candidate)
        except LookupError:
            logger.warning("Encoding desconhecido '%s' em %s", candidate, path)
        except UnicodeDecodeError:
            logger.debug("Arquivo %s nao decodifica como %s", path, candidate)
    logger.warning("Caracteres invalidos substituidos ao ler %s", path)
    return raw.decode("utf-8", errors="replace")


def read_json(path: Path, default: Any) -> Any:
    """JSON do arquivo, ou ``default`` se ele nao existir."""
    if not path.exists():
        logger.warning("Arquivo JSON ausente, usando padrao vazio: %s", path)
        return default
    return orjson.loads(path.read_bytes())


def write_json(path: Path, data: Any) -> None:
    """Grava ``data`` com indentacao de 2 espacos, substituindo o arquivo."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".part")
    tmp_path.write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
    tmp_path.replace(path)
