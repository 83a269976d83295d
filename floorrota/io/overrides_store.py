from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.items import Table

from floorrota.calendar.utils import format_date, parse_date
from floorrota.domain.types import DayOverride
from floorrota.schedule.overrides import clean_override

log = logging.getLogger(__name__)


def _find_worker(doc: tomlkit.TOMLDocument, worker_id: str, path: Path) -> Table:
    for worker in doc.get("workers", []):
        if str(worker.get("id")) == worker_id:
            return worker
    raise ValueError(f"{path}: 作業員 '{worker_id}' が見つかりません")


def _read(path: Path) -> tomlkit.TOMLDocument:
    return tomlkit.parse(path.read_text(encoding="utf-8-sig"))


def _write(path: Path, doc: tomlkit.TOMLDocument) -> None:
    path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def save_override(path: str | Path, worker_id: str, date_str: str, override: DayOverride) -> None:
    """
    workers.toml の該当作業員に manual_overrides."<date>" を書き込む。
    コメントや書式は tomlkit でそのまま保つ。空の上書きはリセットとして扱う。
    """
    path = Path(path)
    date_str = format_date(parse_date(date_str))
    override = clean_override(override)
    if override.is_empty:
        reset_override(path, worker_id, date_str)
        return

    doc = _read(path)
    worker = _find_worker(doc, worker_id, path)
    overrides: Any = worker.get("manual_overrides")
    if overrides is None:
        overrides = tomlkit.table(is_super_table=True)
        worker["manual_overrides"] = overrides

    entry = tomlkit.table()
    for key, value in override.to_dict().items():
        entry[key] = value
    overrides[date_str] = entry
    _write(path, doc)
    log.info("overrides: saved %s %s", worker_id, date_str)


def reset_override(path: str | Path, worker_id: str, date_str: str) -> bool:
    """該当日の上書きを削除する。もともと無ければ何もせず False を返す。"""
    path = Path(path)
    date_str = format_date(parse_date(date_str))
    doc = _read(path)
    worker = _find_worker(doc, worker_id, path)
    overrides: Any = worker.get("manual_overrides")
    if overrides is None or date_str not in overrides:
        return False

    del overrides[date_str]
    if not overrides:
        del worker["manual_overrides"]
    _write(path, doc)
    log.info("overrides: reset %s %s", worker_id, date_str)
    return True
