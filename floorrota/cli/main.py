# floorrota/cli/main.py
from __future__ import annotations

import argparse
import datetime as dt
import json
import logging
import pathlib
import sys

from rich.console import Console
from rich.logging import RichHandler

from floorrota import __version__
from floorrota.calendar.utils import InvalidFormat, format_date, parse_date, week_start_sunday
from floorrota.domain.config import DEFAULT_ROTATION_CONFIG
from floorrota.domain.types import RotationConfig, ShiftKind
from floorrota.io.export_excel import export_week_to_excel
from floorrota.io.overrides_store import reset_override, save_override
from floorrota.io.rotation_loader import load_rotation_config
from floorrota.io.workers_loader import load_workers
from floorrota.report.console import print_week_rich
from floorrota.report.grid import select_workers
from floorrota.schedule.assembler import (
    build_weekly_schedule,
    regenerate_schedules,
    schedules_by_worker,
)
from floorrota.schedule.overrides import override_from_edit

# config ディレクトリのデフォルト
CONFIG_DIR = pathlib.Path(__file__).resolve().parent.parent.parent / "config"
DEFAULT_WORKERS = CONFIG_DIR / "workers.toml"
DEFAULT_ROTATION = CONFIG_DIR / "rotation.toml"

log = logging.getLogger(__name__)


def _date_arg(value: str) -> dt.date:
    try:
        return parse_date(value)
    except InvalidFormat as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _load_config(path: pathlib.Path | None) -> RotationConfig:
    if path is None or not path.exists():
        log.debug("rotation config not found (%s); using built-in defaults", path)
        return DEFAULT_ROTATION_CONFIG
    return load_rotation_config(str(path))


def show_week(
    workers_path: pathlib.Path | str,
    rotation_path: pathlib.Path | None,
    week: dt.date,
    sort_by: str,
    shift_filter: str | None,
    json_out: bool,
    xlsx: pathlib.Path | str | None,
) -> None:
    config = _load_config(rotation_path)
    week_start = week_start_sunday(week)
    workers = select_workers(
        load_workers(str(workers_path)),
        week_start,
        sort_by=sort_by,  # type: ignore[arg-type]
        shift_filter=shift_filter,
        config=config,
    )
    schedules = schedules_by_worker(build_weekly_schedule(w, week_start, config) for w in workers)

    if json_out:
        docs = {s.document_id: s.to_document() for s in schedules.values()}
        print(json.dumps(docs, ensure_ascii=False, indent=2))
    else:
        print_week_rich(workers, schedules, week_start)

    if xlsx:
        export_week_to_excel(
            workers=workers,
            schedules=dict(schedules),
            week_start=week_start,
            out_path=str(xlsx),
        )
        Console().print(f":white_check_mark: Exported to {xlsx}")


def regenerate(
    workers_path: pathlib.Path | str,
    rotation_path: pathlib.Path | None,
    start: dt.date | None,
    end: dt.date | None,
    out: pathlib.Path | None,
) -> int:
    config = _load_config(rotation_path)
    # 既定は今週(日〜土)
    this_week = week_start_sunday(dt.date.today())
    start = start or this_week
    end = end or this_week + dt.timedelta(days=6)

    res = regenerate_schedules(load_workers(str(workers_path)), start, end, config)
    text = json.dumps(res.to_dict(), ensure_ascii=False, indent=2)
    if out:
        out.write_text(text + "\n", encoding="utf-8")
        Console().print(
            f":white_check_mark: {len(res.schedules)} schedules "
            f"({format_date(start)} .. {format_date(end)}) written to {out}"
        )
    else:
        print(text)
    return 1 if res.failures else 0


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="floorrota", description="シフトローテーションと手動上書きから週間勤務表を生成する"
    )
    ap.add_argument(
        "-V", "--version", action="version", version=f"FloorRota {__version__}", help="バージョン情報を表示"
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを表示")
    ap.add_argument(
        "-w",
        "--workers",
        type=pathlib.Path,
        default=DEFAULT_WORKERS,
        help=f"作業員の設定を記載したworkers.toml (default: {DEFAULT_WORKERS})",
    )
    ap.add_argument(
        "-r",
        "--rotation",
        type=pathlib.Path,
        default=DEFAULT_ROTATION,
        help=f"ローテーション設定を記載したrotation.toml (default: {DEFAULT_ROTATION})",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_show = sub.add_parser("show", help="1週間分の勤務表を表示")
    p_show.add_argument(
        "--week", type=_date_arg, default=dt.date.today(), help="対象週に含まれる日付 (例: 2026-02-03)"
    )
    p_show.add_argument("--sort", choices=["name", "shift"], default="name", help="並び順")
    p_show.add_argument(
        "--shift",
        choices=[k.value for k in (ShiftKind.MORNING, ShiftKind.AFTERNOON, ShiftKind.NIGHT)],
        help="その週のシフトで絞り込み",
    )
    p_show.add_argument("-j", "--json", action="store_true", help="テキストの代わりにJSON形式で出力")
    p_show.add_argument("-x", "--xlsx", type=pathlib.Path, help="Excel 出力パス (例: output/week.xlsx)")

    p_regen = sub.add_parser("regenerate", help="期間内の全作業員の勤務表ドキュメントを再生成")
    p_regen.add_argument("--start", type=_date_arg, help="開始日 (default: 今週の日曜日)")
    p_regen.add_argument("--end", type=_date_arg, help="終了日 (default: 今週の土曜日)")
    p_regen.add_argument("-o", "--out", type=pathlib.Path, help="JSON 出力パス")

    p_ovr = sub.add_parser("override", help="日別の手動上書きを編集")
    ovr_sub = p_ovr.add_subparsers(dest="action", required=True)
    p_set = ovr_sub.add_parser("set", help="上書きを保存")
    p_reset = ovr_sub.add_parser("reset", help="上書きを削除して計算値に戻す")
    for p in (p_set, p_reset):
        p.add_argument("worker", help="作業員 id")
        p.add_argument("date", type=_date_arg, help="対象日 (YYYY-MM-DD)")
    p_set.add_argument("--status", choices=["scheduled", "off"], required=True)
    p_set.add_argument("--shift", help="morning / afternoon / night / custom")
    p_set.add_argument("--start", help="開始時刻 HH:MM")
    p_set.add_argument("--end", help="終了時刻 HH:MM")
    p_set.add_argument("--duration", help="勤務時間 (h)")
    p_set.add_argument("--overtime", help="残業時間 (h)")
    p_set.add_argument("--notes", help="メモ")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )

    try:
        match args.command:
            case "show":
                show_week(
                    args.workers, args.rotation, args.week, args.sort, args.shift, args.json, args.xlsx
                )
            case "regenerate":
                return regenerate(args.workers, args.rotation, args.start, args.end, args.out)
            case "override":
                date_str = format_date(args.date)
                if args.action == "set":
                    override = override_from_edit(
                        args.status,
                        shift=args.shift,
                        start=args.start,
                        end=args.end,
                        duration=args.duration,
                        overtime=args.overtime,
                        notes=args.notes,
                    )
                    save_override(args.workers, args.worker, date_str, override)
                    Console().print(f":white_check_mark: Saved override {args.worker} {date_str}")
                elif reset_override(args.workers, args.worker, date_str):
                    Console().print(f":white_check_mark: Reset override {args.worker} {date_str}")
                else:
                    Console().print(f"No override for {args.worker} {date_str}")
    except (OSError, KeyError, ValueError) as e:
        Console(stderr=True).print(f"[bold red]Error:[/] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
