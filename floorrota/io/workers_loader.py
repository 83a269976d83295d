import tomllib

from floorrota.calendar.utils import format_date, parse_date
from floorrota.domain.types import ShiftKind, WorkerProfile
from floorrota.schedule.overrides import clean_override


def load_workers(config_path: str) -> list[WorkerProfile]:
    """Load worker profiles from a TOML file.

    Args:
        config_path (str): Path to the TOML configuration file.

    Returns:
        list[WorkerProfile]: List of loaded workers.
    """
    workers: list[WorkerProfile] = []

    with open(config_path, "rb") as f:
        config = tomllib.loads(f.read().decode("utf-8-sig"))
        seen: set[str] = set()
        for worker in config.get("workers", []):
            worker_id = str(worker["id"])
            if worker_id in seen:
                raise ValueError(f"{config_path}: 作業員 id '{worker_id}' が重複しています")
            seen.add(worker_id)

            # initial_shift が無ければ current_shift、それも無ければ morning
            initial_shift = (
                worker.get("initial_shift") or worker.get("current_shift") or ShiftKind.MORNING.value
            )
            overrides = {
                format_date(parse_date(str(date_str))): clean_override(override)
                for date_str, override in worker.get("manual_overrides", {}).items()
            }
            workers.append(
                WorkerProfile(
                    id=worker_id,
                    name=worker.get("name", worker_id),
                    initial_shift=initial_shift,
                    rotation_enabled=worker.get("rotation_enabled", True) is not False,
                    # 空の上書きは保存しない
                    manual_overrides={d: o for d, o in overrides.items() if not o.is_empty},
                )
            )

    return workers
