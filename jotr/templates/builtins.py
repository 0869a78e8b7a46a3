"""Built-in template variables derived from the environment"""

from datetime import datetime
from pathlib import Path

from .models import Template

DATE_TOKEN = "{$date}"
DATETIME_TOKEN = "{$datetime}"
BASE_DIR_TOKEN = "{$base_dir}"
WEEKDAY_TOKEN = "{$weekday}"
TIME_TOKEN = "{$time}"


def resolve_builtins(
    base_dir: str | Path, now: datetime | None = None
) -> dict[str, str]:
    """Compute every built-in token from a single ``now`` sample."""
    if now is None:
        now = datetime.now()

    return {
        DATE_TOKEN: now.strftime("%Y-%m-%d"),
        DATETIME_TOKEN: now.strftime("%Y-%m-%d %H:%M"),
        BASE_DIR_TOKEN: str(Path(base_dir).expanduser().absolute()),
        WEEKDAY_TOKEN: now.strftime("%A"),
        TIME_TOKEN: now.strftime("%H:%M"),
    }


def apply_builtins(
    template: Template, base_dir: str | Path, now: datetime | None = None
) -> dict[str, str]:
    """Refresh ``template.built_ins`` in place and return it."""
    template.built_ins.clear()
    template.built_ins.update(resolve_builtins(base_dir, now))
    return template.built_ins
