"""Color & style helpers.

Decisions:
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable.
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

PALETTE_DEFAULTS: dict[str, str] = {
    'TASKS_PRIMARY': '#476EAE',
    'TASKS_PENDING': '#F6FF99',
    'TASKS_DONE': '#A7E399',
    'TASKS_WARNING': '#F2C14E',
    'TASKS_ERROR': '#E5616E',
}

def _load_env_file(path: Path) -> dict[str, str]:
    """Read palette overrides (KEY=#rrggbb lines) from a .env file."""
    overrides: dict[str, str] = {}
    try:
        text = path.read_text()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = line.split('=', 1)
        k, v = k.strip(), v.strip()
        if k in PALETTE_DEFAULTS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

_env_path = Path(__file__).resolve().parent.parent / '.env'
_ENV_OVERRIDES = _load_env_file(_env_path) if _env_path.exists() else {}

def _resolve(key: str) -> str:
    # priority: real env var > .env override > default
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return _ENV_OVERRIDES.get(key, PALETTE_DEFAULTS[key])

PRIMARY = _from_hex(_resolve('TASKS_PRIMARY'))
C_PENDING = _from_hex(_resolve('TASKS_PENDING'))
C_DONE = _from_hex(_resolve('TASKS_DONE'))
C_WARNING = _from_hex(_resolve('TASKS_WARNING'))
C_ERROR = _from_hex(_resolve('TASKS_ERROR'))

HEADER_COLOR = PRIMARY
INDEX_COLOR = PRIMARY + BOLD
SUCCESS_COLOR = C_DONE
WARNING_COLOR = C_WARNING
ERROR_COLOR = C_ERROR

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

__all__ = [
    'color','RESET','BOLD','DIM','HEADER_COLOR','INDEX_COLOR','C_PENDING','C_DONE',
    'SUCCESS_COLOR','WARNING_COLOR','ERROR_COLOR','_ENABLE','_USE_TRUECOLOR','_FORCE'
]
