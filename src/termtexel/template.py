import re

from termtexel import codes
from termtexel.errors import TemplateError

_PLACEHOLDER = re.compile(r"\{'([^{}]*)\}")
_HEX = re.compile(r"(_?)#([0-9a-fA-F]{6})")
_MOVE = re.compile(r"(mu|md|mr|ml)(\d*)")

_MOVES = {
    "mu": codes.move_up,
    "md": codes.move_down,
    "mr": codes.move_right,
    "ml": codes.move_left,
}


def code_for(name: str) -> str:
    """Escape code for one placeholder name."""
    if name in codes.CODES:
        return codes.CODES[name]
    m = _HEX.fullmatch(name)
    if m:
        value = int(m.group(2), 16)
        rgb = (value >> 16 & 0xFF, value >> 8 & 0xFF, value & 0xFF)
        return codes.bg(*rgb) if m.group(1) else codes.fg(*rgb)
    m = _MOVE.fullmatch(name)
    if m:
        return _MOVES[m.group(1)](int(m.group(2) or 1))
    raise TemplateError(f"Unknown escape code name: {name!r}")


def _substitute(match: re.Match) -> str:
    code = "".join(code_for(name) for name in match.group(1).split())
    # The result still goes through str.format
    return code.replace("{", "{{").replace("}", "}}")


def formatc(template: str, *args, **kwargs) -> str:
    """Replace {'name} placeholders with escape codes, then str.format the rest.

    Several names may share one placeholder: "{'bold red}".
    """
    return _PLACEHOLDER.sub(_substitute, template).format(*args, **kwargs)


def printc(template: str, *args, **kwargs) -> None:
    print(formatc(template, *args, **kwargs))
