"""Human readable byte formatting and status template rendering."""

from memline.models import MemorySnapshot

BINARY_BASE = 1024

IEC_SYMBOLS = ("B", "KiB", "MiB", "GiB", "TiB")
MAX_EXPONENT = len(IEC_SYMBOLS) - 1

BYTE_TOKENS = ("total", "used", "free", "available", "shared")
PERCENTAGE_TOKENS = (
    "percentage_free",
    "percentage_available",
    "percentage_used",
    "percentage_shared",
)


def format_bytes_human(value: int, unit: str = "auto", decimals: int = 1) -> str:
    """
    Format a byte count using binary prefixes.

    Scaling stops early once the current symbol matches ``unit``
    (case-insensitive); ``"auto"`` never matches.
    """
    base = float(value)
    exponent = 0
    while base >= BINARY_BASE and exponent < MAX_EXPONENT:
        if unit.lower() == IEC_SYMBOLS[exponent].lower():
            break
        base /= BINARY_BASE
        exponent += 1
    return f"{base:.{decimals}f} {IEC_SYMBOLS[exponent]}"


def render_template(
    template: str,
    snapshot: MemorySnapshot,
    used: int,
    *,
    unit: str = "auto",
    decimals: int = 1,
    pct_mark: str = "%",
) -> str:
    """
    Substitute ``%token`` placeholders in a status template.

    Unknown placeholders are kept as a literal ``%`` and the text after it.

    Raises:
        ZeroDivisionError: If a percentage token is used and total is zero.
    """
    values = {
        "total": snapshot.total,
        "used": used,
        "free": snapshot.free,
        "available": snapshot.available,
        "shared": snapshot.shared,
    }

    parts: list[str] = []
    pos = 0
    while pos < len(template):
        char = template[pos]
        pos += 1
        if char != "%":
            parts.append(char)
            continue

        for token in BYTE_TOKENS:
            if template.startswith(token, pos):
                parts.append(format_bytes_human(values[token], unit, decimals))
                pos += len(token)
                break
        else:
            for token in PERCENTAGE_TOKENS:
                if template.startswith(token, pos):
                    amount = values[token.removeprefix("percentage_")]
                    parts.append(f"{100.0 * amount / snapshot.total:.1f}{pct_mark}")
                    pos += len(token)
                    break
            else:
                parts.append("%")

    return "".join(parts)
