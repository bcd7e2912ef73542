from __future__ import annotations

from typing import Iterable

DEFAULT_CURRENCY = "₹"


def title(text: str) -> str:
    return f"**{text}**"


def section(heading: str, lines: Iterable[str]) -> str:
    body = "\n".join(line for line in lines if line)
    return f"**{heading}:**\n{body}".strip()


def bullets(items: Iterable[str], *, prefix: str = "• ") -> str:
    xs = [x for x in items if x]
    return "\n".join(prefix + x for x in xs)


def sub_bullets(items: Iterable[str]) -> str:
    return bullets(items, prefix="  • ")


def more_trailer(total: int, shown: int, noun: str) -> str:
    hidden = total - shown
    if hidden <= 0:
        return ""
    return f"  ... and {hidden} more {noun}"


def divider() -> str:
    return "──────────────────"


def fmt_money(v: float, currency: str = DEFAULT_CURRENCY, *, decimals: int = 2) -> str:
    sign = "-" if v < 0 else ""
    return f"{sign}{currency}{abs(v):,.{decimals}f}"


def fmt_pct(v: float) -> str:
    return f"{v:.1f}%"


def fmt_signed_int(v: int) -> str:
    return f"+{v}" if v > 0 else str(v)


def capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]


def report_layout(header: str, *blocks: str | None) -> str:
    parts: list[str] = [title(header)]
    for block in blocks:
        if block:
            parts.append(block)
    return "\n\n".join(parts).strip()


def join_blocks(blocks: Iterable[str | None]) -> str:
    xs = [b for b in blocks if b]
    return f"\n\n{divider()}\n\n".join(xs).strip()
