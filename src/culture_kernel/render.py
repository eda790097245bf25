"""
Content negotiation and rendering for the ritual catalog.

The representation is picked from the client identifier (User-Agent):
command-line fetchers get a terminal view, everything else gets JSON.
All functions here are pure.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .kernel.schema import Ritual

TERMINAL_CLIENTS = ("curl", "wget")

JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"

BOX_WIDTH = 60
HEADER_TITLE = "CULTURE KERNEL · AVAILABLE RITUALS"


@dataclass(frozen=True)
class Rendering:
    """One response representation: a media type and its body."""

    media_type: str
    body: str

    @property
    def is_terminal(self) -> bool:
        return self.media_type == TEXT_MEDIA_TYPE


def is_terminal_client(user_agent: Optional[str]) -> bool:
    """True if the identifier contains "curl" or "wget", case-insensitively."""
    if not user_agent:
        return False
    lowered = user_agent.lower()
    return any(name in lowered for name in TERMINAL_CLIENTS)


def render_json(rituals: Sequence[Ritual]) -> str:
    return json.dumps([r.model_dump() for r in rituals], ensure_ascii=False)


def _header() -> List[str]:
    inner = BOX_WIDTH - 2
    return [
        "╭" + "─" * inner + "╮",
        "│" + f"  {HEADER_TITLE}".ljust(inner) + "│",
        "╰" + "─" * inner + "╯",
    ]


def _ritual_block(ritual: Ritual) -> List[str]:
    lines = [
        f"  ◆ {ritual.name}",
        f"    ID:      {ritual.id}",
        f"    Origin:  {ritual.origin_culture}",
        f"    Fixes:   {ritual.bug_fixed}",
        "    Script:",
    ]
    for n, (key, value) in enumerate(ritual.modern_script.items(), start=1):
        lines.append(f"      {n}. {key.upper()}: {value}")
    return lines


def render_terminal(rituals: Sequence[Ritual]) -> str:
    """
    Render the catalog for a terminal.

    Layout: a boxed header, then one block per ritual (title, id, origin,
    the bug it fixes, and every modern_script entry numbered with its key
    upper-cased), with a rule line between blocks.
    """
    lines = _header()
    lines.append("")

    if not rituals:
        lines.append("  (no rituals in catalog)")
        return "\n".join(lines) + "\n"

    rule = "  " + "─" * (BOX_WIDTH - 2)
    for i, ritual in enumerate(rituals):
        if i:
            lines.append(rule)
        lines.extend(_ritual_block(ritual))

    return "\n".join(lines) + "\n"


def negotiate(rituals: Sequence[Ritual], user_agent: Optional[str]) -> Rendering:
    """Pick exactly one representation of the catalog for this client."""
    if is_terminal_client(user_agent):
        return Rendering(media_type=TEXT_MEDIA_TYPE, body=render_terminal(rituals))
    return Rendering(media_type=JSON_MEDIA_TYPE, body=render_json(rituals))
