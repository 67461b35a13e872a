"""Colour schemes for the status page."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PageColors:
    background: str
    text_primary: str
    text_secondary: str
    accent: str
    border: str
    card_bg: str


TEMPLATES: dict[str, PageColors] = {
    "dark": PageColors(
        background="#0D1117",
        text_primary="#E6EDF3",
        text_secondary="#8B949E",
        accent="#58A6FF",
        border="#30363D",
        card_bg="#161B22",
    ),
    "light": PageColors(
        background="#FFFFFF",
        text_primary="#1A1A2E",
        text_secondary="#6B7280",
        accent="#0052FF",
        border="#E5E7EB",
        card_bg="#F9FAFB",
    ),
}

DEFAULT_TEMPLATE = "dark"

STATUS_COLORS = {
    "confirmed": "#10B981",
    "pending": "#F59E0B",
    "unknown": "#8B949E",
}
