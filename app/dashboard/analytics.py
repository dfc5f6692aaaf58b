"""
Per-platform applicant source analytics for the dashboard.
"""
from dataclasses import dataclass

from core.platforms import PLATFORMS, Platform, get_platform_by_source, platform_color_classes, platform_text_color_classes


@dataclass
class SourceCard:
    platform: Platform
    total: int = 0
    hired: int = 0
    rejected: int = 0

    @property
    def conversion_rate(self) -> str:
        if not self.total:
            return '0.0'
        return f'{self.hired / self.total * 100:.1f}'

    @property
    def card_classes(self) -> str:
        return platform_color_classes(self.platform.color)

    @property
    def text_classes(self) -> str:
        return platform_text_color_classes(self.platform.color)


def source_cards(breakdown) -> list:
    """
    One card per known platform, summing every raw source that maps to it.

    Sources matching no known platform are grouped under their own name
    after the known platforms.
    """
    cards = {platform.id: SourceCard(platform) for platform in PLATFORMS}
    others = {}
    for source, counts in (breakdown or {}).items():
        platform = get_platform_by_source(source)
        if platform.id in cards:
            card = cards[platform.id]
        else:
            card = others.setdefault(platform.name, SourceCard(platform))
        card.total += counts.get('total') or 0
        card.hired += counts.get('hired') or 0
        card.rejected += counts.get('rejected') or 0
    return list(cards.values()) + list(others.values())
