"""
Treemap layout by recursive proportional binary splitting.

Pure functions: ``layout`` returns a new tuple of leaves and never mutates its input.
Every split partitions all of the value and all of the space, so leaf areas always
sum to the root area.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from networth.domain.views import TreemapRect

# ROI (in percent) at which the leaf color reaches its darkest shade
ROI_COLOR_CAP = 50.0


@dataclass(frozen=True)
class TreemapItem:
    ticker: str
    value: float
    roi: float = 0.0


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    w: float = 100.0
    h: float = 100.0


def roi_color(roi: float) -> str:
    """Green hue for gains, red for losses; darker as |roi| approaches the cap."""
    intensity = min(abs(roi) / ROI_COLOR_CAP, 1.0)
    lightness = 90 - intensity * 50
    hue = 150 if roi >= 0 else 0
    return f"hsl({hue}, 70%, {lightness:g}%)"


def split_index(values: Sequence[float]) -> int:
    """
    Greedy forward scan for the split point closest to half the total.

    At the first item (past the first) that would carry the running sum over half,
    it is included only if that lands closer to half. The result is always in
    ``[1, len(values) - 1]`` so both groups are non-empty.
    """
    half = sum(values) / 2
    running = 0.0
    index = 0
    for i, value in enumerate(values):
        if i > 0 and running + value > half:
            with_item = abs(running + value - half)
            without_item = abs(running - half)
            index = i + 1 if with_item < without_item else i
            break
        running += value
        index = i + 1
    return min(max(index, 1), len(values) - 1)


def _leaf(item: TreemapItem, rect: Rect) -> TreemapRect:
    return TreemapRect(
        ticker=item.ticker,
        x=rect.x,
        y=rect.y,
        w=rect.w,
        h=rect.h,
        value=item.value,
        roi=item.roi,
        color=roi_color(item.roi),
    )


def _layout(items: Sequence[TreemapItem], rect: Rect) -> tuple[TreemapRect, ...]:
    if len(items) == 1:
        return (_leaf(items[0], rect),)

    idx = split_index([i.value for i in items])
    group_a, group_b = items[:idx], items[idx:]
    value_a = sum(i.value for i in group_a)
    total = value_a + sum(i.value for i in group_b)

    if rect.w > rect.h:
        w_a = value_a / total * rect.w
        rect_a = Rect(rect.x, rect.y, w_a, rect.h)
        rect_b = Rect(rect.x + w_a, rect.y, rect.w - w_a, rect.h)
    else:
        h_a = value_a / total * rect.h
        rect_a = Rect(rect.x, rect.y, rect.w, h_a)
        rect_b = Rect(rect.x, rect.y + h_a, rect.w, rect.h - h_a)

    return _layout(group_a, rect_a) + _layout(group_b, rect_b)


def layout(items: Sequence[TreemapItem], rect: Optional[Rect] = None) -> tuple[TreemapRect, ...]:
    """
    Lay out items inside ``rect`` (0, 0, 100, 100 by default).

    Items without a positive value are dropped. Order is preserved; callers sort by
    value descending for the usual look.
    """
    positive = [i for i in items if i.value > 0]
    if not positive:
        return ()
    return _layout(positive, rect or Rect())
