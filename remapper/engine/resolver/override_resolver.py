"""Override resolution. Feedback beats strategy, strategy beats nothing.

Resolved per layer on every call; nothing is cached because feedback and
strategy change independently between invocations.
"""

from __future__ import annotations

from collections import Counter

from remapper.models.strategy import Feedback, LayerOverride, LayoutStrategy


def _find(overrides: list[LayerOverride], layer_id: str) -> LayerOverride | None:
    for override in overrides:
        if override.layer_id == layer_id:
            return override
    return None


def resolve_override(
    layer_id: str,
    feedback: Feedback | None = None,
    strategy: LayoutStrategy | None = None,
) -> LayerOverride | None:
    """Return the highest-priority override for ``layer_id``, or None."""
    if feedback is not None:
        found = _find(feedback.overrides, layer_id)
        if found is not None:
            return found
    if strategy is not None:
        return _find(strategy.overrides, layer_id)
    return None


def override_diagnostics(
    layer_ids: set[str],
    feedback: Feedback | None = None,
    strategy: LayoutStrategy | None = None,
) -> list[str]:
    """Describe overrides that can never match, or that shadow one another."""
    messages: list[str] = []
    for origin, holder in (("feedback", feedback), ("strategy", strategy)):
        if holder is None:
            continue
        counts = Counter(o.layer_id for o in holder.overrides)
        for layer_id, count in counts.items():
            if layer_id not in layer_ids:
                messages.append(f"{origin} override targets unknown layer '{layer_id}'")
            elif count > 1:
                messages.append(
                    f"{origin} has {count} overrides for layer '{layer_id}'; the first one applies"
                )
    return messages
