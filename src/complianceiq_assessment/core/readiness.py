"""Production-readiness classification.

Tiers are ordered by descending minimum percentage. A percentage maps to the
highest tier whose threshold it meets; anything below the lowest threshold is
the floor tier. Open blocker questions cap the result at the blocker cap tier
(``conditional`` by default), so a passing score never hides a blocker.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

DEFAULT_THRESHOLDS: dict[str, int] = {
    "production_ready": 85,
    "conditional": 70,
    "pre_production": 55,
    "development_complete": 40,
}
DEFAULT_FLOOR_TIER: str = "not_ready"
DEFAULT_BLOCKER_CAP: str = "conditional"

TIER_LABELS: dict[str, str] = {
    "production_ready": "Production Ready",
    "conditional": "Production Conditional",
    "pre_production": "Pre-Production",
    "development_complete": "Development Complete",
    "not_ready": "Not Production Ready",
}


@dataclass(frozen=True)
class ReadinessTier:
    """A named readiness classification.

    Attributes:
        name: Machine-readable tier name (e.g., 'conditional').
        min_percentage: Inclusive lower bound; None for the floor tier.
        label: Display label.
    """

    name: str
    min_percentage: int | None
    label: str


def build_tiers(
    thresholds: Mapping[str, int] | None = None,
    floor_tier: str = DEFAULT_FLOOR_TIER,
) -> tuple[ReadinessTier, ...]:
    """Build the ordered tier list from a name-to-threshold mapping.

    Args:
        thresholds: Minimum percentage per tier name. Defaults to
            :data:`DEFAULT_THRESHOLDS`.
        floor_tier: Name of the tier for percentages below every threshold.

    Returns:
        Tiers highest first, ending with the floor tier.

    Raises:
        ValueError: If the floor tier also has a threshold, or two tiers
            share a threshold.
    """
    thresholds = DEFAULT_THRESHOLDS if thresholds is None else thresholds
    if floor_tier in thresholds:
        raise ValueError(f"Floor tier {floor_tier!r} must not have a threshold")
    if len(set(thresholds.values())) != len(thresholds):
        raise ValueError(f"Readiness thresholds must be distinct, got {dict(thresholds)}")

    ordered = sorted(thresholds.items(), key=lambda item: item[1], reverse=True)
    tiers = [
        ReadinessTier(name=name, min_percentage=minimum, label=TIER_LABELS.get(name, _titleize(name)))
        for name, minimum in ordered
    ]
    floor_label = TIER_LABELS.get(floor_tier, _titleize(floor_tier))
    tiers.append(ReadinessTier(name=floor_tier, min_percentage=None, label=floor_label))
    return tuple(tiers)


def _titleize(name: str) -> str:
    return name.replace("_", " ").title()


def classify_readiness(
    percentage: int | float,
    critical_gaps: Sequence,
    tiers: Sequence[ReadinessTier] | None = None,
    blocker_cap: str = DEFAULT_BLOCKER_CAP,
) -> ReadinessTier:
    """Classify readiness from a percentage and the open blockers.

    Args:
        percentage: Assessment percentage.
        critical_gaps: Unresolved blocker questions; any entry triggers the cap.
        tiers: Ordered tiers from :func:`build_tiers`. Defaults to the
            standard thresholds.
        blocker_cap: Highest tier reachable while blockers are open.

    Returns:
        The readiness tier.

    Raises:
        ValueError: If ``blocker_cap`` names no tier.
    """
    tiers = build_tiers() if tiers is None else tuple(tiers)
    names = [tier.name for tier in tiers]
    if blocker_cap not in names:
        raise ValueError(f"Blocker cap {blocker_cap!r} is not one of {names}")

    base_rank = len(tiers) - 1
    for rank, tier in enumerate(tiers):
        if tier.min_percentage is not None and percentage >= tier.min_percentage:
            base_rank = rank
            break

    if critical_gaps:
        cap_rank = names.index(blocker_cap)
        # Ranks grow downwards, so the cap only ever lowers the tier.
        return tiers[max(base_rank, cap_rank)]
    return tiers[base_rank]


class ReadinessClassifier:
    """Holds readiness configuration and classifies percentages.

    Args:
        thresholds: Minimum percentage per tier name.
        floor_tier: Tier for percentages below every threshold.
        blocker_cap: Highest tier reachable while blockers are open.
    """

    def __init__(
        self,
        thresholds: Mapping[str, int] | None = None,
        floor_tier: str = DEFAULT_FLOOR_TIER,
        blocker_cap: str = DEFAULT_BLOCKER_CAP,
    ) -> None:
        self.tiers = build_tiers(thresholds, floor_tier)
        if blocker_cap not in {tier.name for tier in self.tiers}:
            raise ValueError(f"Blocker cap {blocker_cap!r} is not a configured readiness tier")
        self.blocker_cap = blocker_cap

    def classify(self, percentage: int | float, critical_gaps: Sequence) -> ReadinessTier:
        """Classify with this classifier's configuration."""
        return classify_readiness(percentage, critical_gaps, self.tiers, self.blocker_cap)
