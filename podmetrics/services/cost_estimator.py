from collections.abc import Iterable

from podmetrics.config.constants import DEFAULT_PLATFORM_COST, PLATFORM_COSTS


class CostEstimator:
    """Prices a refresh from a static per-platform table."""

    def __init__(
        self,
        costs: dict[str, float] | None = None,
        default_cost: float = DEFAULT_PLATFORM_COST,
    ) -> None:
        self._costs = costs if costs is not None else PLATFORM_COSTS
        self._default_cost = default_cost

    def estimate(self, platforms: Iterable[str]) -> float:
        """Estimated USD cost of refreshing the given platforms."""
        return sum(self._costs.get(platform, self._default_cost) for platform in platforms)
