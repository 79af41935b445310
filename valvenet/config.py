"""Configuration classes for valvenet components."""

from dataclasses import dataclass


@dataclass
class SearchConfig:
    """Defaults for the valve release search."""

    # Minutes available before the process ends
    time_budget: int = 26

    # Number of cooperating agents (1 or 2)
    agents: int = 2

    # Valve every agent starts at
    start: str = "AA"

    # Fewest seeds a pool worker should receive
    min_seeds_per_worker: int = 2

    def effective_workers(self, parallelism: int, num_seeds: int) -> int:
        """Clamp a requested worker count to the number of seeds available."""
        by_seeds = num_seeds // max(1, self.min_seeds_per_worker)
        return max(1, min(parallelism, by_seeds))


# Global configuration instance
SEARCH_CONFIG = SearchConfig()
