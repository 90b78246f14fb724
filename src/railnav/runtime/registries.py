# runtime/registries.py
from collections.abc import Callable

from railnav.app.protocols import Heuristic
from railnav.config.models import (
    HeuristicHaversineModel,
    HeuristicUnion,
    HeuristicZeroModel,
)
from railnav.routing.heuristics import HaversineHeuristic, ZeroHeuristic

HeuristicFactory = Callable[[HeuristicUnion], Heuristic]

_heuristic_registry: dict[str, HeuristicFactory] = {}


def register_heuristic(kind: str):
    def deco(fn: HeuristicFactory):
        _heuristic_registry[kind] = fn
        return fn

    return deco


def make_heuristic(cfg: HeuristicUnion) -> Heuristic:
    try:
        factory = _heuristic_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown heuristic kind {cfg.kind!r}") from None
    return factory(cfg)


@register_heuristic("haversine")
def _make_haversine(cfg: HeuristicHaversineModel):
    return HaversineHeuristic(cfg.earth_radius_m)


@register_heuristic("zero")
def _make_zero(cfg: HeuristicZeroModel):
    return ZeroHeuristic()
