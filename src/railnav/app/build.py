# railnav/app/build.py
from collections.abc import Iterable, Mapping
from pathlib import Path

from railnav.app.navigator import Navigator
from railnav.config.models import NavigatorModel
from railnav.domain.entities.features import EdgeRecord, Node
from railnav.domain.graph import build_graph
from railnav.io.geojson import load_edges, load_nodes
from railnav.io.routing_logging import RoutingLogging
from railnav.routing.hooks import NoopHooks
from railnav.routing.narrator import TurnByTurnNarrator
from railnav.routing.pathfinder import Pathfinder
from railnav.routing.snapper import RouteSnapper, edge_geometry_index
from railnav.runtime.registries import make_heuristic


def build(
    cfg: NavigatorModel | Mapping | None = None,
    *,
    nodes: Iterable[Node] | None = None,
    edges: Iterable[EdgeRecord] | None = None,
    use_logging: bool = True,
    log_stream=None,
) -> Navigator:
    # 0) Validate config
    if cfg is None:
        model = NavigatorModel()
    elif isinstance(cfg, NavigatorModel):
        model = cfg
    else:
        model = NavigatorModel.model_validate(cfg)

    hooks = (
        RoutingLogging(
            name=model.name, level=model.log.level, debug=model.log.debug, stream=log_stream
        )
        if use_logging
        else NoopHooks()
    )

    # 1) Feature records: explicit ones win over configured files
    if nodes is None or edges is None:
        src = model.graph
        if src is None:
            raise ValueError("No graph provided: pass nodes/edges or configure 'graph'")
        if nodes is None:
            nodes = _load_or_empty(load_nodes, src.nodes_file, src.must_exist)
        if edges is None:
            edges = _load_or_empty(load_edges, src.edges_file, src.must_exist)
    edges = list(edges)

    # 2) Graph & routing components
    graph = build_graph(nodes, edges, hooks=hooks)
    pathfinder = Pathfinder(
        graph,
        make_heuristic(model.pathfinder.heuristic),
        tie_break=model.pathfinder.tie_break,
        hooks=hooks,
    )
    narrator = TurnByTurnNarrator(model.narrator.turn_threshold_deg)
    snapper = RouteSnapper(edge_geometry_index(edges), hooks=hooks)

    return Navigator(
        graph=graph,
        pathfinder=pathfinder,
        narrator=narrator,
        snapper=snapper,
        bounds_padding=model.bounds_padding,
        nearest_candidates=model.nearest_candidates,
    )


def _load_or_empty(loader, path: str, must_exist: bool) -> list:
    if not must_exist and not Path(path).is_file():
        return []
    return loader(path)
