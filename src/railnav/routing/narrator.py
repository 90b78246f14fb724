# routing/narrator.py
from collections.abc import Sequence

from railnav.app.protocols import Narrator
from railnav.domain.entities.features import NodeType
from railnav.domain.graph import GraphNode
from railnav.routing.geodesy import bearing_deg, turn_angle_deg

ARRIVED = "You have arrived."


def _or(name: str | None, fallback: str) -> str:
    return name if name is not None else fallback


def transition_phrase(current: GraphNode, nxt: GraphNode) -> str:
    """Phrase for moving from `current` onto a node of a different type."""
    t = nxt.type
    if t == NodeType.STAIRWAY_TOP:
        return f"Go towards {_or(nxt.name, 'the stairs')}."
    if t == NodeType.STAIRWAY_BOT:
        return f"Go down {_or(current.name, 'the stairs')}."
    if t == NodeType.LIFT_TOP:
        return f"Head towards {_or(nxt.name, 'the lift')}."
    if t == NodeType.LIFT_BOT:
        return f"Take {_or(current.name, 'the lift')} down."
    if t == NodeType.JUNCTION:
        return "Continue to the junction."
    if t == NodeType.ENTRY_EXIT:
        return f"Proceed towards the {_or(nxt.name, 'Exit')}."
    return f"Continue towards {_or(nxt.name, 'the next point')}."


class TurnByTurnNarrator(Narrator):
    def __init__(self, turn_threshold_deg: float = 45.0):
        self.turn_threshold_deg = turn_threshold_deg

    def generate(self, route: Sequence[GraphNode]) -> list[str]:
        nodes = list(route)
        if len(nodes) < 2:
            return [ARRIVED]

        out = [f"Start by heading towards {_or(nodes[1].name, 'the next point')}."]
        for i in range(1, len(nodes) - 1):
            prev, cur, nxt = nodes[i - 1], nodes[i], nodes[i + 1]
            staged = None

            if cur.type == NodeType.JUNCTION:
                turn = turn_angle_deg(
                    bearing_deg(prev.coordinate, cur.coordinate),
                    bearing_deg(cur.coordinate, nxt.coordinate),
                )
                if abs(turn) > self.turn_threshold_deg:
                    side = "right" if turn > 0 else "left"
                    staged = f"Turn {side} at {_or(cur.name, 'the junction')}."

            # a type change overrides the turn
            if cur.type != nxt.type and nxt.type is not None:
                staged = transition_phrase(cur, nxt)

            if staged is not None and staged != out[-1]:
                out.append(staged)

        out.append(f"You have reached your destination: {_or(nodes[-1].name, 'Final Point')}.")
        return out


def generate_instructions(route: Sequence[GraphNode]) -> list[str]:
    return TurnByTurnNarrator().generate(route)
