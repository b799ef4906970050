"""
Relationship resolution and compound document assembly.

Each resource type declares its relationships in ``RELATIONSHIPS``: the
related resource type, the cardinality, the URL suffix of the
relationship link and a loader.  A loader takes a batch of owner row ids
and returns the related rows per owner, in stored order.  Loaders join
the reference tables against the target collection, so a reference to a
document that has since been deleted simply does not come back.

``RelationshipResolver.compose`` turns a list of primary rows into
resource objects with ``relationships`` blocks, plus the ``included``
array for the requested include paths:

* every related resource appears once, keyed by ``(type, id)``;
* order is first-seen while walking the primary rows in order and, for
  each row, the include paths in the order given;
* primary resources are never repeated in ``included``;
* include paths have at most two segments (``"team.members"``), so the
  expansion is bounded and never walks the graph recursively.

Included resources carry their own relationship blocks too, which costs
one batched query per relationship per hop.
"""

import sqlite3
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .serializer import ResourceObject, external_id, identifier, relationship, resource_link, serialize


ONE = "one"
MANY = "many"

MAX_INCLUDE_DEPTH = 2

# SQLite limits the number of bound parameters per statement.
_BATCH_SIZE = 500

Loader = Callable[[sqlite3.Connection, Sequence[int]], Dict[int, List[sqlite3.Row]]]


def _loader(sql: str) -> Loader:
    """Build a loader from a query selecting ``owner_id`` plus target columns.

    ``sql`` contains a single ``{ids}`` placeholder for the owner id list.
    """

    def load(conn: sqlite3.Connection, owner_ids: Sequence[int]) -> Dict[int, List[sqlite3.Row]]:
        result: Dict[int, List[sqlite3.Row]] = {}
        for start in range(0, len(owner_ids), _BATCH_SIZE):
            batch = list(owner_ids[start:start + _BATCH_SIZE])
            placeholders = ", ".join("?" for _ in batch)
            for row in conn.execute(sql.format(ids=placeholders), batch):
                result.setdefault(row["owner_id"], []).append(row)
        return result

    return load


@dataclass(frozen=True)
class Relationship:
    resource_type: str
    cardinality: str
    link_suffix: str
    loader: Loader

    @property
    def many(self) -> bool:
        return self.cardinality == MANY


RELATIONSHIPS: Dict[str, Dict[str, Relationship]] = {
    "attendees": {},
    "challenges": {},
    "users": {
        "team": Relationship(
            "teams",
            ONE,
            "team",
            _loader(
                "SELECT tm.user_id AS owner_id, t.* FROM team_members tm "
                "JOIN teams t ON t.id = tm.team_id "
                "WHERE tm.user_id IN ({ids}) ORDER BY t.id"
            ),
        ),
    },
    "teams": {
        "members": Relationship(
            "users",
            MANY,
            "members",
            _loader(
                "SELECT tm.team_id AS owner_id, u.* FROM team_members tm "
                "JOIN users u ON u.id = tm.user_id "
                "WHERE tm.team_id IN ({ids}) ORDER BY tm.team_id, tm.position"
            ),
        ),
        "entries": Relationship(
            "hacks",
            MANY,
            "entries",
            _loader(
                "SELECT te.team_id AS owner_id, h.* FROM team_entries te "
                "JOIN hacks h ON h.id = te.hack_id "
                "WHERE te.team_id IN ({ids}) ORDER BY te.team_id, te.position"
            ),
        ),
    },
    "hacks": {
        "team": Relationship(
            "teams",
            ONE,
            "team",
            _loader(
                "SELECT te.hack_id AS owner_id, t.* FROM team_entries te "
                "JOIN teams t ON t.id = te.team_id "
                "WHERE te.hack_id IN ({ids}) ORDER BY t.id"
            ),
        ),
        "challenges": Relationship(
            "challenges",
            MANY,
            "challenges",
            _loader(
                "SELECT hc.hack_id AS owner_id, c.* FROM hack_challenges hc "
                "JOIN challenges c ON c.id = hc.challenge_id "
                "WHERE hc.hack_id IN ({ids}) ORDER BY hc.hack_id, hc.position"
            ),
        ),
    },
}

NodeKey = Tuple[str, int]


class RelationshipResolver:
    """Compose resource objects and ``included`` arrays for one connection."""

    def __init__(self, conn: sqlite3.Connection, relationships: Dict[str, Dict[str, Relationship]] = RELATIONSHIPS) -> None:
        self.conn = conn
        self.relationships = relationships
        # (type, row id) -> relationship name -> related rows
        self._related: Dict[NodeKey, Dict[str, List[sqlite3.Row]]] = {}

    def compose(
        self,
        resource_type: str,
        rows: Sequence[sqlite3.Row],
        include: Iterable[str] = (),
    ) -> Tuple[List[ResourceObject], List[ResourceObject]]:
        """Return ``(data, included)`` for ``rows`` of ``resource_type``."""
        paths = self._parse_include(resource_type, include)

        # Load relationships hop by hop: the primary rows, then the
        # resources reached by each successive path segment.
        self._load(resource_type, rows)
        frontier: List[Tuple[str, sqlite3.Row, Tuple[str, ...]]] = [
            (resource_type, row, path) for row in rows for path in paths
        ]
        for _ in range(MAX_INCLUDE_DEPTH):
            reached: Dict[str, Dict[int, sqlite3.Row]] = {}
            next_frontier = []
            for owner_type, row, path in frontier:
                if not path:
                    continue
                rel = self.relationships[owner_type][path[0]]
                for target in self._related[(owner_type, row["id"])][path[0]]:
                    reached.setdefault(rel.resource_type, {})[target["id"]] = target
                    next_frontier.append((rel.resource_type, target, path[1:]))
            for target_type, targets in reached.items():
                self._load(target_type, list(targets.values()))
            frontier = next_frontier

        primary_keys = {(resource_type, external_id(row, resource_type)) for row in rows}
        included: "OrderedDict[Tuple[str, str], Tuple[str, sqlite3.Row]]" = OrderedDict()
        for row in rows:
            for path in paths:
                self._walk(resource_type, row, path, primary_keys, included)

        data = [self._serialize(resource_type, row) for row in rows]
        return data, [self._serialize(t, r) for t, r in included.values()]

    def compose_relationship(
        self,
        resource_type: str,
        row: sqlite3.Row,
        name: str,
    ) -> Tuple[object, List[ResourceObject]]:
        """Return ``(linkage, included)`` for one relationship of one row.

        ``linkage`` is an identifier (or None) for to-one relationships and
        a list of identifiers for to-many ones.
        """
        rel = self.relationships[resource_type][name]
        self._load(resource_type, [row])
        targets = self._related[(resource_type, row["id"])][name]
        if not rel.many:
            targets = targets[:1]
        resources, _ = self.compose(rel.resource_type, targets)
        if rel.many:
            return [identifier(t, rel.resource_type) for t in targets], resources
        return (identifier(targets[0], rel.resource_type) if targets else None), resources

    def _parse_include(self, resource_type: str, include: Iterable[str]) -> List[Tuple[str, ...]]:
        paths = []
        for raw in include:
            path = tuple(raw.split("."))
            if len(path) > MAX_INCLUDE_DEPTH:
                raise ValueError(f"Include path {raw!r} is deeper than {MAX_INCLUDE_DEPTH}")
            owner = resource_type
            for segment in path:
                if segment not in self.relationships[owner]:
                    raise ValueError(f"{owner} has no relationship {segment!r}")
                owner = self.relationships[owner][segment].resource_type
            paths.append(path)
        return paths

    def _load(self, resource_type: str, rows: Sequence[sqlite3.Row]) -> None:
        pending = [row["id"] for row in rows if (resource_type, row["id"]) not in self._related]
        if not pending:
            return
        for owner_id in pending:
            self._related[(resource_type, owner_id)] = {}
        for name, rel in self.relationships[resource_type].items():
            loaded = rel.loader(self.conn, pending)
            for owner_id in pending:
                self._related[(resource_type, owner_id)][name] = loaded.get(owner_id, [])

    def _walk(self, owner_type, row, path, primary_keys, included) -> None:
        current = [(owner_type, row)]
        for segment in path:
            next_nodes = []
            for node_type, node in current:
                rel = self.relationships[node_type][segment]
                for target in self._related[(node_type, node["id"])][segment]:
                    key = (rel.resource_type, external_id(target, rel.resource_type))
                    if key not in primary_keys and key not in included:
                        included[key] = (rel.resource_type, target)
                    next_nodes.append((rel.resource_type, target))
            current = next_nodes

    def _serialize(self, resource_type: str, row: sqlite3.Row) -> ResourceObject:
        resource = serialize(row, resource_type)
        rels = self.relationships[resource_type]
        if not rels:
            return resource
        loaded = self._related.get((resource_type, row["id"]), {})
        owner_id = external_id(row, resource_type)
        resource["relationships"] = {}
        for name, rel in rels.items():
            targets = loaded.get(name, [])
            related = targets if rel.many else (targets[0] if targets else None)
            resource["relationships"][name] = relationship(
                resource_link(resource_type, owner_id, rel.link_suffix),
                related,
                rel.resource_type,
                rel.many,
            )
        return resource
