"""
Pure mapping from stored rows to JSON:API resource objects.

Nothing here touches the database.  A row is any mapping (usually a
``sqlite3.Row``) with the external key column of its resource type plus
the attribute columns.  Optional attributes that are missing or NULL are
rendered as an explicit ``null``; they are never omitted.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union
from urllib.parse import quote


@dataclass(frozen=True)
class ResourceType:
    name: str
    key: str
    attributes: Sequence[str]


RESOURCE_TYPES: Dict[str, ResourceType] = {
    "attendees": ResourceType("attendees", "attendeeid", ("slackid",)),
    "users": ResourceType("users", "userid", ("name",)),
    "teams": ResourceType("teams", "teamid", ("name", "motto")),
    "hacks": ResourceType("hacks", "hackid", ("name",)),
    "challenges": ResourceType("challenges", "challengeid", ("name",)),
}

ResourceObject = Dict[str, Any]
TopLevelDocument = Dict[str, Any]


def _value(entity: Mapping[str, Any], field: str) -> Any:
    try:
        return entity[field]
    except (KeyError, IndexError):
        return None


def encode_id(resource_id: str) -> str:
    # Same escaping as JavaScript's encodeURIComponent.
    return quote(resource_id, safe="-_.!~*'()")


def resource_link(resource_type: str, resource_id: str, *suffix: str) -> str:
    return "/".join(["", resource_type, encode_id(resource_id), *suffix])


def external_id(entity: Mapping[str, Any], resource_type: str) -> str:
    return entity[RESOURCE_TYPES[resource_type].key]


def identifier(entity: Mapping[str, Any], resource_type: str) -> Dict[str, str]:
    """Resource identifier object ``{type, id}`` for relationship linkage."""
    return {"type": resource_type, "id": external_id(entity, resource_type)}


def serialize(entity: Mapping[str, Any], resource_type: str) -> ResourceObject:
    """Convert one stored entity into a resource object."""
    rtype = RESOURCE_TYPES[resource_type]
    resource_id = entity[rtype.key]
    return {
        "links": {"self": resource_link(resource_type, resource_id)},
        "type": resource_type,
        "id": resource_id,
        "attributes": {name: _value(entity, name) for name in rtype.attributes},
    }


def relationship(
    self_link: str,
    related: Optional[Union[Mapping[str, Any], Iterable[Mapping[str, Any]]]],
    resource_type: str,
    many: bool,
) -> Dict[str, Any]:
    """Build a relationship object.

    ``related`` is a single entity (or None) when ``many`` is False and
    an iterable of entities otherwise.
    """
    if many:
        data: Any = [identifier(entity, resource_type) for entity in (related or ())]
    else:
        data = identifier(related, resource_type) if related is not None else None
    return {"links": {"self": self_link}, "data": data}


def serialize_top_level(
    data: Union[ResourceObject, List[ResourceObject], Dict[str, Any], List[Dict[str, Any]], None],
    self_link: str,
    included: Optional[List[ResourceObject]] = None,
) -> TopLevelDocument:
    """Wrap primary data (and optional ``included``) in a top-level document."""
    document: TopLevelDocument = {"links": {"self": self_link}, "data": data}
    if included is not None:
        document["included"] = included
    return document


def root_document() -> TopLevelDocument:
    return {
        "jsonapi": {"version": "1.0"},
        "links": {
            "self": "/",
            "teams": {"href": "/teams"},
            "users": {"href": "/users"},
            "attendees": {"href": "/attendees"},
            "hacks": {"href": "/hacks"},
            "challenges": {"href": "/challenges"},
        },
    }
