"""
Pydantic models for JSON:API request envelopes.

Request bodies arrive as plain JSON (``Any``) and are checked here
rather than by FastAPI's body validation, so that every envelope problem
becomes the same JSON:API ``400 Bad request.`` document instead of a
422.  ``parse_document`` is the single entry point.

Only the parts of JSON:API the API accepts are modelled: a resource
object with ``type``, optional ``id``, ``attributes`` and
``relationships``, and relationship documents whose ``data`` is a list
of resource identifiers.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from ..core.errors import BadRequestError


ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ResourceIdentifier(JsonApiModel):
    type: StrictStr
    id: StrictStr


class ToManyRelationship(JsonApiModel):
    data: List[ResourceIdentifier]


class RelationshipDocument(JsonApiModel):
    """Body of ``POST``/``DELETE`` on a relationship sub-resource."""

    data: List[ResourceIdentifier]


class ResourceObject(JsonApiModel):
    type: StrictStr
    id: Optional[StrictStr] = None


class NameAttributes(JsonApiModel):
    name: StrictStr

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v


def parse_document(model: Type[ModelT], payload: Any) -> ModelT:
    """Validate ``payload`` against ``model`` or raise ``BadRequestError``."""
    if not isinstance(payload, dict):
        raise BadRequestError()
    try:
        return model.model_validate(payload)
    except ValidationError:
        raise BadRequestError()


def require_type(resource: ResourceObject, resource_type: str) -> None:
    if resource.type != resource_type:
        raise BadRequestError()


def require_no_id(resource: ResourceObject) -> None:
    # The server derives the id from the name.
    if resource.id is not None:
        raise BadRequestError()


def require_id(resource: ResourceObject, expected: Optional[str] = None) -> str:
    if not resource.id:
        raise BadRequestError()
    if expected is not None and resource.id != expected:
        raise BadRequestError()
    return resource.id


def identifiers_of_type(identifiers: List[ResourceIdentifier], resource_type: str) -> List[str]:
    """Return the ids of ``identifiers``, all of which must be ``resource_type``."""
    if any(item.type != resource_type for item in identifiers):
        raise BadRequestError()
    return [item.id for item in identifiers]


def relationship_ids(
    relationships: Optional[Dict[str, ToManyRelationship]],
    name: str,
    resource_type: str,
) -> List[str]:
    if not relationships or name not in relationships:
        return []
    return identifiers_of_type(relationships[name].data, resource_type)
