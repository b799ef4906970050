"""Request documents for the teams collection."""

from typing import Dict, Optional

from pydantic import StrictStr

from .jsonapi import JsonApiModel, NameAttributes, ResourceObject, ToManyRelationship


class TeamAttributes(NameAttributes):
    motto: Optional[StrictStr] = None


class TeamCreateResource(ResourceObject):
    attributes: TeamAttributes
    # ``members`` (users) and ``entries`` (hacks) may be set on creation.
    relationships: Optional[Dict[str, ToManyRelationship]] = None


class TeamCreateDocument(JsonApiModel):
    data: TeamCreateResource


class TeamUpdateAttributes(JsonApiModel):
    # The name is accepted but ignored: the team ID is derived from it.
    name: Optional[StrictStr] = None
    motto: Optional[StrictStr] = None


class TeamUpdateResource(ResourceObject):
    attributes: TeamUpdateAttributes = TeamUpdateAttributes()


class TeamUpdateDocument(JsonApiModel):
    data: TeamUpdateResource
