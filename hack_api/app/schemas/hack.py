"""Request documents for the hacks collection."""

from typing import Dict, Optional

from pydantic import StrictStr

from .jsonapi import JsonApiModel, NameAttributes, ResourceObject, ToManyRelationship


class HackCreateResource(ResourceObject):
    attributes: NameAttributes
    # ``challenges`` may be set on creation.
    relationships: Optional[Dict[str, ToManyRelationship]] = None


class HackCreateDocument(JsonApiModel):
    data: HackCreateResource


class HackUpdateAttributes(JsonApiModel):
    name: Optional[StrictStr] = None


class HackUpdateResource(ResourceObject):
    attributes: HackUpdateAttributes = HackUpdateAttributes()


class HackUpdateDocument(JsonApiModel):
    data: HackUpdateResource
