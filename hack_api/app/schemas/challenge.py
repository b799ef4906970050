"""Request documents for the challenges collection."""

from typing import Optional

from pydantic import StrictStr

from .jsonapi import JsonApiModel, NameAttributes, ResourceObject


class ChallengeCreateResource(ResourceObject):
    attributes: NameAttributes


class ChallengeCreateDocument(JsonApiModel):
    data: ChallengeCreateResource


class ChallengeUpdateAttributes(JsonApiModel):
    name: Optional[StrictStr] = None


class ChallengeUpdateResource(ResourceObject):
    attributes: ChallengeUpdateAttributes = ChallengeUpdateAttributes()


class ChallengeUpdateDocument(JsonApiModel):
    data: ChallengeUpdateResource
