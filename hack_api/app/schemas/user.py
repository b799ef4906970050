"""Request documents for the users collection.

Unlike teams, hacks and challenges, a user's ID is chosen by the client
(Hackbot uses the Slack user ID), so ``data.id`` is required on create.
"""

from typing import Optional

from pydantic import StrictStr

from .jsonapi import JsonApiModel, NameAttributes, ResourceObject


class UserCreateResource(ResourceObject):
    attributes: NameAttributes


class UserCreateDocument(JsonApiModel):
    data: UserCreateResource


class UserUpdateAttributes(JsonApiModel):
    name: Optional[StrictStr] = None


class UserUpdateResource(ResourceObject):
    attributes: UserUpdateAttributes = UserUpdateAttributes()


class UserUpdateDocument(JsonApiModel):
    data: UserUpdateResource
