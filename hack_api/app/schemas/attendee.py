"""Request documents for the attendees collection."""

from typing import Optional

from pydantic import StrictStr

from .jsonapi import JsonApiModel, ResourceObject


class AttendeeAttributes(JsonApiModel):
    slackid: Optional[StrictStr] = None


class AttendeeResource(ResourceObject):
    attributes: AttendeeAttributes = AttendeeAttributes()


class AttendeeCreateDocument(JsonApiModel):
    """``id`` is the attendee ID (usually the registration email) and is required."""

    data: AttendeeResource
