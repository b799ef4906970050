"""
Pydantic schema definitions for API payloads.

``jsonapi`` holds the envelope models shared by every resource; each
domain module defines the documents its endpoints accept.  Responses are
built by the serializer service rather than by response models.
"""
