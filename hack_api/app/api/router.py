"""
Top-level router.

Aggregates the per-collection routers.  Collections are mounted at the
root of the URL space (``/teams``, ``/users``...), as Hackbot and the
public site expect.
"""

from fastapi import APIRouter

from .endpoints import attendees, challenges, hacks, root, teams, users


router = APIRouter()

router.include_router(root.router, tags=["root"])
router.include_router(attendees.router, prefix="/attendees", tags=["attendees"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(teams.router, prefix="/teams", tags=["teams"])
router.include_router(hacks.router, prefix="/hacks", tags=["hacks"])
router.include_router(challenges.router, prefix="/challenges", tags=["challenges"])
