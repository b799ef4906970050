"""Team membership: ``POST``/``DELETE /teams/:id/members``.

A user belongs to at most one team across the whole collection.
"""

from .reference_list_service import ReferenceListService


class TeamMemberService(ReferenceListService):
    owner_type = "teams"
    target_type = "users"
    table = "team_members"
    owner_column = "team_id"
    target_column = "user_id"
    exclusive = True
    event_prefix = "teams_update_members"
    event_item = "member"

    already_listed_detail = "One or more users are already members of this team"
    not_found_detail = "One or more of the specified users could not be found"
    taken_detail = "One or more of the specified users are already in a team"
