"""Team entries: the hacks a team has entered.  A hack is entered by one team at most."""

from .reference_list_service import ReferenceListService


class TeamEntryService(ReferenceListService):
    owner_type = "teams"
    target_type = "hacks"
    table = "team_entries"
    owner_column = "team_id"
    target_column = "hack_id"
    exclusive = True
    event_prefix = "teams_update_entries"
    event_item = "entry"

    already_listed_detail = "One or more hacks are already entries of this team"
    not_found_detail = "One or more of the specified hacks could not be found"
    taken_detail = "One or more of the specified hacks are already entered by a team"
