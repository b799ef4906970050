"""Challenges a hack is competing in.  Any number of hacks may enter one challenge."""

from .reference_list_service import ReferenceListService


class HackChallengeService(ReferenceListService):
    owner_type = "hacks"
    target_type = "challenges"
    table = "hack_challenges"
    owner_column = "hack_id"
    target_column = "challenge_id"
    event_prefix = "hacks_update_challenges"
    event_item = "challenge"

    already_listed_detail = "One or more challenges are already entered by this hack"
    not_found_detail = "One or more of the specified challenges could not be found"
