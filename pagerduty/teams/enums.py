from enum import StrEnum


class TeamRole(StrEnum):
    MANAGER = "manager"
    RESPONDER = "responder"
    OBSERVER = "observer"
