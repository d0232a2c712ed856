"""Enumerations for domain models."""

from enum import Enum


class SportType(str, Enum):
    """Sports an event can belong to."""

    FOOTBALL = "FOOTBALL"
    BASKETBALL = "BASKETBALL"
    TENNIS = "TENNIS"
    HOCKEY = "HOCKEY"
    VOLLEYBALL = "VOLLEYBALL"
    BASEBALL = "BASEBALL"


class EventStatus(str, Enum):
    """Sport event lifecycle states."""

    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"
