"""Authoring-format codecs for patterns, constraint sets and assertions."""

from typegrade.infrastructure.serialization.assertion_codec import assertion_from_dict, assertions_from_list
from typegrade.infrastructure.serialization.constraints_codec import constraints_from_dict
from typegrade.infrastructure.serialization.pattern_codec import pattern_from_dict, pattern_to_dict

__all__ = [
    "assertion_from_dict",
    "assertions_from_list",
    "constraints_from_dict",
    "pattern_from_dict",
    "pattern_to_dict",
]
