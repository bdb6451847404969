from .base import UNAVAILABLE_FORMAT, ConversationalGrammar
from .conversational import (
    REGULAR,
    SPONTANEOUS,
    RegularGrammar,
    SpontaneousGrammar,
    select_grammar,
    validate_conversational,
)
from .script_match import script_base_names_from_dir, validate_script_match

__all__ = [
    "UNAVAILABLE_FORMAT",
    "ConversationalGrammar",
    "REGULAR",
    "SPONTANEOUS",
    "RegularGrammar",
    "SpontaneousGrammar",
    "select_grammar",
    "validate_conversational",
    "script_base_names_from_dir",
    "validate_script_match",
]
