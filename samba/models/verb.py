"""Static verb catalog records."""

from dataclasses import dataclass
from typing import Tuple

from .entry import Example

VERB_TYPES = ("ar", "er", "ir")


@dataclass(frozen=True)
class StaticVerb:
    """A catalog verb; immutable and never persisted."""
    
    word: str
    cn: str
    type: str
    examples: Tuple[Example, ...] = ()
    
    def __post_init__(self) -> None:
        if self.type not in VERB_TYPES:
            raise ValueError(f"Unknown verb type: {self.type!r}")
