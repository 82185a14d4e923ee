"""
Dictionary Data Models
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class MeaningEntry:
    part_of_speech: str
    definition: str
    example: Optional[str] = None


@dataclass
class WordMeaning:
    word: str
    phonetic: Optional[str] = None
    meanings: List[MeaningEntry] = field(default_factory=list)
