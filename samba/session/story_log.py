"""Bounded history of generated stories."""

from typing import Iterator, List, Optional

from ..config import Config
from ..models import Story


class StoryLog:
    """Stories, most recent first, capped at ``limit``. No deduplication."""
    
    def __init__(self, stories: Optional[List[Story]] = None, limit: int = Config.STORY_LIMIT):
        self.limit = limit
        self._stories: List[Story] = list(stories or [])[:limit]
    
    def append(self, story: Story) -> None:
        self._stories.insert(0, story)
        del self._stories[self.limit:]
    
    @property
    def stories(self) -> List[Story]:
        return list(self._stories)
    
    def __len__(self) -> int:
        return len(self._stories)
    
    def __iter__(self) -> Iterator[Story]:
        return iter(list(self._stories))
