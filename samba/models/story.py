"""Generated stories and chat turns."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .entry import new_id, now_ms


@dataclass
class Story:
    """A short Portuguese story composed from saved vocabulary."""
    
    id: str
    timestamp: int
    words_used: List[str] = field(default_factory=list)
    pt_story: str = ""
    cn_translation: str = ""
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any], words_used: Optional[List[str]] = None) -> "Story":
        """
        Build a story from a JSON object.
        
        Args:
            data: Decoded JSON object (a stored story or a backend reply)
            words_used: Terms the story was composed from; overrides the
                value carried by ``data`` when given
                
        Raises:
            ValueError: If the object has no story text
        """
        if not isinstance(data, dict):
            raise ValueError("Story must be a JSON object")
        pt_story = data.get("pt_story")
        if not isinstance(pt_story, str) or not pt_story.strip():
            raise ValueError("Story has no pt_story")
        
        if words_used is None:
            words_used = data.get("words_used") or []
            if not isinstance(words_used, list):
                raise ValueError("'words_used' must be a list")
        
        story_id = data.get("id")
        timestamp = data.get("timestamp")
        return cls(
            id=str(story_id) if story_id not in (None, "") else new_id(),
            timestamp=int(timestamp) if timestamp is not None else now_ms(),
            words_used=[str(w) for w in words_used],
            pt_story=pt_story,
            cn_translation=str(data.get("cn_translation") or ""),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "words_used": list(self.words_used),
            "pt_story": self.pt_story,
            "cn_translation": self.cn_translation,
        }


@dataclass
class ChatMessage:
    role: str  # "user" or "model"
    text: str
    
    def to_api(self) -> Dict[str, Any]:
        """Turn shape expected by the chat backend."""
        return {"role": self.role, "parts": [{"text": self.text}]}
