# models.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Session:
    id: str
    title: str
    preview: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Session":
        return cls(
            id=str(data.get("id", "")),
            title=str(data.get("title", "")),
            preview=data.get("preview"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {"id": self.id, "title": self.title}
        if self.preview is not None:
            out["preview"] = self.preview
        return out


@dataclass
class Message:
    question: Optional[str]
    response: str
    timestamp: int
    table: List[Dict[str, Any]] = field(default_factory=list)
    id: Optional[str] = None
    role: Optional[str] = None
    feedback: Optional[str] = None
    feedbackAt: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        table = data.get("table")
        return cls(
            id=data.get("id"),
            role=data.get("role"),
            question=data.get("question"),
            response=data.get("response", ""),
            table=list(table) if isinstance(table, list) else [],
            timestamp=data.get("timestamp"),
            feedback=data.get("feedback"),
            feedbackAt=data.get("feedbackAt"),
        )

    def matches_timestamp(self, target: float) -> bool:
        try:
            return float(self.timestamp) == float(target)
        except (TypeError, ValueError, OverflowError):
            return False

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        if self.role is not None:
            out["role"] = self.role
        out.update({
            "question": self.question,
            "response": self.response,
            "table": self.table,
            "timestamp": self.timestamp,
        })
        if self.feedback is not None:
            out["feedback"] = self.feedback
        if self.feedbackAt is not None:
            out["feedbackAt"] = self.feedbackAt
        return out
