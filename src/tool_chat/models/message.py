ROLES = ("system", "user", "assistant")


class Message:
    """One role-tagged entry of a conversation transcript."""

    def __init__(self, role: str, content: str):
        if role not in ROLES:
            raise ValueError(f"Unknown message role: {role!r}")
        self.role = role
        self.content = content

    @staticmethod
    def _extract_content(content) -> str:
        """Join fragmented content (strings or ``{"text": ...}`` parts) into one string."""
        if isinstance(content, list):
            parts = []
            for item in content:
                if isinstance(item, str):
                    parts.append(item)
                elif isinstance(item, dict):
                    parts.append(item.get("text") or "")
                else:
                    parts.append(getattr(item, "text", None) or "")
            return "".join(parts)
        if content is None:
            return ""
        return str(content)

    def to_api_format(self) -> dict:
        """Convert to API-compatible format"""
        return {"role": self.role, "content": self.content}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self.role == other.role and self.content == other.content

    def __repr__(self) -> str:
        preview = self.content if len(self.content) <= 40 else self.content[:37] + "..."
        return f"Message({self.role!r}, {preview!r})"
