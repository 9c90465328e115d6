from dataclasses import dataclass
from typing import Any, Dict, List

JUDUL_PREFIX = "Judul:"

@dataclass
class AnimeRecordDTO:
    """
    Read-only view over one stored anime record.
    The wrapped dict is never modified, fields other than title/infoItems are opaque.
    """
    raw: Dict[str, Any]

    @property
    def title(self) -> Any:
        return self.raw.get("title") if isinstance(self.raw, dict) else None

    @property
    def info_items(self) -> List[Any]:
        items = self.raw.get("infoItems") if isinstance(self.raw, dict) else None
        return items if isinstance(items, list) else []

    def judul_aliases(self) -> List[str]:
        # "Judul: <value>" lines carry an alternate title
        aliases = []
        for item in self.info_items:
            if not isinstance(item, str) or not item.startswith(JUDUL_PREFIX):
                continue
            parts = item.split(": ")
            if len(parts) > 1:
                aliases.append(parts[1])
        return aliases

    def matches_title(self, value: str) -> bool:
        return self.title == value

    def matches_judul(self, value: str) -> bool:
        return value in self.judul_aliases()

    def to_dict(self) -> Dict[str, Any]:
        return self.raw
