"""
Native theme records, as produced by the highlight theme parser.

The parser hands over plain structs: nullable strings, tri-state integers
for the font flags (negative = unset, 0 = false, positive = true) and a
counted array of keyword properties. Bundled and user themes are stored
as YAML dumps of the same struct.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import logging
import yaml

from qlthemes.errors import ThemeLoadError

logger = logging.getLogger(__name__)

APPEARANCE_UNDEFINED = 0
APPEARANCE_LIGHT = 1
APPEARANCE_DARK = 2


@dataclass
class NativeProperty:
    """Style of a single token kind."""
    color: Optional[str] = None
    bold: int = -1
    italic: int = -1
    underline: int = -1

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> NativeProperty:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        color = data.get("color")
        return cls(
            color=None if color is None else str(color),
            bold=_tri_state(data.get("bold")),
            italic=_tri_state(data.get("italic")),
            underline=_tri_state(data.get("underline")),
        )

    def to_dict(self) -> dict:
        """Mapping with only the set fields, flags as booleans."""
        data = {} if self.color is None else {"color": self.color}
        for name in ("bold", "italic", "underline"):
            value = getattr(self, name)
            if value >= 0:
                data[name] = value > 0
        return data


def _tri_state(value) -> int:
    """Accept ints or YAML booleans; missing means unset."""
    if value is None:
        return -1
    if isinstance(value, bool):
        return 1 if value else 0
    return int(value)


@dataclass
class NativeTheme:
    """Whole theme as delivered by the parser."""
    name: Optional[str] = None
    desc: Optional[str] = None
    path: Optional[str] = None
    appearance: int = APPEARANCE_UNDEFINED
    standalone: int = 0
    base16: int = 0

    plain: NativeProperty = field(default_factory=NativeProperty)
    canvas: NativeProperty = field(default_factory=NativeProperty)
    number: NativeProperty = field(default_factory=NativeProperty)
    string: NativeProperty = field(default_factory=NativeProperty)
    escape: NativeProperty = field(default_factory=NativeProperty)
    pre_processor: NativeProperty = field(default_factory=NativeProperty)
    string_pre_proc: NativeProperty = field(default_factory=NativeProperty)
    block_comment: NativeProperty = field(default_factory=NativeProperty)
    line_comment: NativeProperty = field(default_factory=NativeProperty)
    line_num: NativeProperty = field(default_factory=NativeProperty)
    operator: NativeProperty = field(default_factory=NativeProperty)
    interpolation: NativeProperty = field(default_factory=NativeProperty)

    # Entries may be None, the parser leaves holes for unresolved groups
    keywords: list[Optional[NativeProperty]] = field(default_factory=list)
    keyword_count: Optional[int] = None

    def __post_init__(self):
        if self.keyword_count is None:
            self.keyword_count = len(self.keywords)

    @classmethod
    def from_dict(cls, data: dict) -> NativeTheme:
        """Build from a mapping, ignoring unknown keys."""
        kwargs = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == "keywords":
                value = [
                    None if k is None else NativeProperty.from_dict(k)
                    for k in (value or [])
                ]
            elif f.type == "NativeProperty":
                value = NativeProperty.from_dict(value)
            elif f.name in ("appearance", "standalone", "base16"):
                value = _tri_state(value)
                if value < 0:
                    value = 0
            elif f.name == "keyword_count":
                value = None if value is None else int(value)
            elif value is not None:
                value = str(value)
            kwargs[f.name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        """Mapping accepted by ``from_dict``; ``path`` is left out."""
        data = {
            "name": self.name,
            "desc": self.desc,
            "appearance": self.appearance,
            "standalone": self.standalone,
            "base16": self.base16,
        }
        for f in fields(self):
            if f.type == "NativeProperty":
                data[f.name] = getattr(self, f.name).to_dict()
        data["keywords"] = [
            None if k is None else k.to_dict()
            for k in self.keywords[:self.keyword_count]
        ]
        return data

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @classmethod
    def load(cls, path: Path) -> NativeTheme:
        """Load a native theme from a YAML dump."""
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ThemeLoadError(path, str(e)) from e

        if not isinstance(data, dict):
            raise ThemeLoadError(path, "top level must be a mapping")
        try:
            native = cls.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ThemeLoadError(path, str(e)) from e

        logger.debug(f"Read native theme {native.name!r} from {path}")
        return native
