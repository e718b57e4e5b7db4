"""
Token kinds that a syntax theme can style.
"""

from __future__ import annotations
from dataclasses import dataclass, field

# Highest keyword class that still maps to a single lowercase letter (kwa..kwz)
MAX_KEYWORDS = 26

# attr, display name, css classes
_FIXED = [
    ("plain", "Default", ("hl",)),
    ("canvas", "Background", ("hl",)),
    ("number", "Number", ("hl", "num")),
    ("string", "String", ("hl", "str")),
    ("escape", "Escape", ("hl", "esc")),
    ("pre_processor", "Preprocessor", ("hl", "ppc")),
    ("string_pre_proc", "String preprocessor", ("hl", "pps")),
    ("block_comment", "Block comment", ("hl", "com")),
    ("line_comment", "Line comment", ("hl", "slc")),
    ("line_num", "Line number", ("hl", "lin")),
    ("operator", "Operator", ("hl", "opt")),
    ("interpolation", "Interpolation", ("hl", "ipl")),
]

KEYWORD_BASE = len(_FIXED)


@dataclass(frozen=True)
class TokenKind:
    """
    A styleable token category.

    Fixed kinds occupy indexes 0-11; keyword classes follow at
    ``12 + keyword_index``. Two kinds are equal when their indexes match.
    """
    index: int
    attr: str = field(default="", compare=False)

    @classmethod
    def keyword(cls, keyword_index: int) -> TokenKind:
        """Kind for the keyword class at ``keyword_index``."""
        if not 0 <= keyword_index < MAX_KEYWORDS:
            raise ValueError(
                f"Keyword index {keyword_index} out of range (0-{MAX_KEYWORDS - 1})"
            )
        return cls(KEYWORD_BASE + keyword_index)

    @classmethod
    def by_attr(cls, attr: str) -> TokenKind:
        """Fixed kind for a Theme attribute name (e.g. ``"line_comment"``)."""
        for i, (name, _, _) in enumerate(_FIXED):
            if name == attr:
                return cls(i, name)
        raise KeyError(attr)

    def __post_init__(self):
        if self.index < 0:
            raise ValueError(f"Invalid token index: {self.index}")
        if self.index < KEYWORD_BASE and not self.attr:
            object.__setattr__(self, "attr", _FIXED[self.index][0])

    @property
    def is_keyword(self) -> bool:
        return self.index >= KEYWORD_BASE

    @property
    def keyword_index(self) -> int:
        """Position in the theme keyword list, -1 for fixed kinds."""
        return self.index - KEYWORD_BASE if self.is_keyword else -1

    @property
    def name(self) -> str:
        """Human readable name."""
        if self.is_keyword:
            return f"Keyword {self.keyword_index + 1}"
        return _FIXED[self.index][1]

    @property
    def css_class(self) -> list[str]:
        """CSS classes used to render the token, outermost first."""
        if self.is_keyword:
            return ["hl", "kw" + chr(ord("a") + self.keyword_index)]
        return list(_FIXED[self.index][2])

    @property
    def css_selector(self) -> str:
        return "." + ".".join(self.css_class)

    def __repr__(self) -> str:
        if self.is_keyword:
            return f"<TokenKind keyword({self.keyword_index})>"
        return f"<TokenKind {self.attr}>"


PLAIN = TokenKind.by_attr("plain")
CANVAS = TokenKind.by_attr("canvas")
NUMBER = TokenKind.by_attr("number")
STRING = TokenKind.by_attr("string")
ESCAPE = TokenKind.by_attr("escape")
PRE_PROCESSOR = TokenKind.by_attr("pre_processor")
STRING_PRE_PROC = TokenKind.by_attr("string_pre_proc")
BLOCK_COMMENT = TokenKind.by_attr("block_comment")
LINE_COMMENT = TokenKind.by_attr("line_comment")
LINE_NUM = TokenKind.by_attr("line_num")
OPERATOR = TokenKind.by_attr("operator")
INTERPOLATION = TokenKind.by_attr("interpolation")

FIXED_KINDS: tuple[TokenKind, ...] = tuple(TokenKind(i) for i in range(KEYWORD_BASE))

# Order used by the CSS stylesheet and the HTML preview
CSS_ORDER: tuple[TokenKind, ...] = (
    CANVAS,
    PLAIN,
    NUMBER,
    STRING,
    ESCAPE,
    PRE_PROCESSOR,
    STRING_PRE_PROC,
    BLOCK_COMMENT,
    LINE_COMMENT,
    LINE_NUM,
    OPERATOR,
    INTERPOLATION,
)

# Order and key names used by the theme file format
THEME_FILE_KEYS: tuple[tuple[str, TokenKind], ...] = (
    ("Default", PLAIN),
    ("Canvas", CANVAS),
    ("Number", NUMBER),
    ("Escape", ESCAPE),
    ("String", STRING),
    ("StringPreProc", STRING_PRE_PROC),
    ("BlockComment", BLOCK_COMMENT),
    ("LineComment", LINE_COMMENT),
    ("PreProcessor", PRE_PROCESSOR),
    ("LineNum", LINE_NUM),
    ("Operator", OPERATOR),
    ("Interpolation", INTERPOLATION),
)

# Thumbnail rows; the canvas is the background so it gets no row
THUMBNAIL_ORDER: tuple[TokenKind, ...] = tuple(k for k in FIXED_KINDS if k != CANVAS)
