from __future__ import annotations

RAWEDIT_VERSION = "0.2.0"
RAWEDIT_TAB_STOP = 8
RAWEDIT_QUERY_LEN = 256
RAWEDIT_QUIT_TIMES = 3
RAWEDIT_MESSAGE_TIMEOUT = 5

# Syntax highlight classes.
HL_NORMAL = 0
HL_COMMENT = 1
HL_MLCOMMENT = 2
HL_KEYWORD1 = 3
HL_KEYWORD2 = 4
HL_STRING = 5
HL_NUMBER = 6
HL_MATCH = 7

HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

SEPARATORS = ",.()+-/*=~%<>[];"


def ctrl(ch: str) -> int:
    return ord(ch.upper()) & 0x1F


# Key codes. Plain bytes decode to themselves; named keys live above 1000.
CTRL_F = ctrl("f")
CTRL_G = ctrl("g")
CTRL_H = ctrl("h")
TAB = 9
CTRL_L = ctrl("l")
ENTER = 13
CTRL_Q = ctrl("q")
CTRL_S = ctrl("s")
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
CTRL_ARROW_LEFT = 1004
CTRL_ARROW_RIGHT = 1005
SHIFT_ARROW_LEFT = 1006
SHIFT_ARROW_RIGHT = 1007
SHIFT_ARROW_UP = 1008
SHIFT_ARROW_DOWN = 1009
DEL_KEY = 1010
HOME_KEY = 1011
END_KEY = 1012
PAGE_UP = 1013
PAGE_DOWN = 1014

KEY_NAMES = {
    ARROW_LEFT: "ARROW_LEFT",
    ARROW_RIGHT: "ARROW_RIGHT",
    ARROW_UP: "ARROW_UP",
    ARROW_DOWN: "ARROW_DOWN",
    CTRL_ARROW_LEFT: "CTRL_ARROW_LEFT",
    CTRL_ARROW_RIGHT: "CTRL_ARROW_RIGHT",
    SHIFT_ARROW_LEFT: "SHIFT_ARROW_LEFT",
    SHIFT_ARROW_RIGHT: "SHIFT_ARROW_RIGHT",
    SHIFT_ARROW_UP: "SHIFT_ARROW_UP",
    SHIFT_ARROW_DOWN: "SHIFT_ARROW_DOWN",
    DEL_KEY: "DEL",
    HOME_KEY: "HOME",
    END_KEY: "END",
    PAGE_UP: "PAGE_UP",
    PAGE_DOWN: "PAGE_DOWN",
    ESC: "ESC",
    ENTER: "ENTER",
    BACKSPACE: "BACKSPACE",
    TAB: "TAB",
}

# Escape sequence tables used by the input decoder.
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_MODIFIED_MAP = {
    (ord("5"), ord("C")): CTRL_ARROW_RIGHT,
    (ord("5"), ord("D")): CTRL_ARROW_LEFT,
    (ord("2"), ord("A")): SHIFT_ARROW_UP,
    (ord("2"), ord("B")): SHIFT_ARROW_DOWN,
    (ord("2"), ord("C")): SHIFT_ARROW_RIGHT,
    (ord("2"), ord("D")): SHIFT_ARROW_LEFT,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

SHIFT_ARROWS = (SHIFT_ARROW_LEFT, SHIFT_ARROW_RIGHT, SHIFT_ARROW_UP, SHIFT_ARROW_DOWN)

# ANSI output.
ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_RESET = "\x1b[m"
ANSI_DEFAULT_FG = "\x1b[39m"

C_HL_EXTENSIONS = (".c", ".h", ".cpp", ".hpp", ".cc")
C_HL_KEYWORDS = (
    # C keywords.
    "auto",
    "break",
    "case",
    "continue",
    "default",
    "do",
    "else",
    "enum",
    "extern",
    "for",
    "goto",
    "if",
    "register",
    "return",
    "sizeof",
    "static",
    "struct",
    "switch",
    "typedef",
    "union",
    "volatile",
    "while",
    "NULL",
    # C++ keywords.
    "class",
    "constexpr",
    "delete",
    "explicit",
    "false",
    "friend",
    "inline",
    "namespace",
    "new",
    "nullptr",
    "operator",
    "private",
    "protected",
    "public",
    "template",
    "this",
    "throw",
    "true",
    "try",
    "typename",
    "virtual",
    # C types (secondary class).
    "int|",
    "long|",
    "double|",
    "float|",
    "char|",
    "unsigned|",
    "signed|",
    "void|",
    "short|",
    "const|",
    "bool|",
)

PY_HL_EXTENSIONS = (".py", ".pyw")
PY_HL_KEYWORDS = (
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
    # Builtin constants and types (secondary class).
    "None|",
    "True|",
    "False|",
    "self|",
    "int|",
    "str|",
    "bytes|",
    "float|",
    "bool|",
    "list|",
    "dict|",
    "tuple|",
    "set|",
)
