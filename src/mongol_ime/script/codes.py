"""Codepoints of the Mongolian block and the controls the engine handles.

Most of these are invisible or render only inside a shaped word, so they
are spelled as ``chr(0x....)`` rather than literals.
"""

from __future__ import annotations

# Mongolian block: U+1800 - U+18AF
MONGOLIAN_BLOCK_START = 0x1800
MONGOLIAN_BLOCK_END = 0x18AF

# --- Punctuation ---
BIRGA = chr(0x1800)
MONGOLIAN_ELLIPSIS = chr(0x1801)
MONGOLIAN_COMMA = chr(0x1802)
MONGOLIAN_FULL_STOP = chr(0x1803)
MONGOLIAN_COLON = chr(0x1804)
MONGOLIAN_FOUR_DOTS = chr(0x1805)
MONGOLIAN_NIRUGU = chr(0x180A)

# --- Controls ---
FVS1 = chr(0x180B)
FVS2 = chr(0x180C)
FVS3 = chr(0x180D)
MVS = chr(0x180E)
ZWNJ = chr(0x200C)
ZWJ = chr(0x200D)
NNBS = chr(0x202F)
SPACE = " "

# --- Vowels ---
A = chr(0x1820)
E = chr(0x1821)
I = chr(0x1822)  # noqa: E741
O = chr(0x1823)
U = chr(0x1824)
OE = chr(0x1825)
UE = chr(0x1826)
EE = chr(0x1827)

# --- Consonants ---
NA = chr(0x1828)
ANG = chr(0x1829)
BA = chr(0x182A)
PA = chr(0x182B)
QA = chr(0x182C)
GA = chr(0x182D)
MA = chr(0x182E)
LA = chr(0x182F)
SA = chr(0x1830)
SHA = chr(0x1831)
TA = chr(0x1832)
DA = chr(0x1833)
CHA = chr(0x1834)
JA = chr(0x1835)
YA = chr(0x1836)
RA = chr(0x1837)
WA = chr(0x1838)
FA = chr(0x1839)
KA = chr(0x183A)
KHA = chr(0x183B)
TSA = chr(0x183C)
ZA = chr(0x183D)
HAA = chr(0x183E)
ZRA = chr(0x183F)
LHA = chr(0x1840)
ZHI = chr(0x1841)
CHI = chr(0x1842)

# --- Shared punctuation used in vertical Mongolian text ---
MIDDLE_DOT = chr(0x00B7)
REFERENCE_MARK = chr(0x203B)
DOUBLE_EXCLAMATION_MARK = chr(0x203C)
DOUBLE_QUESTION_MARK = chr(0x2047)
QUESTION_EXCLAMATION_MARK = chr(0x2048)
EXCLAMATION_QUESTION_MARK = chr(0x2049)
# Vertical presentation forms, inclusive range.
VERTICAL_COMMA = chr(0xFE10)
VERTICAL_RIGHT_SQUARE_BRACKET = chr(0xFE48)

VOWELS = frozenset({A, E, I, O, U, OE, UE, EE})
FREE_VARIATION_SELECTORS = frozenset({FVS1, FVS2, FVS3})
JOINERS = frozenset({ZWJ, ZWNJ})
INVISIBLE_CONTROLS = FREE_VARIATION_SELECTORS | JOINERS | {MVS}
SPACES = frozenset({SPACE, NNBS})

# Consonants after which a repeated A/E is read as "insert MVS".
MVS_PRECEDING_CONSONANTS = frozenset({NA, QA, GA, MA, LA, YA, JA, RA, WA})

SPACED_PUNCTUATION = frozenset(
    {
        MONGOLIAN_ELLIPSIS,
        MONGOLIAN_COMMA,
        MONGOLIAN_FULL_STOP,
        MONGOLIAN_COLON,
        MONGOLIAN_FOUR_DOTS,
        DOUBLE_EXCLAMATION_MARK,
        DOUBLE_QUESTION_MARK,
        QUESTION_EXCLAMATION_MARK,
        EXCLAMATION_QUESTION_MARK,
        MIDDLE_DOT,
        REFERENCE_MARK,
    }
)
