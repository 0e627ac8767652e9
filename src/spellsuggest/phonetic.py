"""
Phonetic encoding driven by an aspell-style rule table.

Each non-blank line of a rule source is ``<match> <replacement>``. The match
side is literal text plus a few markers:

  ^      rule only applies at the start of the word
  $      rule only applies when it reaches the end of the word
  -      the last matched character is context: it must be present but is
         left in place (one '-' per trailing context character)
  (ABC)  one input character that may be any of A, B or C
  0-9<>  reserved by aspell and ignored here

A replacement of ``_`` means "delete". Rules are tried in the order they
are declared and the first one that matches wins.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Union

from .config import DEFAULT_ALPHABET, DIGIT_CODE, IGNORED_RULE_KEYWORDS
from .errors import ConstructionError, FormatError

log = logging.getLogger(__name__)

_KEYWORD_ALPHABET = "alphabet"
_EMPTY_REPLACEMENT = "_"
_RESERVED = set("<>^$-0123456789")

# /* ~~~ bundled English table (a compact metaphone in aspell notation) ~~~ */
DEFAULT_RULES = """\
version 1.0
alphabet [ABCDEFGHIJKLMNOPQRSTUVWXYZ]

# word-initial clusters
^KN     N
^GN     N
^PN     N
^WR     R
^WH     W
^GH     G
^X      S
# a leading vowel is kept, everywhere else vowels vanish
^A      A
^E      A
^I      A
^O      A
^U      A
^Y      Y
^H      H
^W      W
A       _
E       _
I       _
O       _
U       _
Y       _
H       _
W       _
# doubled consonants
BB      B
CC      K
DD      T
FF      F
GG      K
LL      L
MM      M
NN      N
PP      P
RR      R
SS      S
TT      T
ZZ      S
# digraphs
CK      K
SCH     SK
CH      X
SH      X
PH      F
TH      T
MB$     M
# soft C, G
DG(EIY)-  J
C(EIY)-   S
G(EIY)-   J
# single letters
C       K
D       T
G       K
Q       K
V       F
X       KS
Z       S
"""


@dataclass(frozen=True)
class TransformationRule:
    pattern: re.Pattern
    replacement: str
    match_length: int      # input chars the rule inspects; a group counts once
    take_out: int          # input chars replaced (match_length minus context)
    start: bool = False
    end: bool = False

    def match(self, word: str, pos: int) -> bool:
        if self.start and pos > 0:
            return False
        if pos + self.match_length > len(word):
            return False
        if self.end:
            return self.pattern.fullmatch(word, pos) is not None
        return self.pattern.match(word, pos) is not None


def parse_rule(line: str) -> TransformationRule:
    """Build one rule from a comment-free, non-empty line."""
    parts = line.split()
    expr, replacement = parts[0], "".join(parts[1:])
    if replacement == _EMPTY_REPLACEMENT:
        replacement = ""

    regex: List[str] = []
    start = end = False
    take_out = match_length = 0
    i = 0
    while i < len(expr):
        ch = expr[i]
        if ch == "(":
            close = expr.find(")", i + 1)
            if close < 0:
                raise FormatError(f"unterminated group in phonetic rule: {line!r}")
            choices = [c for c in expr[i + 1:close] if c not in _RESERVED]
            if not choices:
                raise FormatError(f"empty group in phonetic rule: {line!r}")
            regex.append("[" + "".join(re.escape(c) for c in choices) + "]")
            take_out += 1
            match_length += 1
            i = close + 1
            continue
        if ch == "^":
            start = True
        elif ch == "$":
            end = True
        elif ch == "-":
            take_out -= 1
        elif ch not in _RESERVED:
            regex.append(re.escape(ch))
            take_out += 1
            match_length += 1
        i += 1

    # The encoder resumes after the replacement, so a rule has to consume input.
    if match_length == 0 or take_out <= 0:
        raise FormatError(f"phonetic rule consumes nothing: {line!r}")
    return TransformationRule(
        pattern=re.compile("".join(regex)),
        replacement=replacement,
        match_length=match_length,
        take_out=take_out,
        start=start,
        end=end,
    )


class RuleTable:
    """Ordered, immutable set of transformation rules plus the alphabet they cover."""

    def __init__(self, rules: Sequence[TransformationRule], alphabet: str = DEFAULT_ALPHABET) -> None:
        self.rules = tuple(rules)
        self.alphabet = alphabet
        self.replace_list = self._wash_alphabet(alphabet)

    def __len__(self) -> int:
        return len(self.rules)

    def encode(self, word: str) -> str:
        out = word.upper()
        pos = 0
        while pos < len(out):
            if out[pos].isdigit():
                out = out[:pos] + DIGIT_CODE + out[pos + 1:]
                pos += 1
                continue
            step = 1
            for rule in self.rules:
                if rule.match(out, pos):
                    out = out[:pos] + rule.replacement + out[pos + rule.take_out:]
                    step = len(rule.replacement)
                    break
            pos += step
        return out

    def _wash_alphabet(self, alphabet: str) -> str:
        """One representative letter per distinct single-letter code, in alphabet order."""
        seen: dict[str, str] = {}
        for letter in alphabet:
            seen.setdefault(self.encode(letter), letter)
        return "".join(seen.values())


def _strip_comment(line: str) -> str:
    hash_at = line.find("#")
    if hash_at >= 0:
        line = line[:hash_at]
    return line.strip()


def compile_rules(source: Union[str, Iterable[str]]) -> RuleTable:
    """Parse a rule table from its text or from an iterable of lines."""
    lines = source.splitlines() if isinstance(source, str) else source
    rules: List[TransformationRule] = []
    alphabet = DEFAULT_ALPHABET
    for raw in lines:
        line = _strip_comment(raw)
        if not line or line.startswith(IGNORED_RULE_KEYWORDS):
            continue
        if line.startswith(_KEYWORD_ALPHABET):
            lo, hi = line.find("["), line.rfind("]")
            if lo != -1 and hi != -1:
                alphabet = line[lo + 1:hi]
            continue
        rules.append(parse_rule(line))
    log.debug("Compiled %d phonetic rules (alphabet=%s)", len(rules), alphabet)
    return RuleTable(rules, alphabet)


@lru_cache(maxsize=1)
def default_rules() -> RuleTable:
    return compile_rules(DEFAULT_RULES)


def load_rules(path: Optional[str] = None) -> RuleTable:
    """Rule table from `path`, or the bundled English table when no path is given."""
    if path is None:
        return default_rules()
    try:
        with open(path, "r", encoding="utf-8") as f:
            table = compile_rules(f)
    except FileNotFoundError as e:
        log.error("Phonetic rule file not found: %s", path)
        raise ConstructionError(f"phonetic rule file not found: {path}") from e
    log.info("Loaded %d phonetic rules from %s", len(table), path)
    return table
