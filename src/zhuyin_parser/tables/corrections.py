"""Auto-correction rules for the Hsu and ETen26 discrete keyboards.

On those keyboards one key types several symbols, so the discrete decoder can
only ever produce the first reading. Each rule maps the string the decoder
produces ("wrong") to the syllable the user meant ("correct"). A trailing ``*``
applies the rule to every syllable with that prefix; ``zero_middle`` rules only
apply to syllables without a middle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from zhuyin_parser.errors import SchemeTableError
from zhuyin_parser.tables.syllables import Syllable


@dataclass(frozen=True)
class CorrectionRule:
    """One ``correct <- wrong`` rewrite, optionally prefix-wildcarded."""

    correct: str
    wrong: str
    zero_middle: bool = False

    @property
    def is_prefix(self) -> bool:
        return self.correct.endswith("*")


def _rules(pairs: Iterable[tuple[str, str]], zero_middle: bool = False) -> tuple[CorrectionRule, ...]:
    """Build rules from ``(correct, wrong)`` pairs.

    Args:
        pairs: Intended and mistyped Bopomofo strings.
        zero_middle: Restrict prefix rules to syllables without a medial.

    Returns:
        Rules in input order.
    """

    return tuple(CorrectionRule(correct, wrong, zero_middle) for correct, wrong in pairs)


HSU_RULES = _rules(
    [
        ("ㄓ", "ㄐ"),
        ("ㄔ", "ㄑ"),
        ("ㄕ", "ㄒ"),
        ("ㄛ", "ㄏ"),
        ("ㄜ", "ㄍ"),
        ("ㄢ", "ㄇ"),
        ("ㄣ", "ㄋ"),
        ("ㄤ", "ㄎ"),
        ("ㄦ", "ㄌ"),
        ("ㄐㄧ*", "ㄍㄧ*"),
        ("ㄐㄩ*", "ㄍㄩ*"),
        ("ㄓㄨ*", "ㄐㄨ*"),
        ("ㄔㄨ*", "ㄑㄨ*"),
        ("ㄕㄨ*", "ㄒㄨ*"),
    ]
) + _rules(
    # ㄐㄑㄒ must be followed by ㄧ or ㄩ; without a middle they mean ㄓㄔㄕ.
    [("ㄓ*", "ㄐ*"), ("ㄔ*", "ㄑ*"), ("ㄕ*", "ㄒ*")],
    zero_middle=True,
)

ETEN26_RULES = _rules(
    [
        ("ㄓ", "ㄐ"),
        ("ㄕ", "ㄒ"),
        ("ㄡ", "ㄆ"),
        ("ㄢ", "ㄇ"),
        ("ㄣ", "ㄋ"),
        ("ㄤ", "ㄊ"),
        ("ㄥ", "ㄌ"),
        ("ㄦ", "ㄏ"),
        ("ㄓㄨ*", "ㄐㄨ*"),
        ("ㄕㄨ*", "ㄒㄨ*"),
        ("ㄑㄧ*", "ㄍㄧ*"),
        ("ㄑㄩ*", "ㄍㄩ*"),
    ]
) + _rules(
    [("ㄓ*", "ㄐ*"), ("ㄕ*", "ㄒ*")],
    zero_middle=True,
)


def _check_rule(rule: CorrectionRule) -> None:
    """Reject a rule whose wildcards do not pair up.

    Raises:
        SchemeTableError: If only one side ends with ``*`` or a ``*`` appears
            before the end.
    """

    if rule.is_prefix != rule.wrong.endswith("*") or "*" in rule.correct[:-1]:
        raise SchemeTableError(f"Malformed correction rule: {rule}")


def _apply_rule(rule: CorrectionRule, syllables: Iterable[Syllable]) -> Iterator[tuple[str, str]]:
    """Yield the ``(wrong, correct)`` pairs one rule produces.

    Args:
        rule: Exact or prefix rule.
        syllables: Content-table rows a prefix rule is matched against.

    Returns:
        Iterator of mistyped and intended Bopomofo strings.
    """

    if not rule.is_prefix:
        yield rule.wrong, rule.correct
        return

    correct_prefix = rule.correct[:-1]
    wrong_prefix = rule.wrong[:-1]
    for syllable in syllables:
        if syllable.incomplete or not syllable.bopomofo.startswith(correct_prefix):
            continue
        if rule.zero_middle and syllable.middle:
            continue
        yield wrong_prefix + syllable.bopomofo[len(correct_prefix) :], syllable.bopomofo


def expand_rules(
    rules: Iterable[CorrectionRule], syllables: Iterable[Syllable]
) -> dict[str, str]:
    """Expand correction rules into a ``wrong -> correct`` string mapping.

    Args:
        rules: Correction rules for one keyboard.
        syllables: Content-table rows the prefix rules are matched against.

    Returns:
        Mapping from the mistyped Bopomofo string to the intended syllable.

    Raises:
        SchemeTableError: If a rule is malformed or two rules rewrite the same
            string to different syllables.
    """

    syllables = tuple(syllables)
    mapping: dict[str, str] = {}
    for rule in rules:
        _check_rule(rule)
        for wrong, correct in _apply_rule(rule, syllables):
            previous = mapping.setdefault(wrong, correct)
            if previous != correct:
                raise SchemeTableError(
                    f"Conflicting corrections for {wrong!r}: {previous!r} and {correct!r}"
                )
    return mapping
