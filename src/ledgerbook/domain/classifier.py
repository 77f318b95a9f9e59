"""Account classification for financial reports.

Classification is an ordered chain of rules: the first rule whose predicate
matches an account decides its bucket. Code-range rules come first, keyword
and account-type fallbacks second.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ledgerbook.domain.config import FIXED_ASSET_KEYWORDS, LONG_TERM_LIABILITY_KEYWORDS
from ledgerbook.domain.entities import Account, AccountType, Classification

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationRule:
    """Predicate paired with the classification it assigns."""

    name: str
    predicate: Callable[[Account], bool]
    classification: Classification

    def matches(self, account: Account) -> bool:
        return self.predicate(account)


def code_starts_with(*prefixes: str) -> Callable[[Account], bool]:
    """Match accounts whose code begins with one of the prefixes."""

    def predicate(account: Account) -> bool:
        code = (account.code or "").strip()
        return code.startswith(prefixes)

    return predicate


def name_contains(*keywords: str) -> Callable[[Account], bool]:
    """Match accounts whose name contains a keyword, case-insensitively."""

    def predicate(account: Account) -> bool:
        name = (account.name or "").lower()
        return any(keyword in name for keyword in keywords)

    return predicate


def of_type(account_type: AccountType) -> Callable[[Account], bool]:
    """Match accounts of the given account type."""

    def predicate(account: Account) -> bool:
        return account.account_type == account_type

    return predicate


def all_of(*predicates: Callable[[Account], bool]) -> Callable[[Account], bool]:
    def predicate(account: Account) -> bool:
        return all(p(account) for p in predicates)

    return predicate


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    # 1xxx is treated as current regardless of name; fixed assets are not
    # separated by code range.
    ClassificationRule("asset-code", code_starts_with("1"), Classification.CURRENT_ASSET),
    ClassificationRule(
        "liability-code", code_starts_with("2"), Classification.CURRENT_LIABILITY
    ),
    ClassificationRule(
        "retained-earnings-code",
        all_of(code_starts_with("3"), name_contains("retained")),
        Classification.RETAINED_EARNINGS,
    ),
    ClassificationRule("equity-code", code_starts_with("3"), Classification.CAPITAL),
    ClassificationRule("revenue-code", code_starts_with("4"), Classification.REVENUE),
    ClassificationRule(
        "expense-code", code_starts_with("5", "6", "7"), Classification.EXPENSE
    ),
    ClassificationRule(
        "fixed-asset-keyword",
        all_of(of_type(AccountType.ASSET), name_contains(*FIXED_ASSET_KEYWORDS)),
        Classification.FIXED_ASSET,
    ),
    ClassificationRule("asset-type", of_type(AccountType.ASSET), Classification.OTHER_ASSET),
    ClassificationRule(
        "long-term-liability-keyword",
        all_of(
            of_type(AccountType.LIABILITY), name_contains(*LONG_TERM_LIABILITY_KEYWORDS)
        ),
        Classification.LONG_TERM_LIABILITY,
    ),
    ClassificationRule(
        "liability-type", of_type(AccountType.LIABILITY), Classification.CURRENT_LIABILITY
    ),
    ClassificationRule(
        "retained-earnings-keyword",
        all_of(of_type(AccountType.EQUITY), name_contains("retained")),
        Classification.RETAINED_EARNINGS,
    ),
    ClassificationRule("equity-type", of_type(AccountType.EQUITY), Classification.CAPITAL),
    ClassificationRule("income-type", of_type(AccountType.INCOME), Classification.REVENUE),
    ClassificationRule("expense-type", of_type(AccountType.EXPENSE), Classification.EXPENSE),
)


class AccountClassifier:
    """Assigns accounts to report buckets using an ordered rule chain."""

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES):
        """Initialize classifier.

        Args:
            rules: Rules evaluated in order; the first match wins
        """
        self.rules = tuple(rules)

    def classify(self, account: Account) -> Optional[Classification]:
        """Return the bucket for an account, or None when no rule matches."""
        rule = self.matching_rule(account)
        if rule is None:
            logger.debug("No classification rule matched account %s (%s)", account.code, account.name)
            return None
        return rule.classification

    def matching_rule(self, account: Account) -> Optional[ClassificationRule]:
        """Return the first rule matching the account."""
        for rule in self.rules:
            if rule.matches(account):
                return rule
        return None
