"""Account domain service."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from ledgerbook.domain.entities import Account as AccountEntity, AccountType
from ledgerbook.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_code_not_found,
    duplicate_account_code,
)

if TYPE_CHECKING:
    from ledgerbook.database.base import Database


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        is_bank_account: bool = False,
        opening_balance: Decimal = Decimal("0"),
        is_group: bool = False,
    ) -> str:
        """Create a new account.

        Args:
            code: Unique chart code, e.g. "1101"
            name: Account name
            account_type: Top-level account type
            is_bank_account: Whether the account is a bank account
            opening_balance: Static opening balance
            is_group: Whether the account only groups other accounts

        Returns:
            Account ID

        Raises:
            ValidationError: If code or name is blank
            ConflictError: If an account with the same code exists
        """
        code = code.strip()
        name = name.strip()
        if not code:
            raise ValidationError("Account code is required")
        if not name:
            raise ValidationError("Account name is required")

        if self.db.get_account_by_code(code) is not None:
            raise ConflictError(duplicate_account_code(code))

        return self.db.create_account(
            code=code,
            name=name,
            account_type=AccountType(account_type),
            is_bank_account=is_bank_account,
            opening_balance=opening_balance,
            is_group=is_group,
        )

    def get_account(self, account_id: str) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_code(self, code: str) -> AccountEntity:
        """Get account by chart code.

        Raises:
            NotFoundError: If no account has the code
        """
        account = self.db.get_account_by_code(code)
        if account is None:
            raise NotFoundError(account_code_not_found(code))
        return account

    def list_accounts(self, account_type: Optional[AccountType] = None) -> list[AccountEntity]:
        """List accounts ordered by code.

        Args:
            account_type: Only list accounts of this type

        Returns:
            List of account entities
        """
        accounts = self.db.list_accounts()
        if account_type is not None:
            accounts = [acc for acc in accounts if acc.account_type == account_type]
        return accounts
