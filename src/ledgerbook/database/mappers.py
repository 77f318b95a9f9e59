"""Mapper functions to convert stored records into domain entities.

Two sources are mapped here: SQLAlchemy rows, which are already typed by the
schema, and loosely-typed documents (plain dictionaries, e.g. exported from a
document store). Documents are parsed leniently: missing optional fields fall
back to defaults, malformed numbers are logged and treated as zero.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    LedgerEntry as ORMLedgerEntry,
    Transaction as ORMTransaction,
)
from ledgerbook.utils.amount_parser import to_decimal
from ledgerbook.utils.date_parser import parse_date

logger = logging.getLogger(__name__)

# Spellings accepted for account types besides the enum values
ACCOUNT_TYPE_ALIASES = {"REVENUE": domain.AccountType.INCOME}


def _decimal_or_none(value) -> Optional[Decimal]:
    return None if value is None else Decimal(value)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=str(orm_account.id),
        code=orm_account.code,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        is_bank_account=bool(orm_account.is_bank_account),
        opening_balance=Decimal(orm_account.opening_balance or 0),
        is_group=bool(orm_account.is_group),
        currency=orm_account.currency or "INR",
    )


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.Entry:
    """Convert SQLAlchemy LedgerEntry model to domain Entry entity."""
    return domain.Entry(
        account_id=str(orm_entry.account_id),
        debit=Decimal(orm_entry.debit or 0),
        credit=Decimal(orm_entry.credit or 0),
        description=orm_entry.description,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    gst_details = None
    if orm_transaction.gst_type is not None:
        gst_details = domain.GSTDetails(
            taxable_amount=Decimal(orm_transaction.gst_taxable_amount or 0),
            gst_type=domain.GSTType(orm_transaction.gst_type),
            gst_rate=Decimal(orm_transaction.gst_rate or 0),
            total_gst=Decimal(orm_transaction.total_gst or 0),
            cgst_amount=_decimal_or_none(orm_transaction.cgst_amount),
            sgst_amount=_decimal_or_none(orm_transaction.sgst_amount),
            igst_amount=_decimal_or_none(orm_transaction.igst_amount),
        )

    tds_details = None
    if orm_transaction.tds_section is not None:
        tds_details = domain.TDSDetails(
            section=orm_transaction.tds_section,
            rate=Decimal(orm_transaction.tds_rate or 0),
            pan_provided=bool(orm_transaction.tds_pan_provided),
            tds_amount=Decimal(orm_transaction.tds_amount or 0),
            amount=Decimal(orm_transaction.tds_base_amount or 0),
            pan_number=orm_transaction.tds_pan_number,
        )

    return domain.Transaction(
        id=str(orm_transaction.id),
        type=domain.TransactionType(orm_transaction.transaction_type),
        status=domain.TransactionStatus(orm_transaction.status),
        date=orm_transaction.date,
        entries=tuple(entry_to_domain(entry) for entry in orm_transaction.entries),
        total_amount=Decimal(orm_transaction.total_amount or 0),
        transaction_number=orm_transaction.transaction_number,
        description=orm_transaction.description,
        gst_details=gst_details,
        tds_details=tds_details,
    )


# Document mapping


def _field(document: Mapping[str, Any], *names: str, default=None):
    """First present value among alternative key spellings."""
    for name in names:
        if name in document and document[name] is not None:
            return document[name]
    return default


def _amount(value, field_name: str) -> Decimal:
    if value is None or value == "":
        return domain.ZERO
    try:
        return to_decimal(value)
    except ValueError:
        logger.warning("Malformed amount %r for %s, treating as 0", value, field_name)
        return domain.ZERO


def _optional_amount(value, field_name: str) -> Optional[Decimal]:
    return None if value is None else _amount(value, field_name)


def _date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_date(str(value))
    except ValueError:
        logger.warning("Malformed date %r, transaction will be left out of reports", value)
        return None


def account_type_from_document(value: Any) -> domain.AccountType:
    """Parse an account type, accepting "REVENUE" for INCOME.

    Raises:
        ValueError: If the type is not recognised
    """
    text = str(value or "").strip().upper()
    if text in ACCOUNT_TYPE_ALIASES:
        return ACCOUNT_TYPE_ALIASES[text]
    return domain.AccountType(text)


def account_from_document(document: Mapping[str, Any]) -> domain.Account:
    """Convert an account document to domain Account entity.

    Raises:
        ValueError: If the document has no id or an unknown account type
    """
    account_id = _field(document, "id", "_id")
    if account_id is None:
        raise ValueError("Account document has no id")
    return domain.Account(
        id=str(account_id),
        code=str(_field(document, "code", default="")),
        name=str(_field(document, "name", default="")),
        account_type=account_type_from_document(
            _field(document, "account_type", "accountType", "type")
        ),
        is_bank_account=bool(_field(document, "is_bank_account", "isBankAccount", default=False)),
        opening_balance=_amount(
            _field(document, "opening_balance", "openingBalance"), "opening_balance"
        ),
        is_group=bool(_field(document, "is_group", "isGroup", default=False)),
        currency=str(_field(document, "currency", default="INR")),
    )


def entry_from_document(document: Mapping[str, Any]) -> domain.Entry:
    """Convert a ledger entry document to domain Entry entity."""
    return domain.Entry(
        account_id=str(_field(document, "account_id", "accountId", default="")),
        debit=_amount(_field(document, "debit"), "debit"),
        credit=_amount(_field(document, "credit"), "credit"),
        description=_field(document, "description"),
    )


def gst_details_from_document(document: Mapping[str, Any]) -> domain.GSTDetails:
    """Convert a GST details document to domain GSTDetails entity."""
    return domain.GSTDetails(
        taxable_amount=_amount(
            _field(document, "taxable_amount", "taxableAmount"), "taxable_amount"
        ),
        gst_type=domain.GSTType(str(_field(document, "gst_type", "gstType")).upper()),
        gst_rate=_amount(_field(document, "gst_rate", "gstRate"), "gst_rate"),
        total_gst=_amount(_field(document, "total_gst", "totalGST"), "total_gst"),
        cgst_amount=_optional_amount(_field(document, "cgst_amount", "cgstAmount"), "cgst"),
        sgst_amount=_optional_amount(_field(document, "sgst_amount", "sgstAmount"), "sgst"),
        igst_amount=_optional_amount(_field(document, "igst_amount", "igstAmount"), "igst"),
    )


def tds_details_from_document(document: Mapping[str, Any]) -> domain.TDSDetails:
    """Convert a TDS details document to domain TDSDetails entity."""
    pan_number = _field(document, "pan_number", "panNumber")
    return domain.TDSDetails(
        section=str(_field(document, "section", default="")),
        rate=_amount(_field(document, "rate", "tdsRate"), "tds_rate"),
        pan_provided=bool(_field(document, "pan_provided", "panProvided", default=bool(pan_number))),
        tds_amount=_amount(_field(document, "tds_amount", "tdsAmount"), "tds_amount"),
        amount=_amount(_field(document, "amount"), "tds_base_amount"),
        pan_number=pan_number,
    )


def _transaction_type(value, transaction_id: str) -> domain.TransactionType:
    text = str(value or "").strip().upper()
    try:
        return domain.TransactionType(text)
    except ValueError:
        logger.warning(
            "Unknown type %r for transaction %s, treating as OTHER", value, transaction_id
        )
        return domain.TransactionType.OTHER


def _transaction_status(value, transaction_id: str) -> domain.TransactionStatus:
    text = str(value or "DRAFT").strip().upper()
    try:
        return domain.TransactionStatus(text)
    except ValueError:
        logger.warning(
            "Unknown status %r for transaction %s, treating as DRAFT", value, transaction_id
        )
        return domain.TransactionStatus.DRAFT


def transaction_from_document(document: Mapping[str, Any]) -> domain.Transaction:
    """Convert a transaction document to domain Transaction entity.

    Raises:
        ValueError: If the document has no id
    """
    transaction_id = _field(document, "id", "_id")
    if transaction_id is None:
        raise ValueError("Transaction document has no id")

    entries = _field(document, "entries", "ledgerEntries", default=())
    gst = _field(document, "gst_details", "gstDetails")
    tds = _field(document, "tds_details", "tdsDetails")

    return domain.Transaction(
        id=str(transaction_id),
        type=_transaction_type(_field(document, "type", "transactionType"), transaction_id),
        status=_transaction_status(_field(document, "status"), transaction_id),
        date=_date(_field(document, "date", "transactionDate")),
        entries=tuple(entry_from_document(entry) for entry in entries),
        total_amount=_amount(_field(document, "total_amount", "totalAmount"), "total_amount"),
        transaction_number=_field(document, "transaction_number", "transactionNumber"),
        description=_field(document, "description"),
        gst_details=gst_details_from_document(gst) if gst else None,
        tds_details=tds_details_from_document(tds) if tds else None,
    )
