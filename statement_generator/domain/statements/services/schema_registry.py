"""Static registry of supported institutions and their statement schemas."""

import csv
import io
from typing import Dict, List

from statement_generator.core.exceptions import UnknownInstitutionError
from statement_generator.shared.utils.logging_config import get_logger

from ..models.bank_schema import BankSchema, SignConvention

logger = get_logger(__name__)

_VALUE_DATE = ("value_date", "value date")


SCHEMAS: Dict[str, BankSchema] = {
    "PNB": BankSchema(
        id="PNB",
        name="Punjab National Bank",
        transaction_fields=(
            ("date", "Transaction Date"),
            ("cheque_no", "Cheque Number"),
            ("debit", "Withdrawal"),
            ("credit", "Deposit"),
            ("description", "Narration"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "account_no", "branch_name", "branch_address", "branch_address2", "city", "pin",
            "ifsc", "micr", "name", "jt_holder1", "jt_holder2", "jt_holder3", "address",
            "nominee", "statement_from", "statement_to", "opening_balance",
        ),
        synonyms={
            "date": ("date", "txn_date", "transaction_date", "post_date"),
            "value_date": _VALUE_DATE,
            "cheque_no": ("cheque_no", "cheque_number", "chq_no"),
            "debit": ("withdrawal", "withdrawals", "debit"),
            "credit": ("deposit", "deposits", "credit"),
            "description": ("narration", "description", "particulars"),
        },
    ),
    "BANDHAN": BankSchema(
        id="BANDHAN",
        name="Bandhan Bank",
        transaction_fields=(
            ("date", "Transaction Date"),
            ("value_date", "Value Date"),
            ("description", "Description"),
            ("amount", "Amount"),
            ("dr_cr", "Dr / Cr"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "name", "father_name", "address", "address2", "city", "state", "pin",
            "account_no", "account_type", "branch_address", "customer_id", "cif", "ifsc",
            "micr", "nominee_registered", "jt_holder", "statement_from", "statement_to",
            "statement_date", "opening_balance",
        ),
        synonyms={
            "date": ("txn_date", "date"),
            "value_date": _VALUE_DATE,
            "description": ("description", "narration", "particulars"),
            "amount": ("amount",),
            "dr_cr": ("dr_cr", "dr/cr", "dr cr", "cr_dr", "type"),
        },
        sign_convention=SignConvention.INDICATOR,
    ),
    "CENTRAL": BankSchema(
        id="CENTRAL",
        name="Central Bank of India",
        transaction_fields=(
            ("date", "Post Date"),
            ("value_date", "Value Date"),
            ("branch_code", "Branch Code"),
            ("cheque_no", "Cheque Number"),
            ("description", "Account Description"),
            ("debit", "Debit"),
            ("credit", "Credit"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "name", "address", "address2", "city", "pin", "email", "account_no",
            "branch_name", "branch_address", "branch_code", "ifsc", "account_type",
            "product_type", "statement_date", "statement_from", "statement_to",
            "cleared_balance", "uncleared_amount", "drawing_power", "opening_balance",
        ),
        synonyms={
            "date": ("post_date", "txn_date", "date"),
            "value_date": _VALUE_DATE,
            "branch_code": ("branch_code",),
            "cheque_no": ("cheque_number", "cheque_no"),
            "description": ("account_description", "description", "narration"),
            "debit": ("debit", "withdrawals", "withdrawal"),
            "credit": ("credit", "deposit", "deposits"),
        },
    ),
    "ICICI": BankSchema(
        id="ICICI",
        name="ICICI Bank",
        transaction_fields=(
            ("date", "Txn Date"),
            ("value_date", "Value Date"),
            ("description", "Description"),
            ("ref_no", "Ref No./Cheque No."),
            ("debit", "Debit"),
            ("credit", "Credit"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "name", "address", "account_no", "jt_holder", "txn_date_from", "statement_from",
            "statement_to", "download_date", "branch_name", "branch_address", "account_type",
            "cust_id", "branch_code", "ifsc", "currency", "amount_from", "amount_to",
            "cheque_from", "cheque_to", "txn_remarks", "txn_type", "opening_balance",
        ),
        synonyms={
            "date": ("txn_date", "date"),
            "value_date": _VALUE_DATE,
            "description": ("description", "narration", "particulars"),
            "ref_no": ("ref_no", "cheque_no"),
            "debit": ("debit", "withdrawals", "withdrawal"),
            "credit": ("credit", "deposit", "deposits"),
        },
    ),
    "SBI": BankSchema(
        id="SBI",
        name="State Bank of India",
        transaction_fields=(
            ("date", "Txn Date"),
            ("value_date", "Value Date"),
            ("description", "Description"),
            ("ref_no", "Ref No./Cheque No."),
            ("debit", "Debit"),
            ("credit", "Credit"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "name", "father_name", "address", "address2", "city", "district", "pin", "date",
            "account_no", "account_type", "branch_name", "drawing_power", "interest_rate",
            "mod_balance", "cif", "ifsc", "micr", "nominee_registered", "opening_balance",
            "closing_balance", "statement_from", "statement_to",
        ),
        synonyms={
            "date": ("txn_date", "date"),
            "value_date": _VALUE_DATE,
            "description": ("description", "narration", "particulars"),
            "ref_no": ("ref_no", "cheque_no"),
            "debit": ("debit", "withdrawals", "withdrawal"),
            "credit": ("credit", "deposit", "deposits"),
        },
    ),
    "AXIS": BankSchema(
        id="AXIS",
        name="Axis Bank",
        transaction_fields=(
            ("date", "Tran Date"),
            ("cheque_no", "Chq No"),
            ("description", "Particulars"),
            ("debit", "Debit"),
            ("credit", "Credit"),
            ("init_br", "Init. Br"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "name", "father_name", "address", "address2", "city", "state", "pin", "customer_no", "scheme",
            "account_type", "currency", "account_no", "ifsc", "branch_name", "branch_address",
            "opening_balance", "total_debit", "total_credit", "closing_balance",
            "statement_from", "statement_to",
        ),
        synonyms={
            "date": ("txn_date", "date"),
            "value_date": _VALUE_DATE,
            "cheque_no": ("cheque_no", "ref_no"),
            "description": ("particulars", "description", "narration"),
            "debit": ("debit", "withdrawals", "withdrawal"),
            "credit": ("credit", "deposit", "deposits"),
            "init_br": ("init_br",),
        },
    ),
    "HDFC": BankSchema(
        id="HDFC",
        name="HDFC Bank",
        transaction_fields=(
            ("date", "Date"),
            ("description", "Narration"),
            ("ref_no", "Chq / Ref No"),
            ("debit", "Withdrawal Amount"),
            ("credit", "Deposit Amount"),
            ("balance", "Closing Balance"),
        ),
        account_fields=(
            "name", "address", "address2", "city", "state", "country", "pin", "branch_name",
            "branch_address", "branch_address2", "branch_city", "branch_state", "branch_phone",
            "ifsc", "micr", "od_limit", "customer_id", "pr_code", "branch_code", "account_no",
            "opening_date", "status", "nomination", "statement_from", "statement_to",
            "opening_balance", "closing_balance",
        ),
        synonyms={
            "date": ("date", "txn_date"),
            "value_date": _VALUE_DATE,
            "description": ("narration", "description"),
            "ref_no": ("ref_no", "cheque_no"),
            "debit": ("withdrawal", "withdrawals", "debit"),
            "credit": ("deposit", "deposits", "credit"),
        },
    ),
    "IDFC": BankSchema(
        id="IDFC",
        name="IDFC FIRST Bank",
        transaction_fields=(
            ("date", "Transaction Date"),
            ("value_date", "Value Date"),
            ("description", "Particulars"),
            ("cheque_no", "Cheque No."),
            ("debit", "Debit"),
            ("credit", "Credit"),
            ("balance", "Balance"),
        ),
        account_fields=(
            "customer_id", "account_no", "statement_from", "statement_to", "name",
            "father_name", "address", "city", "pin", "ifsc", "micr", "opening_date", "status",
            "account_type", "opening_balance", "total_debit", "total_credit", "closing_balance",
        ),
        synonyms={
            "date": ("date", "txn_date"),
            "value_date": _VALUE_DATE,
            "description": ("particulars", "narration", "description"),
            "cheque_no": ("cheque_no",),
            "debit": ("debit", "withdrawals", "withdrawal"),
            "credit": ("credit", "deposit", "deposits"),
        },
    ),
}


class SchemaRegistry:
    """Lookup of institution schemas by short code."""

    _schemas: Dict[str, BankSchema] = SCHEMAS

    @classmethod
    def schema_for(cls, bank_id: str) -> BankSchema:
        """
        Get the schema for an institution code.

        Args:
            bank_id: Institution code (e.g., 'PNB', 'hdfc')

        Returns:
            The institution's BankSchema

        Raises:
            UnknownInstitutionError: If the code is not registered
        """
        key = (bank_id or "").strip().upper()
        schema = cls._schemas.get(key)
        if schema is None:
            logger.warning(f"Unknown institution requested: {bank_id!r}")
            raise UnknownInstitutionError(bank_id, supported=cls.supported_banks())
        return schema

    @classmethod
    def supported_banks(cls) -> List[str]:
        """Get list of supported institution codes."""
        return list(cls._schemas.keys())

    @classmethod
    def is_supported(cls, bank_id: str) -> bool:
        return (bank_id or "").strip().upper() in cls._schemas

    @classmethod
    def csv_template(cls, bank_id: str) -> str:
        """One header row of the institution's own column names, no data rows."""
        schema = cls.schema_for(bank_id)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([schema.primary_column(name) for name in schema.field_names])
        return buffer.getvalue()
