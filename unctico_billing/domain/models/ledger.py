"""Domain models for income and expense ledger entries."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from unctico_billing.domain.models.billing import PaymentMethod


class IncomeCategory(str, Enum):
    MASSAGE_SERVICES = "Massage Services"
    THERAPEUTIC_MASSAGE = "Therapeutic Massage"
    DEEP_TISSUE = "Deep Tissue"
    PRENATAL_MASSAGE = "Prenatal Massage"
    SPORTS_MASSAGE = "Sports Massage"
    SPECIALTY_SERVICES = "Specialty Services"
    PRODUCT_SALES = "Product Sales"
    GIFT_CERTIFICATES = "Gift Certificates"
    RETAIL_PRODUCTS = "Retail Products"
    TIPS = "Tips"
    CANCELLATION_FEES = "Cancellation Fees"
    NO_SHOW_FEES = "No-Show Fees"
    WORKSHOPS = "Workshops & Classes"
    CONSULTATIONS = "Consultations"
    OTHER = "Other Income"

    @property
    def default_taxable(self) -> bool:
        return True


class ExpenseCategory(str, Enum):
    RENT = "Rent"
    UTILITIES = "Utilities"
    INTERNET = "Internet & Phone"
    CLEANING = "Cleaning & Maintenance"
    OFFICE_SUPPLIES = "Office Supplies"
    MASSAGE_SUPPLIES = "Massage Supplies"
    LINENS = "Linens & Laundry"
    EQUIPMENT = "Equipment"
    INSURANCE = "Insurance"
    LICENSING_FEES = "Licensing & Fees"
    PROFESSIONAL_DEVELOPMENT = "Professional Development"
    CONTINUING_EDUCATION = "Continuing Education"
    MARKETING = "Marketing & Advertising"
    WEBSITE = "Website & Software"
    BOOKKEEPING = "Bookkeeping & Accounting"
    LEGAL = "Legal Fees"
    MILEAGE = "Mileage"
    PARKING = "Parking"
    TRAVEL = "Travel"
    MEALS = "Meals & Entertainment"
    GIFTS = "Client Gifts"
    DONATIONS = "Donations"
    REFUNDS = "Refunds"
    OTHER = "Other"

    @property
    def default_deductible(self) -> bool:
        # Donations are personal rather than business deductions.
        return self != ExpenseCategory.DONATIONS


@dataclass(frozen=True)
class IncomeRecord:
    """Money earned by the practice."""

    id: str
    date: date
    amount: Decimal
    category: IncomeCategory
    description: str
    payment_method: PaymentMethod
    source: str = ""
    is_taxable: bool = True
    is_automatic: bool = False
    client_id: str | None = None
    invoice_id: str | None = None
    payment_id: str | None = None


@dataclass(frozen=True)
class ExpenseRecord:
    """Money spent by the practice."""

    id: str
    date: date
    amount: Decimal
    category: ExpenseCategory
    description: str
    payment_method: PaymentMethod
    vendor: str = ""
    is_tax_deductible: bool = True
    has_receipt: bool = False
    is_automatic: bool = False


__all__ = [
    "IncomeCategory",
    "ExpenseCategory",
    "IncomeRecord",
    "ExpenseRecord",
]
