from decimal import Decimal

from pydantic_settings import BaseSettings

from loan_calculator.models.loan import DisplayScale, Frequency, LoanBounds, LoanTerms


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Validation bounds. Earlier revisions capped principal at 95,000 and rate at 7%.
    min_loan_amount: Decimal = Decimal("50000")
    max_loan_amount: Decimal = Decimal("950000")
    min_interest: Decimal = Decimal("5")
    max_interest: Decimal = Decimal("10")
    min_term_years: int = 5
    max_term_years: int = 30

    # Form defaults (also used by Reset)
    default_loan_amount: Decimal = Decimal("50000")
    default_interest: Decimal = Decimal("5")
    default_term_years: int = 5
    default_frequency: Frequency = Frequency.MONTHLY
    default_scale: DisplayScale = DisplayScale.YEAR

    # Storage / export
    store_path: str = "data/loan_calculator.db"
    export_dir: str = "exports"

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def loan_bounds(self) -> LoanBounds:
        return LoanBounds(
            min_principal=self.min_loan_amount,
            max_principal=self.max_loan_amount,
            min_rate_percent=self.min_interest,
            max_rate_percent=self.max_interest,
            min_term_years=self.min_term_years,
            max_term_years=self.max_term_years,
        )

    @property
    def default_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.default_loan_amount,
            annual_rate_percent=self.default_interest,
            term_years=self.default_term_years,
            frequency=self.default_frequency,
        )


settings = Settings()
