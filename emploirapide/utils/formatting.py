"""
Display formatting shared by every job rendering.

Salaries are shown in FCFA with comma thousands separators and dates in the
French day/month/year form.
"""

from datetime import datetime

NO_SALARY = "Salaire non spécifié"
NO_DATE = "Date non spécifiée"


def format_salary(salary_min: int | None, salary_max: int | None) -> str:
    """
    Render a local job salary.

    >>> format_salary(500000, 800000)
    '500,000 - 800,000 FCFA'
    >>> format_salary(500000, None)
    'À partir de 500,000 FCFA'
    """
    if salary_min and salary_max:
        return f"{salary_min:,} - {salary_max:,} FCFA"
    if salary_min:
        return f"À partir de {salary_min:,} FCFA"
    return NO_SALARY


def format_external_salary(record: dict) -> str:
    """Render the salary of a job-search provider record."""
    if not (record.get("job_salary") or record.get("job_min_salary")):
        return NO_SALARY
    low = record.get("job_min_salary") or "N/A"
    high = record.get("job_max_salary") or "N/A"
    currency = record.get("job_salary_currency") or ""
    return f"{low} - {high} {currency}".strip()


def format_date_fr(value: datetime | str | None) -> str:
    """Render a datetime (or ISO 8601 string) as dd/mm/yyyy."""
    if not value:
        return NO_DATE
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return NO_DATE
    return value.strftime("%d/%m/%Y")
