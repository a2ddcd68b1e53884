"""Tests for salary and date formatting."""

from datetime import datetime

from emploirapide.utils.formatting import format_date_fr, format_external_salary, format_salary


class TestFormatSalary:
    def test_range(self):
        assert format_salary(500000, 800000) == "500,000 - 800,000 FCFA"

    def test_minimum_only(self):
        assert format_salary(500000, None) == "À partir de 500,000 FCFA"

    def test_not_specified(self):
        assert format_salary(None, None) == "Salaire non spécifié"

    def test_maximum_only_is_not_specified(self):
        assert format_salary(None, 800000) == "Salaire non spécifié"


class TestFormatExternalSalary:
    def test_range_with_currency(self):
        record = {"job_min_salary": 40000, "job_max_salary": 60000, "job_salary_currency": "USD"}
        assert format_external_salary(record) == "40000 - 60000 USD"

    def test_missing_bounds(self):
        assert format_external_salary({"job_salary": "negotiable"}) == "N/A - N/A"

    def test_no_salary(self):
        assert format_external_salary({}) == "Salaire non spécifié"


class TestFormatDate:
    def test_datetime(self):
        assert format_date_fr(datetime(2026, 3, 7, 10, 30)) == "07/03/2026"

    def test_iso_string(self):
        assert format_date_fr("2026-01-15T08:00:00.000Z") == "15/01/2026"

    def test_missing_or_invalid(self):
        assert format_date_fr(None) == "Date non spécifiée"
        assert format_date_fr("hier") == "Date non spécifiée"
